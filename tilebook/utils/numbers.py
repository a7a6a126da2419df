import math
import re

_DIGITS = re.compile(r"\D")

def to_number(value) -> float:
    """Coerce a stored or submitted amount to float, 0 when missing or not finite."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number

def bill_number_key(bill_no) -> int:
    """Numeric part of a bill number ("2025/014" -> 2025014), 0 if it has no digits."""
    if not bill_no:
        return 0
    digits = _DIGITS.sub("", str(bill_no))
    return int(digits) if digits else 0

def has_bill_number(bill_no) -> bool:
    """True when the bill number carries digits, so it can take part in a number range."""
    return bool(bill_no) and bool(_DIGITS.sub("", str(bill_no)))
