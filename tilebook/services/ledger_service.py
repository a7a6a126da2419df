"""
Ledger Service
Derives bill summaries, running balances and the daily bills view from
signed ledger rows. Pure functions, no database access: callers fetch rows
through ledger_queries and pass them in.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from ..models.enums import LedgerType
from ..schemas.ledger_schemas import (
    LedgerRow, Transaction, BillGroup, BillSummary,
    CustomerStatement, DailyGroup
)
from ..utils.numbers import to_number, bill_number_key, has_bill_number

logger = logging.getLogger(__name__)

NET_TYPES = (LedgerType.SALE, LedgerType.CHARGE, LedgerType.DISCOUNT)
PAID_TYPES = (LedgerType.PAYMENT, LedgerType.PAYOUT)

SORT_BILL_DESC = "bill-desc"
SORT_BILL_ASC = "bill-asc"
SORT_DATE_DESC = "date-desc"
SORT_ORDERS = (SORT_BILL_DESC, SORT_BILL_ASC, SORT_DATE_DESC)

UNKNOWN_CUSTOMER = "Unknown"
NO_CUSTOMER = "—"


def _as_transactions(rows: Iterable) -> List[Transaction]:
    out = []
    for r in rows:
        if isinstance(r, Transaction):
            out.append(r)
        elif isinstance(r, LedgerRow):
            out.append(Transaction(**r.dict()))
        else:
            out.append(Transaction(**r))
    return out


def _by_date(rows: List[Transaction]) -> List[Transaction]:
    # sorted() is stable: equal timestamps keep fetch order
    return sorted(rows, key=lambda r: r.date)


def with_running_balance(rows: Iterable, opening_balance=0.0) -> List[Transaction]:
    """
    Attach a running balance to each row in one left-to-right pass.
    Each row's balance covers the opening balance, itself and the rows before it.
    """
    running = to_number(opening_balance)
    out = []
    for t in _as_transactions(rows):
        running += to_number(t.amount)
        out.append(t.copy(update={"running_balance": running}))
    return out


def summarize(items: Iterable[Transaction]) -> BillSummary:
    net = 0.0
    paid = 0.0
    for i in items:
        if i.type in NET_TYPES:
            net += to_number(i.amount)
        elif i.type in PAID_TYPES:
            paid += abs(to_number(i.amount))
    return BillSummary(net=net, paid=paid, balance=net - paid)


def _executives(rows: Iterable[Transaction]) -> List[str]:
    names = []
    for r in rows:
        if r.type != LedgerType.EXECUTIVE:
            continue
        name = (r.details or "").strip()
        if name and name not in names:
            names.append(name)
    return names


def _build_group(rows: List[Transaction]) -> BillGroup:
    items = [r for r in rows if r.type != LedgerType.EXECUTIVE]
    # Executive rows only label the bill; date it by its first real item
    first = items[0] if items else rows[0]
    return BillGroup(
        bill_no=first.bill_no or None,
        customer_id=first.customer_id,
        customer_name=first.customer_name,
        date=first.date,
        executives=_executives(rows),
        items=items,
        summary=summarize(items),
    )


def group_by_bill(rows: Iterable, split_by_customer: bool = False) -> List[BillGroup]:
    """
    Group rows by bill number, oldest bill first.

    Rows without a bill number become standalone groups of one row each.
    Executive rows only label their bill: they are dropped from items and
    never counted in the summary.
    """
    buckets: Dict[Tuple, List[Transaction]] = {}
    for t in _as_transactions(rows):
        if t.bill_no:
            key = (t.bill_no, t.customer_id) if split_by_customer else (t.bill_no,)
        else:
            key = ("", len(buckets))
        buckets.setdefault(key, []).append(t)

    groups = [_build_group(members) for members in buckets.values()]
    return sorted(groups, key=lambda g: g.date)


def customer_statement(customer, rows: Iterable) -> CustomerStatement:
    opening = to_number(getattr(customer, "opening_balance", None))
    running_rows = with_running_balance(_by_date(_as_transactions(rows)), opening)
    current = running_rows[-1].running_balance if running_rows else opening

    return CustomerStatement(
        customer_id=customer.id,
        name=customer.name,
        opening_balance=opening,
        current_balance=current,
        bills=group_by_bill(running_rows),
    )


def _sort_bills(bills: List[BillGroup], sort_order: str) -> List[BillGroup]:
    if sort_order == SORT_BILL_ASC:
        return sorted(bills, key=lambda b: bill_number_key(b.bill_no))
    if sort_order == SORT_DATE_DESC:
        return sorted(bills, key=lambda b: b.date, reverse=True)
    return sorted(bills, key=lambda b: bill_number_key(b.bill_no), reverse=True)


def day_label(day: date, today: date) -> str:
    label = f"{day:%A}, {day.day} {day:%B %Y}"
    if day == today:
        return f"Today ({label})"
    if day == today - timedelta(days=1):
        return f"Yesterday ({label})"
    return label


def daily_bills(
    rows: Iterable,
    customer_names: Optional[Mapping[int, str]] = None,
    sort_order: str = SORT_BILL_DESC,
    min_bill: Optional[int] = None,
    max_bill: Optional[int] = None,
    today: Optional[date] = None,
) -> List[DailyGroup]:
    """
    Build the daily bills view: bills per (bill number, customer), newest day first.

    A bill number range hides standalone rows and bills without digits. Within a day the bills follow
    sort_order; the days themselves are always newest first.
    """
    if sort_order not in SORT_ORDERS:
        raise ValueError(f"Unknown sort order '{sort_order}'")
    customer_names = customer_names or {}
    # Stored timestamps are naive UTC, so "today" is the UTC day
    today = today or datetime.utcnow().date()

    transactions = []
    for t in _as_transactions(rows):
        if t.customer_id:
            name = customer_names.get(t.customer_id, UNKNOWN_CUSTOMER)
        else:
            name = NO_CUSTOMER
        transactions.append(t.copy(update={"customer_name": name}))

    bills = group_by_bill(_by_date(transactions), split_by_customer=True)

    if min_bill is not None or max_bill is not None:
        low = min_bill if min_bill is not None else 0
        high = max_bill if max_bill is not None else float("inf")
        bills = [
            b for b in bills
            if has_bill_number(b.bill_no) and low <= bill_number_key(b.bill_no) <= high
        ]

    by_day: Dict[date, List[BillGroup]] = {}
    for bill in _sort_bills(bills, sort_order):
        by_day.setdefault(bill.date.date(), []).append(bill)

    logger.debug("daily_bills: %d bills over %d days", len(bills), len(by_day))
    return [
        DailyGroup(day=day, label=day_label(day, today), bills=by_day[day])
        for day in sorted(by_day, reverse=True)
    ]
