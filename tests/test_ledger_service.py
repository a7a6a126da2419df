# tests/test_ledger_service.py

from datetime import date, datetime
from types import SimpleNamespace

import pytest

from tilebook.services.ledger_service import (
    customer_statement, daily_bills, day_label, group_by_bill,
    summarize, with_running_balance, NO_CUSTOMER, UNKNOWN_CUSTOMER,
)
from tilebook.utils.numbers import bill_number_key, to_number


def row(type_, amount, bill_no="A", day=10, hour=9, customer_id=1, details=None):
    return {
        "bill_no": bill_no,
        "customer_id": customer_id,
        "date": datetime(2026, 10, day, hour),
        "type": type_,
        "amount": amount,
        "details": details,
    }


# ---------- numeric coercion ----------

@pytest.mark.parametrize("value, expected", [
    (None, 0.0),
    ("", 0.0),
    ("abc", 0.0),
    (float("nan"), 0.0),
    (float("inf"), 0.0),
    ("12.5", 12.5),
    (7, 7.0),
])
def test_to_number(value, expected):
    assert to_number(value) == expected


def test_bill_number_key_uses_digits():
    assert bill_number_key("INV-0042") == 42
    assert bill_number_key("ADJ") == 0
    assert bill_number_key(None) == 0


# ---------- grouping ----------

def test_worked_example_single_bill():
    rows = [row("Sale", 1000, hour=9), row("Payment", -400, hour=10), row("Charge", 50, hour=11)]

    groups = group_by_bill(rows)
    assert len(groups) == 1
    assert groups[0].summary.net == 1050
    assert groups[0].summary.paid == 400
    assert groups[0].summary.balance == 650

    running = with_running_balance(rows, opening_balance=500)
    assert running[-1].running_balance == 1150
    assert [r.running_balance for r in running] == [1500, 1100, 1150]


def test_rows_without_bill_are_standalone():
    rows = [row("Sale", 200, bill_no=None, hour=9), row("Payment", -50, bill_no="", hour=10)]

    groups = group_by_bill(rows)
    assert len(groups) == 2
    assert all(g.is_standalone for g in groups)
    assert (groups[0].summary.net, groups[0].summary.paid, groups[0].summary.balance) == (200, 0, 200)
    assert (groups[1].summary.net, groups[1].summary.paid, groups[1].summary.balance) == (0, 50, -50)


def test_executive_rows_label_the_bill_only():
    rows = [
        row("Executive", 999, details=" Suresh "),
        row("Sale", 300),
        row("Executive", 0, details="Suresh"),
        row("Executive", 0, details="Mahesh"),
        row("Executive", 0, details="  "),
    ]
    group = group_by_bill(rows)[0]

    assert group.executives == ["Suresh", "Mahesh"]
    assert [i.type.value for i in group.items] == ["Sale"]
    assert group.summary.net == 300
    assert group.summary.paid == 0


def test_payouts_count_as_paid_and_discounts_reduce_net():
    rows = [row("Sale", 1000), row("Discount", -100), row("Payout", -200), row("Payment", -300)]
    summary = summarize(group_by_bill(rows)[0].items)

    assert summary.net == 900
    assert summary.paid == 500
    assert summary.balance == 400


def test_net_total_matches_input_for_mixed_rows():
    rows = [
        row("Sale", 500, bill_no="1"),
        row("Charge", 25, bill_no="1"),
        row("Payment", -100, bill_no="2"),
        row("Sale", 80, bill_no=None),
        row("Discount", -5, bill_no="2"),
        row("Executive", 0, bill_no="2", details="Ravi"),
    ]
    groups = group_by_bill(rows)

    expected = sum(r["amount"] for r in rows if r["type"] in ("Sale", "Charge", "Discount"))
    assert sum(g.summary.net for g in groups) == expected
    final = with_running_balance(rows, opening_balance=10)[-1].running_balance
    assert final == 10 + sum(r["amount"] for r in rows)


def test_bad_amounts_count_as_zero():
    rows = [row("Sale", None), row("Sale", "oops"), row("Sale", "25")]
    running = with_running_balance(rows, opening_balance="n/a")

    assert [r.running_balance for r in running] == [0, 0, 25]
    assert group_by_bill(rows)[0].summary.net == 25


def test_split_by_customer_keeps_bills_apart():
    rows = [row("Sale", 100, customer_id=1), row("Sale", 200, customer_id=2)]
    assert len(group_by_bill(rows)) == 1
    assert len(group_by_bill(rows, split_by_customer=True)) == 2


# ---------- customer statement ----------

def test_customer_statement_orders_by_date_and_uses_opening_balance():
    customer = SimpleNamespace(id=1, name="Ravi Traders", opening_balance=500)
    rows = [row("Payment", -400, hour=12), row("Sale", 1000, hour=9)]

    statement = customer_statement(customer, rows)
    assert statement.opening_balance == 500
    assert statement.current_balance == 1100
    items = statement.bills[0].items
    assert [i.type.value for i in items] == ["Sale", "Payment"]
    assert [i.running_balance for i in items] == [1500, 1100]


def test_customer_statement_without_rows():
    customer = SimpleNamespace(id=3, name="New", opening_balance=None)
    statement = customer_statement(customer, [])
    assert statement.current_balance == 0
    assert statement.bills == []


# ---------- daily bills ----------

def test_day_label():
    today = date(2026, 10, 17)
    assert day_label(today, today) == "Today (Saturday, 17 October 2026)"
    assert day_label(date(2026, 10, 16), today) == "Yesterday (Friday, 16 October 2026)"
    assert day_label(date(2026, 10, 1), today) == "Thursday, 1 October 2026"


def test_daily_bills_groups_by_day_newest_first():
    rows = [
        row("Sale", 100, bill_no="7", day=15, customer_id=1),
        row("Sale", 100, bill_no="9", day=17, customer_id=2),
        row("Sale", 100, bill_no="8", day=17, customer_id=9),
        row("Payment", -20, bill_no=None, day=16, customer_id=None),
    ]
    days = daily_bills(rows, {1: "Ravi", 2: "Anil"}, today=date(2026, 10, 17))

    assert [d.day for d in days] == [date(2026, 10, 17), date(2026, 10, 16), date(2026, 10, 15)]
    assert days[0].label.startswith("Today")
    assert [b.bill_no for b in days[0].bills] == ["9", "8"]
    assert [b.customer_name for b in days[0].bills] == ["Anil", UNKNOWN_CUSTOMER]
    assert days[1].bills[0].customer_name == NO_CUSTOMER


def test_daily_bills_sort_orders():
    rows = [
        row("Sale", 1, bill_no="10", hour=8),
        row("Sale", 1, bill_no="2", hour=12),
        row("Sale", 1, bill_no="33", hour=10),
    ]
    asc = daily_bills(rows, sort_order="bill-asc")[0].bills
    by_date = daily_bills(rows, sort_order="date-desc")[0].bills

    assert [b.bill_no for b in asc] == ["2", "10", "33"]
    assert [b.bill_no for b in by_date] == ["2", "33", "10"]
    with pytest.raises(ValueError):
        daily_bills(rows, sort_order="random")


def test_daily_bills_range_hides_standalone_rows():
    rows = [
        row("Sale", 1, bill_no="5"),
        row("Sale", 1, bill_no="15"),
        row("Sale", 1, bill_no=None),
    ]
    days = daily_bills(rows, min_bill=1, max_bill=10)
    assert [b.bill_no for b in days[0].bills] == ["5"]


def test_daily_bills_range_hides_bills_without_digits():
    rows = [row("Charge", 200, bill_no="ADJ"), row("Charge", 10, bill_no="5")]

    days = daily_bills(rows, max_bill=10)
    assert [b.bill_no for b in days[0].bills] == ["5"]
    assert len(daily_bills(rows)[0].bills) == 2


def test_group_is_dated_by_its_first_item():
    rows = [
        row("Executive", 0, hour=8, details="Suresh"),
        row("Sale", 300, hour=11),
    ]
    group = group_by_bill(rows)[0]

    assert group.date == datetime(2026, 10, 10, 11)
    assert group.executives == ["Suresh"]
