# tests/test_payment_routes.py

from tilebook.models import BillAdjustment, Customer, Payment, Supplier


def test_advance_with_payouts(client, db):
    response = client.post("/advances", json={
        "date": "2026-10-05",
        "customer_name": "  Meena Constructions ",
        "amount": 1000,
        "method": "Cheque",
        "bill_no": "300",
        "payouts": [
            {"recipient_name": "Mason Raju", "amount": 300},
            {"recipient_name": "", "amount": 100},
        ],
    })
    assert response.status_code == 200
    advance, payout = response.json()
    assert advance["notes"] == "Advance Payment"
    assert advance["method"] == "cheque"
    assert advance["direction"] == "in"
    assert payout["party_type"] == "others"
    assert payout["other_name"] == "Mason Raju"
    assert payout["bill_no"] == "300"

    customer = db.query(Customer).one()
    assert customer.name == "Meena Constructions"
    assert advance["customer_id"] == customer.id


def test_advance_payouts_cannot_exceed_amount(client, db):
    response = client.post("/advances", json={
        "customer_name": "Meena Constructions",
        "amount": 100,
        "payouts": [{"recipient_name": "Mason Raju", "amount": 150}],
    })
    assert response.status_code == 400
    assert "cannot exceed" in response.json()["detail"]
    assert db.query(Payment).count() == 0


def test_advance_requires_customer_and_amount(client):
    assert client.post("/advances", json={"customer_name": "", "amount": 10}).status_code == 400
    assert client.post("/advances", json={"customer_name": "Meena", "amount": 0}).status_code == 400


def test_customer_entries_hit_the_ledger(client, db):
    for entry in (
        {"type": "adj_debit", "party_name": "Ravi Traders", "amount": 200, "date": "2026-10-01"},
        {"type": "adj_credit", "party_name": "Ravi Traders", "amount": 50, "date": "2026-10-02"},
        {"type": "in", "party_name": "Ravi Traders", "amount": 100, "date": "2026-10-03"},
    ):
        response = client.post("/payments/customers", json=entry)
        assert response.status_code == 200
        assert response.json()["success"] is True

    debit, credit = db.query(BillAdjustment).order_by(BillAdjustment.id).all()
    assert (debit.type, debit.bill_no, debit.details) == ("charge", "ADJ", "Manual Debit")
    assert (credit.type, credit.bill_no, credit.details) == ("discount", "ADJ", "Manual Credit")

    customer = db.query(Customer).one()
    statement = client.get(f"/customers/{customer.id}/ledger").json()
    assert statement["current_balance"] == 50
    adj = next(b for b in statement["bills"] if b["bill_no"] == "ADJ")
    assert adj["summary"]["net"] == 150


def test_supplier_entries_set_direction(client, db):
    for entry in (
        {"type": "out", "party_name": "Granite House", "amount": 500},
        {"type": "adj_credit", "party_name": "Granite House", "amount": 40, "notes": "rate diff"},
        {"type": "adj_debit", "party_name": "Granite House", "amount": 15, "method": "UPI"},
        {"type": "in", "party_name": "Granite House", "amount": 5},
    ):
        assert client.post("/payments", json=entry).status_code == 200

    payments = db.query(Payment).order_by(Payment.id).all()
    assert [p.direction for p in payments] == ["out", "out", "in", "in"]
    assert payments[1].notes == "[Adjustment] rate diff"
    assert payments[2].method == "upi"
    assert all(p.party_type == "supplier" for p in payments)
    assert db.query(Supplier).count() == 1

    party = client.get("/parties").json()["parties"][0]
    assert party["total_paid"] == 520
    assert party["balance"] == -520


def test_payouts_between_dates(client):
    for day, name in (("2026-10-01", "Mason Raju"), ("2026-10-05", "Driver Babu")):
        client.post("/advances", json={
            "date": day,
            "customer_name": "Meena Constructions",
            "amount": 500,
            "payouts": [{"recipient_name": name, "amount": 100}],
        })

    everything = client.get("/payouts").json()
    assert [p["other_name"] for p in everything] == ["Driver Babu", "Mason Raju"]

    first_week = client.get("/payouts", params={"start_date": "2026-10-01", "end_date": "2026-10-01"}).json()
    assert [p["other_name"] for p in first_week] == ["Mason Raju"]


def test_recipient_search_is_distinct(client):
    for _ in range(2):
        client.post("/advances", json={
            "customer_name": "Meena Constructions",
            "amount": 500,
            "payouts": [{"recipient_name": "Mason Raju", "amount": 100}],
        })

    assert client.get("/recipients/search", params={"q": "mas"}).json() == [{"name": "Mason Raju"}]
    assert client.get("/recipients/search").json() == []
