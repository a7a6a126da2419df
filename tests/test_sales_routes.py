# tests/test_sales_routes.py

import pytest

from tilebook.models import BillAdjustment, Customer, Payment, StockMove


def full_sale(sale_payload, tile):
    return sale_payload(
        rows=[
            {"product_id": tile.id, "qty": 10, "rate": 50},
            {"product_id": None, "qty": 3, "rate": 10},
        ],
        customer_payment={"advance": 0, "paid_now": 100, "method": "UPI"},
        payouts=[{"recipient_name": "Driver", "amount": 30}, {"recipient_name": " ", "amount": 99}],
        gst=18,
        discount={"amount": 20},
    )


def test_post_sale_creates_rows(client, db, tile, sale_payload):
    response = client.post("/sales", json=full_sale(sale_payload, tile))
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["bill_no"] == "101"
    assert (body["stock_moves"], body["payments"], body["adjustments"]) == (1, 2, 3)

    customer = db.query(Customer).filter(Customer.name == "Ravi Traders").one()
    assert customer.id == body["customer_id"]

    payment_in = db.query(Payment).filter(Payment.direction == "in").one()
    assert payment_in.method == "upi"
    assert payment_in.amount == 100
    payout = db.query(Payment).filter(Payment.direction == "out").one()
    assert payout.party_type == "others"
    assert payout.other_name == "Driver"

    discount = db.query(BillAdjustment).filter(BillAdjustment.type == "discount").one()
    assert discount.details == "Discount"
    assert discount.amount == 20


def test_sale_appears_in_customer_ledger(client, tile, sale_payload):
    customer_id = client.post("/sales", json=full_sale(sale_payload, tile)).json()["customer_id"]

    statement = client.get(f"/customers/{customer_id}/ledger").json()
    assert len(statement["bills"]) == 1
    bill = statement["bills"][0]
    assert bill["bill_no"] == "101"
    assert bill["executives"] == ["Suresh"]
    assert bill["summary"] == {"net": 498.0, "paid": 130.0, "balance": 368.0}
    assert statement["current_balance"] == 368.0
    assert [i["type"] for i in bill["items"]] == ["Sale", "Payment", "Payout", "Charge", "Discount"]


def test_new_customer_gets_opening_balance(client, db, sale_payload):
    response = client.post("/sales", json=sale_payload(
        customer_name="Fresh Buyer", is_new_customer=True, new_customer_opening_balance=750,
    ))
    assert response.status_code == 200

    customer = db.query(Customer).filter(Customer.name == "Fresh Buyer").one()
    assert customer.opening_balance == 750


def test_sale_requires_bill_and_customer(client, db, sale_payload):
    response = client.post("/sales", json=sale_payload(bill_no=" "))
    assert response.status_code == 400
    assert response.json()["detail"] == "Bill Number and Customer Name are required."

    response = client.post("/sales", json=sale_payload(customer_name=None))
    assert response.status_code == 400
    assert db.query(Customer).count() == 0


def test_invalid_quantity_is_rejected(client, db, sale_payload):
    response = client.post("/sales", json=sale_payload(rows=[{"product_id": 1, "qty": "ten"}]))
    assert response.status_code == 422
    assert db.query(StockMove).count() == 0


def test_sale_reduces_live_stock(client, tile, sale_payload):
    client.post("/sales", json=full_sale(sale_payload, tile))

    stock = client.get("/products/stock").json()
    assert stock[0]["name"] == "Kajaria Ivory"
    assert stock[0]["current_stock"] == -10


def test_failure_mid_posting_rolls_back_everything(db, tile, sale_payload, monkeypatch):
    from tilebook.schemas.sales_schemas import SaleCreate
    from tilebook.services.sales_service import SalesService

    def broken(*args, **kwargs):
        raise RuntimeError("adjustments table unavailable")

    monkeypatch.setattr(SalesService, "_adjustments", staticmethod(broken))
    sale = SaleCreate(**full_sale(sale_payload, tile))

    with pytest.raises(RuntimeError):
        SalesService.post_sale(db, sale)

    assert db.query(Customer).count() == 0
    assert db.query(StockMove).count() == 0
    assert db.query(Payment).count() == 0
