from datetime import date

from app import db
from app.forms import (
    AMOUNT_REQUIRED_MESSAGE,
    AMOUNT_TOO_LARGE_MESSAGE,
    CUSTOMER_REQUIRED_MESSAGE,
)
from app.models import Invoice
from tests.utils import login


def test_invoice_pages_require_login(client, invoices):
    assert client.get("/dashboard/invoices").status_code == 302
    assert client.get("/dashboard/invoices/create").status_code == 302
    response = client.post(f"/dashboard/invoices/{invoices['paid']}/delete")
    assert response.status_code == 302
    assert db.session.get(Invoice, invoices["paid"]) is not None


def test_view_invoices_lists_newest_first(client, invoices):
    with client:
        login(client)
        response = client.get("/dashboard/invoices")
    assert response.status_code == 200
    body = response.data.decode()
    assert "Evil Rabbit" in body
    assert "Amy Burns" in body
    assert body.index("Evil Rabbit") < body.index("Amy Burns")
    assert "$157.95" in body
    assert "Dec 6, 2022" in body


def test_view_invoices_search(client, invoices):
    with client:
        login(client)
        by_name = client.get("/dashboard/invoices?query=amy").data
        by_status = client.get("/dashboard/invoices?query=pending").data
        by_email = client.get("/dashboard/invoices?query=rabbit.com").data
    assert b"Amy Burns" in by_name and b"Evil Rabbit" not in by_name
    assert b"Evil Rabbit" in by_status and b"Amy Burns" not in by_status
    assert b"Evil Rabbit" in by_email and b"Amy Burns" not in by_email


def test_view_invoices_pagination(client, customers):
    for day in range(1, 9):
        db.session.add(
            Invoice(
                customer_id=customers["evil"],
                amount=day * 100,
                status="paid",
                date=date(2023, 1, day),
            )
        )
    db.session.commit()
    with client:
        login(client)
        first = client.get("/dashboard/invoices").data.decode()
        second = client.get("/dashboard/invoices?page=2").data.decode()
    assert "Jan 8, 2023" in first
    assert "Jan 2, 2023" not in first
    assert "Jan 2, 2023" in second
    assert "Jan 1, 2023" in second
    assert "page=2" in first


def test_create_invoice_flow(client, customers):
    with client:
        login(client)
        assert client.get("/dashboard/invoices/create").status_code == 200
        response = client.post(
            "/dashboard/invoices/create",
            data={
                "customer_id": customers["amy"],
                "amount": "42.10",
                "status": "paid",
            },
        )
        assert response.status_code == 302
        assert response.headers["Location"].endswith("/dashboard/invoices")
        listing = client.get("/dashboard/invoices")
    assert b"$42.10" in listing.data
    assert b"Invoice created successfully!" in listing.data
    invoice = Invoice.query.one()
    assert invoice.amount == 4210


def test_create_invoice_invalid_form_rerenders(client, customers):
    with client:
        login(client)
        response = client.post(
            "/dashboard/invoices/create",
            data={"customer_id": "", "amount": "0", "status": "paid"},
        )
    assert response.status_code == 200
    body = response.data.decode()
    assert "Missing Fields. Failed to create Invoice." in body
    assert CUSTOMER_REQUIRED_MESSAGE in body
    assert AMOUNT_REQUIRED_MESSAGE in body
    assert Invoice.query.count() == 0


def test_create_invoice_huge_amount_rerenders(client, customers):
    with client:
        login(client)
        response = client.post(
            "/dashboard/invoices/create",
            data={
                "customer_id": customers["amy"],
                "amount": "1e30",
                "status": "paid",
            },
        )
    assert response.status_code == 200
    body = response.data.decode()
    assert "Missing Fields. Failed to create Invoice." in body
    assert AMOUNT_TOO_LARGE_MESSAGE in body
    assert Invoice.query.count() == 0


def test_edit_invoice_huge_amount_rerenders(client, customers, invoices):
    invoice_id = invoices["paid"]
    with client:
        login(client)
        response = client.post(
            f"/dashboard/invoices/{invoice_id}/edit",
            data={
                "customer_id": customers["amy"],
                "amount": "100000000000000000",
                "status": "paid",
            },
        )
    assert response.status_code == 200
    assert AMOUNT_TOO_LARGE_MESSAGE.encode() in response.data
    assert db.session.get(Invoice, invoice_id).amount == 3040


def test_listing_cache_is_revalidated_by_create(client, customers, invoices):
    with client:
        login(client)
        client.get("/dashboard/invoices")
        # Written behind the app's back, so the cached listing stays stale.
        db.session.add(
            Invoice(
                customer_id=customers["amy"],
                amount=777,
                status="pending",
                date=date(2021, 1, 1),
            )
        )
        db.session.commit()
        stale = client.get("/dashboard/invoices").data
        client.post(
            "/dashboard/invoices/create",
            data={
                "customer_id": customers["evil"],
                "amount": "1",
                "status": "paid",
            },
        )
        fresh = client.get("/dashboard/invoices").data
    assert b"$7.77" not in stale
    assert b"$7.77" in fresh
    assert b"$1.00" in fresh


def test_edit_invoice_flow(client, customers, invoices):
    invoice_id = invoices["pending"]
    with client:
        login(client)
        page = client.get(f"/dashboard/invoices/{invoice_id}/edit")
        assert page.status_code == 200
        assert b"157.95" in page.data
        response = client.post(
            f"/dashboard/invoices/{invoice_id}/edit",
            data={
                "customer_id": customers["evil"],
                "amount": "99.99",
                "status": "paid",
            },
            follow_redirects=True,
        )
        assert response.status_code == 200
        assert b"Invoice updated successfully!" in response.data
    invoice = db.session.get(Invoice, invoice_id)
    db.session.refresh(invoice)
    assert invoice.amount == 9999
    assert invoice.status == "paid"


def test_edit_invoice_invalid_form_rerenders(client, customers, invoices):
    invoice_id = invoices["pending"]
    with client:
        login(client)
        response = client.post(
            f"/dashboard/invoices/{invoice_id}/edit",
            data={"customer_id": customers["evil"], "amount": "5"},
        )
    assert response.status_code == 200
    assert b"Missing Fields. Failed to Update Invoice." in response.data
    assert b"Please select an invoice status." in response.data


def test_edit_unknown_invoice_returns_404(client, customers):
    with client:
        login(client)
        assert client.get("/dashboard/invoices/missing/edit").status_code == 404
        response = client.post(
            "/dashboard/invoices/missing/edit",
            data={
                "customer_id": customers["evil"],
                "amount": "5",
                "status": "paid",
            },
        )
        assert response.status_code == 404


def test_delete_invoice_flow(client, invoices):
    with client:
        login(client)
        response = client.post(
            f"/dashboard/invoices/{invoices['paid']}/delete",
            follow_redirects=True,
        )
        assert response.status_code == 200
        assert b"Deleted Invoice" in response.data
        assert b"$30.40" not in response.data
        assert (
            client.post("/dashboard/invoices/missing/delete").status_code
            == 404
        )
    assert db.session.get(Invoice, invoices["paid"]) is None


def test_delete_requires_csrf_token(client, app, invoices):
    app.config["WTF_CSRF_ENABLED"] = True
    with client:
        login(client)
        response = client.post(f"/dashboard/invoices/{invoices['paid']}/delete")
    assert response.status_code == 400
    assert db.session.get(Invoice, invoices["paid"]) is not None
