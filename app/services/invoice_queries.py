"""Read models for the dashboard, invoice and customer pages.

Every function returns plain dictionaries so results can be cached across
requests without holding on to session-bound ORM instances.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import String, case, cast, func, or_

from app import db
from app.models import Customer, Invoice
from app.utils.formatting import format_currency
from app.utils.pagination import ITEMS_PER_PAGE, total_pages


def _coalesce_scalar(query) -> int:
    """Return an integer scalar result or ``0`` when ``None``."""

    return int(query.scalar() or 0)


def _invoice_search(query: str):
    """Return the invoice/customer join filtered by a search term."""

    stmt = db.session.query(Invoice, Customer).join(
        Customer, Invoice.customer_id == Customer.id
    )
    if query:
        pattern = f"%{query}%"
        stmt = stmt.filter(
            or_(
                Customer.name.ilike(pattern),
                Customer.email.ilike(pattern),
                cast(Invoice.amount, String).ilike(pattern),
                cast(Invoice.date, String).ilike(pattern),
                Invoice.status.ilike(pattern),
            )
        )
    return stmt


def _invoice_row(invoice: Invoice, customer: Customer) -> Dict[str, Any]:
    return {
        "id": invoice.id,
        "customer_id": customer.id,
        "name": customer.name,
        "email": customer.email,
        "image_url": customer.image_url,
        "amount": invoice.amount,
        "status": invoice.status,
        "date": invoice.date,
    }


def fetch_filtered_invoices(query: str, current_page: int) -> List[Dict[str, Any]]:
    """Return one page of invoices matching ``query``, newest first."""

    offset = (max(current_page, 1) - 1) * ITEMS_PER_PAGE
    rows = (
        _invoice_search(query)
        .order_by(Invoice.date.desc(), Invoice.id)
        .limit(ITEMS_PER_PAGE)
        .offset(offset)
        .all()
    )
    return [_invoice_row(invoice, customer) for invoice, customer in rows]


def fetch_invoices_pages(query: str) -> int:
    """Return how many pages :func:`fetch_filtered_invoices` can produce."""

    return total_pages(_invoice_search(query).count())


def fetch_invoice_by_id(invoice_id: str) -> Optional[Dict[str, Any]]:
    """Return an invoice for the edit form with its amount in dollars."""

    invoice = db.session.get(Invoice, invoice_id)
    if invoice is None:
        return None
    return {
        "id": invoice.id,
        "customer_id": invoice.customer_id,
        "amount": invoice.amount / 100,
        "status": invoice.status,
        "date": invoice.date,
    }


def fetch_customers() -> List[Dict[str, str]]:
    return [
        {"id": customer_id, "name": name}
        for customer_id, name in db.session.query(Customer.id, Customer.name)
        .order_by(Customer.name)
        .all()
    ]


def fetch_latest_invoices(limit: int = 5) -> List[Dict[str, Any]]:
    """Return the most recent invoices with formatted amounts."""

    rows = (
        _invoice_search("")
        .order_by(Invoice.date.desc(), Invoice.id)
        .limit(limit)
        .all()
    )
    latest = []
    for invoice, customer in rows:
        row = _invoice_row(invoice, customer)
        row["amount"] = format_currency(invoice.amount)
        latest.append(row)
    return latest


def fetch_card_data() -> Dict[str, Any]:
    """Return the headline figures shown on the dashboard."""

    invoice_count = _coalesce_scalar(db.session.query(func.count(Invoice.id)))
    customer_count = _coalesce_scalar(db.session.query(func.count(Customer.id)))
    total_paid = _coalesce_scalar(
        db.session.query(func.sum(Invoice.amount)).filter(
            Invoice.status == "paid"
        )
    )
    total_pending = _coalesce_scalar(
        db.session.query(func.sum(Invoice.amount)).filter(
            Invoice.status == "pending"
        )
    )
    return {
        "number_of_invoices": invoice_count,
        "number_of_customers": customer_count,
        "total_paid_invoices": format_currency(total_paid),
        "total_pending_invoices": format_currency(total_pending),
    }


def fetch_filtered_customers(query: str) -> List[Dict[str, Any]]:
    """Return customers matching ``query`` with their invoice totals."""

    pending = func.sum(
        case((Invoice.status == "pending", Invoice.amount), else_=0)
    )
    paid = func.sum(case((Invoice.status == "paid", Invoice.amount), else_=0))
    stmt = (
        db.session.query(
            Customer.id,
            Customer.name,
            Customer.email,
            Customer.image_url,
            func.count(Invoice.id).label("total_invoices"),
            pending.label("total_pending"),
            paid.label("total_paid"),
        )
        .outerjoin(Invoice, Invoice.customer_id == Customer.id)
        .group_by(
            Customer.id, Customer.name, Customer.email, Customer.image_url
        )
        .order_by(Customer.name)
    )
    if query:
        pattern = f"%{query}%"
        stmt = stmt.filter(
            or_(Customer.name.ilike(pattern), Customer.email.ilike(pattern))
        )
    return [
        {
            "id": row.id,
            "name": row.name,
            "email": row.email,
            "image_url": row.image_url,
            "total_invoices": row.total_invoices,
            "total_pending": format_currency(row.total_pending or 0),
            "total_paid": format_currency(row.total_paid or 0),
        }
        for row in stmt.all()
    ]
