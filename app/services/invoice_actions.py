"""Invoice mutations behind the create, edit and delete pages.

Each action validates its form, writes through the SQLAlchemy session and
reports the outcome as an :class:`ActionState`.  The activity log row is
committed together with the change.  Database failures are logged
and turned into a message for the user; they never escape to the route.  On
success the cached dashboard listings are revalidated and the route decides
where to redirect.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

from flask import current_app
from sqlalchemy import delete, insert, update
from sqlalchemy.exc import SQLAlchemyError

from app import db
from app.forms import InvoiceForm
from app.models import Invoice, new_id
from app.utils.activity import log_activity
from app.utils.view_cache import revalidate_path

DASHBOARD_PATH = "/dashboard"
INVOICES_PATH = "/dashboard/invoices"


@dataclass
class ActionState:
    """Outcome of an invoice action as shown to the user."""

    errors: Dict[str, List[str]] = field(default_factory=dict)
    message: Optional[str] = None
    ok: bool = False


def _field_errors(form: InvoiceForm) -> Dict[str, List[str]]:
    return {name: list(messages) for name, messages in form.errors.items()}


def _today_utc():
    return datetime.now(timezone.utc).date()


def _revalidate() -> None:
    # Invoice totals also feed the dashboard cards and customer table.
    revalidate_path(DASHBOARD_PATH)


def create_invoice(form: InvoiceForm) -> ActionState:
    """Insert a new invoice from a submitted :class:`InvoiceForm`."""

    if not form.validate_on_submit():
        return ActionState(
            errors=_field_errors(form),
            message="Missing Fields. Failed to create Invoice.",
        )

    invoice_id = new_id()
    try:
        db.session.execute(
            insert(Invoice).values(
                id=invoice_id,
                customer_id=form.customer_id.data,
                amount=form.amount_cents,
                status=form.status.data,
                date=_today_utc(),
            )
        )
        log_activity(f"Created invoice {invoice_id}", commit=False)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Create Invoice Error")
        return ActionState(message="Database Error: Failed to create Invoice.")

    _revalidate()
    return ActionState(message="Created Invoice.", ok=True)


def update_invoice(invoice_id: str, form: InvoiceForm) -> ActionState:
    """Update customer, amount and status of an existing invoice."""

    if not form.validate_on_submit():
        return ActionState(
            errors=_field_errors(form),
            message="Missing Fields. Failed to Update Invoice.",
        )

    try:
        result = db.session.execute(
            update(Invoice)
            .where(Invoice.id == invoice_id)
            .values(
                customer_id=form.customer_id.data,
                amount=form.amount_cents,
                status=form.status.data,
            )
        )
        if result.rowcount == 0:
            db.session.rollback()
            return ActionState(message="Invoice not found.")
        log_activity(f"Updated invoice {invoice_id}", commit=False)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Update Invoice Error")
        return ActionState(message="Database Error: Failed to Update Invoice.")

    _revalidate()
    return ActionState(message="Updated Invoice.", ok=True)


def delete_invoice(invoice_id: str) -> ActionState:
    """Delete an invoice by id."""

    try:
        result = db.session.execute(
            delete(Invoice).where(Invoice.id == invoice_id)
        )
        if result.rowcount == 0:
            db.session.rollback()
            return ActionState(message="Invoice not found.")
        log_activity(f"Deleted invoice {invoice_id}", commit=False)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Delete Invoice Error")
        return ActionState(message="Database Error: Failed to Delete Invoice.")

    _revalidate()
    return ActionState(message="Deleted Invoice", ok=True)
