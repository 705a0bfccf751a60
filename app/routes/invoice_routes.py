from decimal import Decimal

from flask import (
    Blueprint,
    abort,
    flash,
    redirect,
    render_template,
    request,
    url_for,
)
from flask_login import login_required

from app import db
from app.forms import DeleteForm, InvoiceForm
from app.models import Invoice
from app.services import invoice_actions
from app.services.invoice_actions import INVOICES_PATH
from app.services.invoice_queries import (
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoices_pages,
)
from app.utils.pagination import build_pagination_args, generate_pagination, get_page
from app.utils.view_cache import cached

invoice = Blueprint("invoice", __name__)


@invoice.route("/dashboard/invoices")
@login_required
def view_invoices():
    """List invoices matching the search box, six per page."""
    query = request.args.get("query", "").strip()
    page = get_page()

    invoices = cached(
        INVOICES_PATH,
        ("rows", query, page),
        lambda: fetch_filtered_invoices(query, page),
    )
    page_count = cached(
        INVOICES_PATH, ("pages", query), lambda: fetch_invoices_pages(query)
    )
    return render_template(
        "invoices/view_invoices.html",
        invoices=invoices,
        query=query,
        page=page,
        page_count=page_count,
        pages=generate_pagination(page, page_count),
        pagination_args=build_pagination_args(),
        delete_form=DeleteForm(),
    )


@invoice.route("/dashboard/invoices/create", methods=["GET", "POST"])
@login_required
def create_invoice():
    """Create an invoice."""
    form = InvoiceForm()
    state = None
    if request.method == "POST":
        state = invoice_actions.create_invoice(form)
        if state.ok:
            flash("Invoice created successfully!", "success")
            return redirect(url_for("invoice.view_invoices"))

    return render_template(
        "invoices/invoice_form.html",
        form=form,
        state=state,
        title="Create Invoice",
    )


@invoice.route("/dashboard/invoices/<invoice_id>/edit", methods=["GET", "POST"])
@login_required
def edit_invoice(invoice_id):
    """Edit an invoice's customer, amount and status."""
    existing = fetch_invoice_by_id(invoice_id)
    if existing is None:
        abort(404)

    form = InvoiceForm()
    state = None
    if request.method == "POST":
        state = invoice_actions.update_invoice(invoice_id, form)
        if state.ok:
            flash("Invoice updated successfully!", "success")
            return redirect(url_for("invoice.view_invoices"))
    else:
        form.customer_id.data = existing["customer_id"]
        form.amount.data = Decimal(str(existing["amount"]))
        form.status.data = existing["status"]

    return render_template(
        "invoices/invoice_form.html",
        form=form,
        state=state,
        invoice=existing,
        title="Edit Invoice",
    )


@invoice.route("/dashboard/invoices/<invoice_id>/delete", methods=["POST"])
@login_required
def delete_invoice(invoice_id):
    """Delete an invoice."""
    form = DeleteForm()
    if not form.validate_on_submit():
        abort(400)
    if db.session.get(Invoice, invoice_id) is None:
        abort(404)

    state = invoice_actions.delete_invoice(invoice_id)
    flash(state.message, "success" if state.ok else "danger")
    return redirect(url_for("invoice.view_invoices"))
