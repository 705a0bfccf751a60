from flask import Blueprint, render_template, request
from flask_login import login_required

from app.services.invoice_queries import fetch_filtered_customers
from app.utils.view_cache import cached

customer = Blueprint("customer", __name__)


@customer.route("/dashboard/customers")
@login_required
def view_customers():
    """Display customers with their invoice totals."""
    query = request.args.get("query", "").strip()
    customers = cached(
        "/dashboard/customers",
        query,
        lambda: fetch_filtered_customers(query),
    )
    return render_template(
        "customers/view_customers.html",
        customers=customers,
        query=query,
    )
