from flask import Blueprint, redirect, render_template, url_for
from flask_login import current_user, login_required

from app.services.invoice_queries import fetch_card_data, fetch_latest_invoices
from app.utils.view_cache import cached

main = Blueprint("main", __name__)


@main.route("/")
def index():
    return redirect(url_for("main.dashboard"))


@main.route("/dashboard")
@login_required
def dashboard():
    """Render the dashboard cards and latest invoices."""

    card_data = cached("/dashboard", "cards", fetch_card_data)
    latest_invoices = cached("/dashboard", "latest", fetch_latest_invoices)
    return render_template(
        "dashboard/index.html",
        user=current_user,
        card_data=card_data,
        latest_invoices=latest_invoices,
    )
