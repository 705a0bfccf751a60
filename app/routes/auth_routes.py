from urllib.parse import urlparse

from flask import (
    Blueprint,
    current_app,
    redirect,
    render_template,
    request,
    url_for,
)
from flask_login import current_user, login_required, logout_user

from app import limiter
from app.forms import LoginForm
from app.services.auth_service import authenticate
from app.utils.activity import log_activity

auth = Blueprint("auth", __name__)


def _safe_next_url():
    """Return the ``next`` target when it stays on this site."""

    target = request.args.get("next") or request.form.get("next")
    if not target:
        return None
    target = target.replace("\\", "")
    parsed = urlparse(target)
    if parsed.scheme or parsed.netloc or not target.startswith("/"):
        return None
    return target


@auth.route("/login", methods=["GET", "POST"])
@limiter.limit("5 per minute", methods=["POST"])
def login():
    """Authenticate a user and start their session."""
    form = LoginForm()
    error_message = None
    if request.method == "POST":
        error_message = authenticate(form)
        if error_message is None:
            log_activity("Logged in", current_user.id)
            return redirect(_safe_next_url() or url_for("main.dashboard"))

    return render_template(
        "auth/login.html",
        form=form,
        error_message=error_message,
        next_url=_safe_next_url(),
        demo=current_app.config["DEMO"],
    )


@auth.route("/logout")
@login_required
def logout():
    """Log the current user out."""
    user_id = current_user.id
    logout_user()
    log_activity("Logged out", user_id)
    return redirect(url_for("auth.login"))
