import logging
import os
import secrets
from datetime import timedelta

from dotenv import load_dotenv
from flask import Flask, Response, current_app, g, render_template, request
from flask_bootstrap import Bootstrap5
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_login import LoginManager
from flask_sqlalchemy import SQLAlchemy
from flask_wtf import CSRFProtect
from flask_wtf.csrf import CSRFError
from werkzeug.security import generate_password_hash

load_dotenv()
db = SQLAlchemy()
login_manager = LoginManager()
login_manager.login_view = "auth.login"
login_manager.login_message = "Please log in to access the dashboard."
storage_uri = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
limiter = Limiter(key_func=get_remote_address, storage_uri=storage_uri)


def _get_bool_env(var_name: str, default: bool = False) -> bool:
    """Return a boolean environment variable value."""

    value = os.getenv(var_name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(var_name: str, default: int) -> int:
    value = os.getenv(var_name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        return default


DEFAULT_CSP_TEMPLATE = (
    "default-src 'self'; "
    "img-src 'self' data: https:; "
    "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
    "script-src 'self' https://cdn.jsdelivr.net 'nonce-{nonce}'; "
    "font-src 'self' data:; "
    "frame-ancestors 'self'; "
    "form-action 'self'; "
    "object-src 'none'; "
    "base-uri 'self'"
)
NAV_LINKS = {
    "main.dashboard": "Home",
    "invoice.view_invoices": "Invoices",
    "customer.view_customers": "Customers",
}


@login_manager.user_loader
def load_user(user_id):
    """Retrieve a user by ID for Flask-Login."""
    from app.models import User

    return db.session.get(User, user_id)


def create_admin_user():
    """Ensure the initial dashboard user exists."""
    from app.models import User

    db.create_all()

    admin_email = os.getenv("ADMIN_EMAIL", "user@nextmail.com")
    if User.query.filter_by(email=admin_email).first() is not None:
        return

    raw_password = os.getenv("ADMIN_PASS")
    if raw_password is None:
        raise RuntimeError("ADMIN_PASS environment variable not set")
    admin_user = User(
        name=os.getenv("ADMIN_NAME", "User"),
        email=admin_email,
        password=generate_password_hash(raw_password),
        active=True,
    )
    db.session.add(admin_user)
    db.session.commit()
    current_app.logger.info("Admin user %s created.", admin_email)


def _database_uri(base_dir: str) -> str:
    """Return the SQLAlchemy URL for the configured database.

    ``DATABASE_URL`` (or ``POSTGRES_URL`` as exported by managed Postgres
    providers) wins.  Without either, an SQLite file is used; ``DATABASE_PATH``
    may point at the file or at a directory to store ``invoices.db`` in.
    """

    url = os.getenv("DATABASE_URL") or os.getenv("POSTGRES_URL")
    if url:
        if url.startswith("postgres://"):
            url = "postgresql://" + url[len("postgres://") :]
        return url

    db_path = os.getenv("DATABASE_PATH", os.path.join(base_dir, "invoices.db"))
    if os.path.isdir(db_path):
        db_path = os.path.join(db_path, "invoices.db")
    os.makedirs(os.path.dirname(os.path.abspath(db_path)), exist_ok=True)
    return f"sqlite:///{os.path.abspath(db_path)}"


def create_app(args: list):
    """Application factory used by Flask."""
    app = Flask(__name__)
    app.config["SECRET_KEY"] = os.getenv("SECRET_KEY")
    default_secure_cookies = "--demo" not in args
    session_cookie_secure = _get_bool_env(
        "SESSION_COOKIE_SECURE", default=default_secure_cookies
    )
    app.config.update(
        SESSION_COOKIE_SECURE=session_cookie_secure,
        REMEMBER_COOKIE_SECURE=session_cookie_secure,
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SAMESITE="Lax",
        PERMANENT_SESSION_LIFETIME=timedelta(minutes=30),
        ENFORCE_HTTPS=_get_bool_env("ENFORCE_HTTPS", default=False),
        RATELIMIT_ENABLED=_get_bool_env("RATELIMIT_ENABLED", default=True),
        VIEW_CACHE_TIMEOUT=_get_int_env("VIEW_CACHE_TIMEOUT", 300),
        VIEW_CACHE_MAXSIZE=_get_int_env("VIEW_CACHE_MAXSIZE", 256),
        DEMO="--demo" in args,
    )
    app.config["SQLALCHEMY_DATABASE_URI"] = _database_uri(os.getcwd())

    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    app.logger.setLevel(getattr(logging, log_level, logging.INFO))

    db.init_app(app)
    login_manager.init_app(app)
    limiter.init_app(app)
    Bootstrap5(app)

    from app.utils.formatting import format_currency, format_date_to_local

    app.jinja_env.filters["currency"] = format_currency
    app.jinja_env.filters["local_date"] = format_date_to_local

    @app.context_processor
    def inject_nav_links():
        """Provide navigation labels to templates."""
        return dict(NAV_LINKS=NAV_LINKS)

    @app.before_request
    def set_csp_nonce():
        """Generate a nonce for inline scripts allowed by the CSP."""

        g.csp_nonce = secrets.token_urlsafe(16)

    @app.before_request
    def block_http_options():
        """Return a 405 for HTTP OPTIONS requests to reduce information leakage."""
        if request.method == "OPTIONS":
            return Response(status=405)

    @app.after_request
    def apply_security_headers(response):
        """Attach standard security headers to every response."""
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        if request.is_secure or app.config.get("ENFORCE_HTTPS", False):
            response.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )
        nonce = getattr(g, "csp_nonce", "") or secrets.token_urlsafe(16)
        csp_template = app.config.get(
            "CONTENT_SECURITY_POLICY", DEFAULT_CSP_TEMPLATE
        )
        response.headers.setdefault(
            "Content-Security-Policy", csp_template.replace("{nonce}", nonce)
        )
        return response

    @app.context_processor
    def inject_csp_nonce():
        """Expose the CSP nonce to templates for inline scripts."""

        return {"csp_nonce": getattr(g, "csp_nonce", "")}

    with app.app_context():
        # Create the schema on start-up; this app ships no migrations.
        from . import models  # noqa: F401

        db.create_all()

        from app.routes.auth_routes import auth
        from app.routes.customer_routes import customer
        from app.routes.invoice_routes import invoice
        from app.routes.main_routes import main

        app.register_blueprint(auth, url_prefix="/auth")
        app.register_blueprint(main)
        app.register_blueprint(invoice)
        app.register_blueprint(customer)

        CSRFProtect(app)

        @app.errorhandler(CSRFError)
        def handle_csrf_error(error):
            """Render a helpful page when CSRF validation fails."""
            return (
                render_template(
                    "errors/csrf_error.html",
                    reason=error.description,
                ),
                400,
            )

    return app
