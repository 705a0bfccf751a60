from __future__ import annotations

import os
import sys
from datetime import date

import pytest

# Ensure the app package is importable when tests change directories
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, BASE_DIR)

from app import create_admin_user, create_app, db  # noqa: E402
from app.models import Customer, Invoice  # noqa: E402


@pytest.fixture
def app(tmp_path, monkeypatch):
    os.environ.setdefault("SECRET_KEY", "testsecret")
    os.environ.setdefault("ADMIN_EMAIL", "admin@example.com")
    os.environ.setdefault("ADMIN_PASS", "adminpass")
    monkeypatch.setenv("RATELIMIT_ENABLED", "false")
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("POSTGRES_URL", raising=False)
    monkeypatch.delenv("DATABASE_PATH", raising=False)

    cwd = os.getcwd()
    os.chdir(tmp_path)
    app = create_app(["--demo"])
    os.chdir(cwd)

    app.config.update({"TESTING": True, "WTF_CSRF_ENABLED": False})

    with app.app_context():
        db.create_all()
        create_admin_user()

        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def customers(app):
    """Create two customers and return their ids keyed by first name."""
    with app.app_context():
        evil = Customer(
            name="Evil Rabbit",
            email="evil@rabbit.com",
            image_url="/customers/evil-rabbit.png",
        )
        amy = Customer(
            name="Amy Burns",
            email="amy@burns.com",
            image_url="/customers/amy-burns.png",
        )
        db.session.add_all([evil, amy])
        db.session.commit()
        return {"evil": evil.id, "amy": amy.id}


@pytest.fixture
def invoices(app, customers):
    """Create one paid and one pending invoice."""
    with app.app_context():
        paid = Invoice(
            customer_id=customers["amy"],
            amount=3040,
            status="paid",
            date=date(2022, 10, 29),
        )
        pending = Invoice(
            customer_id=customers["evil"],
            amount=15795,
            status="pending",
            date=date(2022, 12, 6),
        )
        db.session.add_all([paid, pending])
        db.session.commit()
        return {"paid": paid.id, "pending": pending.id}
