import uuid
from datetime import datetime

from flask_login import UserMixin
from sqlalchemy.orm import relationship

from app import db

INVOICE_STATUSES = ("pending", "paid")


def new_id() -> str:
    return str(uuid.uuid4())


class User(UserMixin, db.Model):
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)
    active = db.Column(db.Boolean, default=True, nullable=False)


class Customer(db.Model):
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    image_url = db.Column(db.String(255), nullable=False, default="")

    invoices = db.relationship(
        "Invoice",
        backref="customer",
        lazy=True,
        cascade="all, delete-orphan",
    )

    __table_args__ = (db.Index("ix_customer_name", "name"),)


class Invoice(db.Model):
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    customer_id = db.Column(
        db.String(36), db.ForeignKey("customer.id"), nullable=False, index=True
    )
    # Stored in cents
    amount = db.Column(db.Integer, nullable=False)
    status = db.Column(db.String(10), nullable=False)
    date = db.Column(db.Date, nullable=False, index=True)

    __table_args__ = (
        db.CheckConstraint(
            "status IN ('pending', 'paid')", name="ck_invoice_status"
        ),
    )


class ActivityLog(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(36), db.ForeignKey("user.id"), nullable=True)
    activity = db.Column(db.String(255), nullable=False)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", backref="activity_logs")
