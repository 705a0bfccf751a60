from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from flask_wtf import FlaskForm
from wtforms import (
    DecimalField as WTFormsDecimalField,
    PasswordField,
    RadioField,
    SelectField,
    StringField,
    SubmitField,
)
from wtforms.validators import AnyOf, DataRequired, Email, Length, ValidationError

from app import db
from app.models import INVOICE_STATUSES, Customer
from app.services.invoice_queries import fetch_customers

CUSTOMER_REQUIRED_MESSAGE = "Please select a customer."
AMOUNT_REQUIRED_MESSAGE = "Please enter an amount greater than $0."
STATUS_REQUIRED_MESSAGE = "Please select an invoice status."

# Largest value the 32-bit cents column holds
MAX_AMOUNT_CENTS = 2**31 - 1
MAX_AMOUNT = Decimal(MAX_AMOUNT_CENTS) / 100
AMOUNT_TOO_LARGE_MESSAGE = "Please enter an amount no greater than $21,474,836.47."


class AmountField(WTFormsDecimalField):
    """Decimal field for dollar amounts typed into a browser form.

    Presentation characters such as ``"$"`` and thousands separators are
    stripped before parsing.  Input that still is not a number leaves
    ``data`` as ``None`` without recording a parse error, so the field's
    validators decide which single message the user sees.
    """

    _CURRENCY_SYMBOLS = "$€£¥"

    def __init__(self, *args, render_kw=None, **kwargs):
        render_kw = dict(render_kw or {})
        render_kw.setdefault("inputmode", "decimal")
        render_kw.setdefault("step", "0.01")
        super().__init__(*args, render_kw=render_kw, **kwargs)

    @classmethod
    def _normalise(cls, text):
        cleaned = text.strip()
        while cleaned and cleaned[0] in cls._CURRENCY_SYMBOLS:
            cleaned = cleaned[1:].lstrip()
        return cleaned.replace(",", "").replace("_", "").replace(" ", "")

    def process_formdata(self, valuelist):
        self.data = None
        if not valuelist or valuelist[0] is None:
            return
        text = self._normalise(str(valuelist[0]))
        if not text:
            return
        try:
            value = Decimal(text)
        except (InvalidOperation, ValueError):
            return
        if value.is_finite():
            self.data = value


def amount_in_cents(amount: Decimal) -> int:
    """Convert a dollar amount to whole cents, rounding half up."""

    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def positive_amount(form, field):
    """Require an amount above zero once rounded to cents and within range."""

    if field.data is None or field.data <= 0:
        raise ValidationError(AMOUNT_REQUIRED_MESSAGE)
    if field.data > MAX_AMOUNT:
        raise ValidationError(AMOUNT_TOO_LARGE_MESSAGE)
    if amount_in_cents(field.data) <= 0:
        raise ValidationError(AMOUNT_REQUIRED_MESSAGE)


class LoginForm(FlaskForm):
    email = StringField("Email", validators=[DataRequired(), Email()])
    password = PasswordField(
        "Password", validators=[DataRequired(), Length(min=6)]
    )
    submit = SubmitField("Log in")


class InvoiceForm(FlaskForm):
    """Invoice fields accepted from the create and edit pages.

    The invoice id and date are never read from the request.
    """

    customer_id = SelectField(
        "Choose customer", validate_choice=False
    )
    amount = AmountField(
        "Choose an amount", places=2, validators=[positive_amount]
    )
    status = RadioField(
        "Set the invoice status",
        choices=[("pending", "Pending"), ("paid", "Paid")],
        validate_choice=False,
        validators=[AnyOf(INVOICE_STATUSES, message=STATUS_REQUIRED_MESSAGE)],
    )
    submit = SubmitField("Save Invoice")

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.customer_id.choices = [("", "Select a customer")] + [
            (customer["id"], customer["name"]) for customer in fetch_customers()
        ]

    def validate_customer_id(self, field):
        if not field.data or db.session.get(Customer, field.data) is None:
            raise ValidationError(CUSTOMER_REQUIRED_MESSAGE)

    @property
    def amount_cents(self) -> int:
        return amount_in_cents(self.amount.data)


class DeleteForm(FlaskForm):
    """Simple form used for CSRF protection on delete actions."""

    submit = SubmitField("Delete")
