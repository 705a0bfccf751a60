from datetime import date

from app import create_admin_user, create_app, db
from app.models import Customer, Invoice

CUSTOMERS = [
    ("Evil Rabbit", "evil@rabbit.com", "/customers/evil-rabbit.png"),
    ("Delba de Oliveira", "delba@oliveira.com", "/customers/delba-de-oliveira.png"),
    ("Lee Robinson", "lee@robinson.com", "/customers/lee-robinson.png"),
    ("Michael Novotny", "michael@novotny.com", "/customers/michael-novotny.png"),
    ("Amy Burns", "amy@burns.com", "/customers/amy-burns.png"),
    ("Balazs Orban", "balazs@orban.com", "/customers/balazs-orban.png"),
]

# (customer email, amount in cents, status, date)
INVOICES = [
    ("evil@rabbit.com", 15795, "pending", date(2022, 12, 6)),
    ("delba@oliveira.com", 20348, "pending", date(2022, 11, 14)),
    ("amy@burns.com", 3040, "paid", date(2022, 10, 29)),
    ("michael@novotny.com", 44800, "paid", date(2023, 9, 10)),
    ("balazs@orban.com", 34577, "pending", date(2023, 8, 5)),
    ("lee@robinson.com", 54246, "pending", date(2023, 7, 16)),
    ("evil@rabbit.com", 666, "pending", date(2023, 6, 27)),
    ("michael@novotny.com", 32545, "paid", date(2023, 6, 9)),
    ("amy@burns.com", 1250, "paid", date(2023, 6, 17)),
    ("balazs@orban.com", 8546, "paid", date(2023, 6, 7)),
    ("delba@oliveira.com", 500, "paid", date(2023, 8, 19)),
    ("balazs@orban.com", 8945, "paid", date(2023, 6, 3)),
    ("lee@robinson.com", 1000, "paid", date(2022, 6, 5)),
]


def seed_initial_data() -> None:
    """Seed the database with the admin user, customers and invoices."""
    app = create_app([])
    with app.app_context():
        create_admin_user()
        customers = {}
        for name, email, image_url in CUSTOMERS:
            customer = Customer.query.filter_by(email=email).first()
            if customer is None:
                customer = Customer(name=name, email=email, image_url=image_url)
                db.session.add(customer)
            customers[email] = customer
        db.session.flush()

        if Invoice.query.count() == 0:
            for email, amount, status, issued in INVOICES:
                db.session.add(
                    Invoice(
                        customer_id=customers[email].id,
                        amount=amount,
                        status=status,
                        date=issued,
                    )
                )
        db.session.commit()
        app.logger.info("Seeded %d customers.", len(customers))


if __name__ == "__main__":
    seed_initial_data()
