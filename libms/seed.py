from datetime import date

import click
from flask import current_app
from werkzeug.security import generate_password_hash

from libms.extensions import db, transaction
from libms.models.book import Book
from libms.models.category import Category
from libms.models.user import ROLE_SUPERUSER, User

CATEGORIES = ["Fiction", "Non-Fiction", "Science", "History", "Fantasy"]

# (title, author, isbn, published, quantity, category)
BOOKS = [
    ("Pride and Prejudice", "Jane Austen", "978-0141439518", date(1813, 1, 28), 3, "Fiction"),
    ("The Great Gatsby", "F. Scott Fitzgerald", "978-0743273565", date(1925, 4, 10), 2, "Fiction"),
    ("Sapiens: A Brief History of Humankind", "Yuval Noah Harari", "978-0062316097", date(2014, 9, 9), 4, "Non-Fiction"),
    ("Educated", "Tara Westover", "978-0399590504", date(2018, 2, 20), 3, "Non-Fiction"),
    ("A Brief History of Time", "Stephen Hawking", "978-0553380163", date(1988, 3, 1), 2, "Science"),
    ("The Selfish Gene", "Richard Dawkins", "978-0199291151", date(1976, 11, 1), 3, "Science"),
    ("Guns, Germs, and Steel", "Jared Diamond", "978-0393317558", date(1997, 3, 1), 4, "History"),
    ("The Hobbit", "J.R.R. Tolkien", "978-0547928227", date(1937, 9, 21), 5, "Fantasy"),
]


def seed_data() -> dict:
    """Idempotent: only missing categories, books and the superuser are created."""
    created = {"categories": 0, "books": 0, "users": 0}
    cfg = current_app.config

    with transaction():
        by_name = {c.name: c for c in Category.query.all()}
        for name in CATEGORIES:
            if name not in by_name:
                by_name[name] = Category(name=name)
                db.session.add(by_name[name])
                created["categories"] += 1

        if Book.query.first() is None:
            for title, author, isbn, published, qty, cat in BOOKS:
                db.session.add(Book(
                    title=title,
                    author=author,
                    isbn=isbn,
                    published_date=published,
                    quantity=qty,
                    available=qty,
                    category=by_name[cat],
                ))
                created["books"] += 1

        if User.query.filter_by(username=cfg["SEED_ADMIN_USERNAME"]).first() is None:
            db.session.add(User(
                username=cfg["SEED_ADMIN_USERNAME"],
                email=cfg["SEED_ADMIN_EMAIL"],
                password_hash=generate_password_hash(cfg["SEED_ADMIN_PASSWORD"]),
                role=ROLE_SUPERUSER,
            ))
            created["users"] += 1

    current_app.logger.info(f"[seed] {created}")
    return created


@click.command("seed")
def seed_command():
    """Create default categories, books and the superuser account."""
    created = seed_data()
    click.echo(
        f"categories={created['categories']} books={created['books']} users={created['users']}"
    )
