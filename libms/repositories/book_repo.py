from __future__ import annotations

from sqlalchemy import update

from libms.extensions import db
from libms.models.book import Book
from libms.models.borrowing_request import BorrowingRequestDetail


class BookRepo:
    @staticmethod
    def get(book_id: str):
        return db.session.get(Book, book_id)

    @staticmethod
    def search(
        title: str | None = None,
        author: str | None = None,
        category_id: str | None = None,
        available: bool | None = None,
        page: int = 1,
        page_size: int = 5,
    ):
        q = Book.query
        if title:
            q = q.filter(Book.title.ilike(f"%{title}%"))
        if author:
            q = q.filter(Book.author.ilike(f"%{author}%"))
        if category_id:
            q = q.filter(Book.category_id == category_id)
        if available is not None:
            q = q.filter(Book.available > 0 if available else Book.available <= 0)

        total = q.count()
        items = q.order_by(Book.title).offset((page - 1) * page_size).limit(page_size).all()
        return items, total

    @staticmethod
    def has_borrowing_details(book_id: str) -> bool:
        return BorrowingRequestDetail.query.filter_by(book_id=book_id).first() is not None

    @staticmethod
    def add(book: Book):
        db.session.add(book)
        return book

    @staticmethod
    def delete(book: Book):
        db.session.delete(book)

    @staticmethod
    def decrement_available(book_id: str) -> bool:
        """
        Conditional decrement; False when the row is missing or has no copy left.
        The WHERE clause makes check-and-decrement a single statement.
        """
        result = db.session.execute(
            update(Book)
            .where(Book.id == book_id, Book.available > 0)
            .values(available=Book.available - 1),
            execution_options={"synchronize_session": False},
        )
        return result.rowcount == 1

    @staticmethod
    def increment_available(book_id: str) -> bool:
        # no upper bound against quantity
        result = db.session.execute(
            update(Book)
            .where(Book.id == book_id)
            .values(available=Book.available + 1),
            execution_options={"synchronize_session": False},
        )
        return result.rowcount == 1

    @staticmethod
    def refresh(book: Book):
        db.session.refresh(book)
        return book
