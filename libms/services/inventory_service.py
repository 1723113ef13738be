from flask import current_app

from libms.exceptions import BookNotFound, BookUnavailable
from libms.models.book import Book
from libms.repositories.book_repo import BookRepo


class InventoryLedger:
    """
    Owns the per-book `available` counter.

    Nothing here commits: changes are staged on the caller's transaction and
    become durable only when the workflow commits.
    """

    @staticmethod
    def check_and_reserve(book_id: str) -> Book:
        book = BookRepo.get(book_id)
        if book is None:
            raise BookNotFound(book_id)

        # guard on `available` (the counter we decrement), not `quantity`
        if book.available is None or book.available <= 0:
            raise BookUnavailable(book_id, book.title)

        if not BookRepo.decrement_available(book_id):
            # another transaction took the last copy after our read
            raise BookUnavailable(book_id, book.title)

        BookRepo.refresh(book)
        return book

    @staticmethod
    def restore(book_id: str) -> Book:
        """
        Give one copy back. Deliberately not clamped to `quantity`: restoring
        the same unit twice over-counts. Callers must restore each reservation
        exactly once.
        """
        if not BookRepo.increment_available(book_id):
            raise BookNotFound(book_id)

        book = BookRepo.get(book_id)
        BookRepo.refresh(book)
        if book.available > book.quantity:
            current_app.logger.warning(
                f"[inventory] book={book_id} available={book.available} exceeds quantity={book.quantity}"
            )
        return book
