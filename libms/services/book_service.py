from libms.exceptions import BookNotFound, BusinessRuleError, NotFound
from libms.extensions import transaction
from libms.models.book import Book
from libms.repositories.book_repo import BookRepo
from libms.repositories.category_repo import CategoryRepo
from libms.utils.validators import validate_book_payload


class BookService:
    @staticmethod
    def list_books(title=None, author=None, category_id=None, available=None, page=1, page_size=5):
        return BookRepo.search(
            title=title,
            author=author,
            category_id=category_id,
            available=available,
            page=page,
            page_size=page_size,
        )

    @staticmethod
    def get_book(book_id: str):
        book = BookRepo.get(book_id)
        if not book:
            raise BookNotFound(book_id)
        return book

    @staticmethod
    def _ensure_category(category_id: str):
        if CategoryRepo.get(category_id) is None:
            raise NotFound(f"Category with ID {category_id} not found.")

    @staticmethod
    def create_book(data: dict):
        clean = validate_book_payload(data)
        with transaction():
            BookService._ensure_category(clean["category_id"])
            # a new book starts with every copy on the shelf
            book = BookRepo.add(Book(available=clean["quantity"], **clean))
        return book

    @staticmethod
    def update_book(book_id: str, data: dict):
        clean = validate_book_payload(data)
        with transaction():
            book = BookService.get_book(book_id)
            BookService._ensure_category(clean["category_id"])

            # keep the number of copies currently out on loan unchanged
            available = (clean["quantity"] - book.quantity) + book.available
            book.available = max(available, 0)

            for key, value in clean.items():
                setattr(book, key, value)
        return book

    @staticmethod
    def delete_book(book_id: str):
        with transaction():
            book = BookService.get_book(book_id)
            if BookRepo.has_borrowing_details(book_id):
                raise BusinessRuleError("Cannot delete book with active borrowing requests.")
            BookRepo.delete(book)
