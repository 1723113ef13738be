from __future__ import annotations

from libms.extensions import db
from libms.models.book import Book
from libms.models.category import Category


class CategoryRepo:
    @staticmethod
    def get(category_id: str):
        return db.session.get(Category, category_id)

    @staticmethod
    def get_by_name(name: str, exclude_id: str | None = None):
        q = Category.query.filter(Category.name == name)
        if exclude_id:
            q = q.filter(Category.id != exclude_id)
        return q.first()

    @staticmethod
    def page(page: int, page_size: int):
        q = Category.query.order_by(Category.name)
        total = q.count()
        items = q.offset((page - 1) * page_size).limit(page_size).all()
        return items, total

    @staticmethod
    def has_books(category_id: str) -> bool:
        return Book.query.filter_by(category_id=category_id).first() is not None

    @staticmethod
    def add(category: Category):
        db.session.add(category)
        return category

    @staticmethod
    def delete(category: Category):
        db.session.delete(category)
