from __future__ import annotations

from datetime import date, datetime

from flask import current_app

from libms.exceptions import ValidationError


def _text(data: dict, key: str) -> str:
    return str(data.get(key) or "").strip()


def _check_length(errors: list, value: str, label: str, lo: int, hi: int):
    if not value:
        errors.append(f"{label} is required.")
    elif not (lo <= len(value) <= hi):
        errors.append(f"{label} must be between {lo} and {hi} characters.")


def parse_date(value) -> date | None:
    if value in (None, ""):
        return None
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(str(value)).date()
    except ValueError:
        raise ValidationError("Validation failed.", details=["Published date must be an ISO date."])


def validate_category_payload(data: dict) -> dict:
    errors = []
    name = _text(data, "name")
    _check_length(errors, name, "Category name", 2, 100)
    if errors:
        raise ValidationError("Validation failed.", details=errors)
    return {"name": name}


def validate_book_payload(data: dict) -> dict:
    errors = []

    title = _text(data, "title")
    author = _text(data, "author")
    isbn = _text(data, "isbn")
    category_id = _text(data, "category_id")

    _check_length(errors, title, "Title", 2, 100)
    _check_length(errors, author, "Author", 2, 50)
    _check_length(errors, isbn, "ISBN", 10, 20)
    if not category_id:
        errors.append("Category ID is required.")

    try:
        quantity = int(data.get("quantity", 0))
        if quantity < 0:
            errors.append("Quantity cannot be negative.")
    except (TypeError, ValueError):
        quantity = 0
        errors.append("Quantity must be an integer.")

    published = parse_date(data.get("published_date"))
    if published and published > date.today():
        errors.append("Published date cannot be in the future.")

    if errors:
        raise ValidationError("Validation failed.", details=errors)

    return {
        "title": title,
        "author": author,
        "isbn": isbn,
        "description": _text(data, "description"),
        "published_date": published,
        "quantity": quantity,
        "category_id": category_id,
    }


def parse_paging(args) -> tuple[int, int]:
    default_size = current_app.config.get("DEFAULT_PAGE_SIZE", 5)
    max_size = current_app.config.get("MAX_PAGE_SIZE", 100)
    try:
        page = int(args.get("page", 1))
        page_size = int(args.get("page_size", default_size))
    except (TypeError, ValueError):
        raise ValidationError("Validation failed.", details=["page and page_size must be integers."])

    if page < 1:
        raise ValidationError("Validation failed.", details=["Page number must be greater than 0."])
    if page_size < 1:
        raise ValidationError("Validation failed.", details=["Page size must be greater than 0."])
    return page, min(page_size, max_size)


def parse_bool(value) -> bool | None:
    if value in (None, ""):
        return None
    return str(value).lower() in ("1", "true", "yes")
