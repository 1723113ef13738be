from flask import Blueprint, request, jsonify

from libms.models.user import ROLE_SUPERUSER
from libms.services.book_service import BookService
from libms.utils.decorators import role_required
from libms.utils.validators import parse_bool, parse_paging

book_bp = Blueprint("books", __name__)


def _book_dict(b):
    return {
        "id": b.id,
        "title": b.title,
        "author": b.author,
        "description": b.description,
        "isbn": b.isbn,
        "published_date": b.published_date.isoformat() if b.published_date else None,
        "quantity": b.quantity,
        "available": b.available,
        "category_id": b.category_id,
        "category_name": b.category.name if b.category else None,
    }


@book_bp.get("/")
def list_books():
    page, page_size = parse_paging(request.args)
    items, total = BookService.list_books(
        title=request.args.get("title"),
        author=request.args.get("author"),
        category_id=request.args.get("category_id"),
        available=parse_bool(request.args.get("available")),
        page=page,
        page_size=page_size,
    )
    return jsonify({
        "success": True,
        "data": {
            "items": [_book_dict(b) for b in items],
            "page": page,
            "page_size": page_size,
            "total_items": total,
        }
    })


@book_bp.get("/<book_id>")
def get_book(book_id: str):
    b = BookService.get_book(book_id)
    return jsonify({"success": True, "data": _book_dict(b)})


@book_bp.post("/")
@role_required(ROLE_SUPERUSER)
def create_book():
    b = BookService.create_book(request.get_json(silent=True) or {})
    return jsonify({"success": True, "data": _book_dict(b)}), 201


@book_bp.put("/<book_id>")
@role_required(ROLE_SUPERUSER)
def update_book(book_id: str):
    b = BookService.update_book(book_id, request.get_json(silent=True) or {})
    return jsonify({"success": True, "data": _book_dict(b)})


@book_bp.delete("/<book_id>")
@role_required(ROLE_SUPERUSER)
def delete_book(book_id: str):
    BookService.delete_book(book_id)
    return jsonify({"success": True})
