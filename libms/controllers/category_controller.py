from flask import Blueprint, request, jsonify

from libms.models.user import ROLE_SUPERUSER
from libms.services.category_service import CategoryService
from libms.utils.decorators import role_required
from libms.utils.validators import parse_paging

category_bp = Blueprint("categories", __name__)


def _category_dict(c):
    return {"id": c.id, "name": c.name}


@category_bp.get("/")
def list_categories():
    page, page_size = parse_paging(request.args)
    items, total = CategoryService.list_categories(page, page_size)
    return jsonify({
        "success": True,
        "data": {
            "items": [_category_dict(c) for c in items],
            "page": page,
            "page_size": page_size,
            "total_items": total,
        }
    })


@category_bp.get("/<category_id>")
def get_category(category_id: str):
    c = CategoryService.get_category(category_id)
    return jsonify({"success": True, "data": _category_dict(c)})


@category_bp.post("/")
@role_required(ROLE_SUPERUSER)
def create_category():
    c = CategoryService.create_category(request.get_json(silent=True) or {})
    return jsonify({"success": True, "data": _category_dict(c)}), 201


@category_bp.put("/<category_id>")
@role_required(ROLE_SUPERUSER)
def update_category(category_id: str):
    c = CategoryService.update_category(category_id, request.get_json(silent=True) or {})
    return jsonify({"success": True, "data": _category_dict(c)})


@category_bp.delete("/<category_id>")
@role_required(ROLE_SUPERUSER)
def delete_category(category_id: str):
    CategoryService.delete_category(category_id)
    return jsonify({"success": True})
