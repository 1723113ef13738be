from flask import Blueprint, request, jsonify

from libms.models.user import ROLE_SUPERUSER, ROLE_USER
from libms.services.borrowing_service import BorrowingService
from libms.utils.decorators import current_user_id, role_required

borrowing_bp = Blueprint("borrowing", __name__)


def _request_dict(r):
    return {
        "id": r.id,
        "requestor_id": r.requestor_id,
        "requestor_name": r.requestor.username if r.requestor else None,
        "requested_date": r.requested_date.isoformat(),
        "status": r.status.value,
        "approver_id": r.approver_id,
        "approver_name": r.approver.username if r.approver else None,
        "details": [
            {
                "id": d.id,
                "book_id": d.book_id,
                "book_title": d.book.title if d.book else None,
            }
            for d in r.details
        ],
    }


@borrowing_bp.post("/")
@role_required(ROLE_USER)
def create_request():
    data = request.get_json(silent=True) or {}
    r = BorrowingService.create_request(data.get("book_ids"), current_user_id())
    return jsonify({
        "success": True,
        "message": "Borrowing request created successfully.",
        "data": _request_dict(r),
    }), 201


@borrowing_bp.get("/my")
@role_required(ROLE_USER)
def my_requests():
    rows = BorrowingService.list_for_user(current_user_id())
    return jsonify({"success": True, "data": [_request_dict(r) for r in rows]})


@borrowing_bp.get("/")
@role_required(ROLE_SUPERUSER)
def all_requests():
    rows = BorrowingService.list_all()
    return jsonify({"success": True, "data": [_request_dict(r) for r in rows]})


@borrowing_bp.post("/<request_id>/approve")
@role_required(ROLE_SUPERUSER)
def approve_request(request_id: str):
    r = BorrowingService.approve_request(request_id, current_user_id())
    return jsonify({
        "success": True,
        "message": "Borrowing request approved successfully.",
        "data": _request_dict(r),
    })


@borrowing_bp.post("/<request_id>/reject")
@role_required(ROLE_SUPERUSER)
def reject_request(request_id: str):
    r = BorrowingService.reject_request(request_id, current_user_id())
    return jsonify({
        "success": True,
        "message": "Borrowing request rejected successfully.",
        "data": _request_dict(r),
    })
