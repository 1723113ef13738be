from __future__ import annotations

from datetime import datetime

from flask import current_app

from libms.exceptions import (
    BookNotFound,
    InvalidTransition,
    LibraryError,
    NotFound,
    QuotaExceeded,
    ValidationError,
)
from libms.extensions import transaction
from libms.models.borrowing_request import (
    BorrowingRequest,
    BorrowingRequestDetail,
    RequestStatus,
)
from libms.repositories.book_repo import BookRepo
from libms.repositories.borrowing_request_repo import BorrowingRequestRepo
from libms.services.inventory_service import InventoryLedger
from libms.services.quota_service import QuotaCounter
from libms.utils.clock import to_naive_utc, utcnow


# (current status, attempted target) -> message
_TRANSITION_ERRORS = {
    (RequestStatus.APPROVED, RequestStatus.APPROVED): "Request is already approved.",
    (RequestStatus.REJECTED, RequestStatus.APPROVED): "Rejected request cannot be approved.",
    (RequestStatus.REJECTED, RequestStatus.REJECTED): "Request is already rejected.",
    (RequestStatus.APPROVED, RequestStatus.REJECTED): "Approved request cannot be rejected.",
}


class BorrowingService:
    """
    Borrowing workflow: Waiting -> Approved | Rejected.

    Creation reserves one copy per line item and rejection gives them back;
    approval never touches inventory. Each operation runs in one transaction,
    so a failure anywhere leaves books and requests as they were.
    """

    @staticmethod
    def _validate_create(book_ids, requestor_id):
        errors = []
        max_books = current_app.config.get("BORROW_MAX_BOOKS", 5)

        if not requestor_id:
            errors.append("Requestor ID is required.")

        if not isinstance(book_ids, (list, tuple)) or len(book_ids) == 0:
            errors.append("At least one book ID is required.")
        else:
            if len(book_ids) > max_books:
                errors.append(f"Cannot borrow more than {max_books} books in one request.")
            if not all(isinstance(b, str) and b.strip() for b in book_ids):
                errors.append("All book selections must be valid.")

        if errors:
            raise ValidationError("Validation failed.", details=errors)

    @staticmethod
    def _ensure_waiting(request: BorrowingRequest, target: RequestStatus):
        if request.status.is_terminal:
            raise InvalidTransition(_TRANSITION_ERRORS[(request.status, target)])

    @staticmethod
    def create_request(book_ids, requestor_id: str, now: datetime | None = None) -> BorrowingRequest:
        BorrowingService._validate_create(book_ids, requestor_id)

        now = to_naive_utc(now) if now else utcnow()
        limit = current_app.config.get("BORROW_MONTHLY_LIMIT", 3)
        book_ids = [b.strip() for b in book_ids]

        try:
            with transaction():
                count = QuotaCounter.count_this_month(requestor_id, now)
                if count >= limit:
                    raise QuotaExceeded(f"Exceeded monthly borrowing request limit of {limit}.")

                # first failing book aborts everything reserved so far
                details = []
                for book_id in book_ids:
                    book = InventoryLedger.check_and_reserve(book_id)
                    details.append(BorrowingRequestDetail(book_id=book.id, book=book))

                request = BorrowingRequest(
                    requestor_id=requestor_id,
                    requested_date=now,
                    status=RequestStatus.WAITING,
                    details=details,
                )
                BorrowingRequestRepo.add(request)
        except LibraryError as e:
            current_app.logger.warning(
                f"[borrowing] create rejected requestor={requestor_id} reason={e.error}: {e}"
            )
            raise

        current_app.logger.info(
            f"[borrowing] created request={request.id} requestor={requestor_id} books={len(book_ids)}"
        )
        return BorrowingRequestRepo.get_with_details(request.id)

    @staticmethod
    def approve_request(request_id: str, approver_id: str) -> BorrowingRequest:
        if not approver_id:
            raise ValidationError("Validation failed.", details=["Approver ID is required."])

        try:
            with transaction():
                request = BorrowingRequestRepo.get(request_id)
                if request is None:
                    raise NotFound("Request not found.")
                BorrowingService._ensure_waiting(request, RequestStatus.APPROVED)

                # inventory was already taken at creation; approval is status only
                if not BorrowingRequestRepo.transition(request_id, RequestStatus.APPROVED, approver_id):
                    raise InvalidTransition("Request has already been decided.")
        except LibraryError as e:
            current_app.logger.warning(f"[borrowing] approve failed request={request_id}: {e}")
            raise

        current_app.logger.info(f"[borrowing] approved request={request_id} approver={approver_id}")
        return BorrowingRequestRepo.get_with_details(request_id)

    @staticmethod
    def reject_request(request_id: str, approver_id: str) -> BorrowingRequest:
        if not approver_id:
            raise ValidationError("Validation failed.", details=["Approver ID is required."])

        try:
            with transaction():
                request = BorrowingRequestRepo.get_with_details(request_id)
                if request is None:
                    raise NotFound("Borrowing Request not found.")
                BorrowingService._ensure_waiting(request, RequestStatus.REJECTED)

                if not BorrowingRequestRepo.transition(request_id, RequestStatus.REJECTED, approver_id):
                    raise InvalidTransition("Request has already been decided.")

                for detail in request.details:
                    book = detail.book or BookRepo.get(detail.book_id)
                    if book is None:
                        raise BookNotFound(detail.book_id)
                    InventoryLedger.restore(book.id)
        except LibraryError as e:
            current_app.logger.warning(f"[borrowing] reject failed request={request_id}: {e}")
            raise

        current_app.logger.info(
            f"[borrowing] rejected request={request_id} approver={approver_id} restored={len(request.details)}"
        )
        return BorrowingRequestRepo.get_with_details(request_id)

    @staticmethod
    def list_for_user(user_id: str) -> list[BorrowingRequest]:
        return list(BorrowingRequestRepo.list_by_requestor(user_id))

    @staticmethod
    def list_all() -> list[BorrowingRequest]:
        return list(BorrowingRequestRepo.list_all())
