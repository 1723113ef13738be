from __future__ import annotations

from datetime import datetime

from sqlalchemy import func, select, update
from sqlalchemy.orm import joinedload, selectinload

from libms.extensions import db
from libms.models.borrowing_request import (
    BorrowingRequest,
    BorrowingRequestDetail,
    RequestStatus,
)


def _with_display_data():
    # requestor/approver names and book titles are read with the request
    return (
        joinedload(BorrowingRequest.requestor),
        joinedload(BorrowingRequest.approver),
        selectinload(BorrowingRequest.details).joinedload(BorrowingRequestDetail.book),
    )


class BorrowingRequestRepo:
    @staticmethod
    def add(request: BorrowingRequest):
        # details cascade with the request
        db.session.add(request)
        return request

    @staticmethod
    def get(request_id: str):
        return db.session.get(BorrowingRequest, request_id)

    @staticmethod
    def get_with_details(request_id: str):
        stmt = (
            select(BorrowingRequest)
            .options(*_with_display_data())
            .where(BorrowingRequest.id == request_id)
        )
        return db.session.execute(stmt).unique().scalar_one_or_none()

    @staticmethod
    def list_by_requestor(user_id: str):
        stmt = (
            select(BorrowingRequest)
            .options(*_with_display_data())
            .where(BorrowingRequest.requestor_id == user_id)
            .order_by(BorrowingRequest.requested_date.desc())
        )
        return db.session.execute(stmt).unique().scalars().all()

    @staticmethod
    def list_all():
        stmt = (
            select(BorrowingRequest)
            .options(*_with_display_data())
            .order_by(BorrowingRequest.requested_date.desc())
        )
        return db.session.execute(stmt).unique().scalars().all()

    @staticmethod
    def count_between(user_id: str, start: datetime, end: datetime) -> int:
        stmt = select(func.count(BorrowingRequest.id)).where(
            BorrowingRequest.requestor_id == user_id,
            BorrowingRequest.requested_date >= start,
            BorrowingRequest.requested_date < end,
        )
        return db.session.execute(stmt).scalar_one()

    @staticmethod
    def transition(request_id: str, status: RequestStatus, approver_id: str) -> bool:
        """
        Move a Waiting request to `status`. Returns False when the row is no
        longer Waiting, i.e. another approver already decided it.
        """
        result = db.session.execute(
            update(BorrowingRequest)
            .where(
                BorrowingRequest.id == request_id,
                BorrowingRequest.status == RequestStatus.WAITING,
            )
            .values(status=status, approver_id=approver_id),
            execution_options={"synchronize_session": False},
        )
        return result.rowcount == 1
