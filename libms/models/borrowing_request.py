import enum
import uuid

from libms.extensions import db
from libms.utils.clock import utcnow


class RequestStatus(str, enum.Enum):
    WAITING = "Waiting"
    APPROVED = "Approved"
    REJECTED = "Rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not RequestStatus.WAITING


class BorrowingRequest(db.Model):
    __tablename__ = "borrowing_requests"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    requestor_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)
    requested_date = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)

    status = db.Column(
        db.Enum(RequestStatus, native_enum=False, length=20,
                values_callable=lambda e: [s.value for s in e]),
        nullable=False,
        default=RequestStatus.WAITING,
    )
    approver_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=True)

    requestor = db.relationship("User", foreign_keys=[requestor_id])
    approver = db.relationship("User", foreign_keys=[approver_id])

    # aggregate: details are created with the request and never persisted alone
    details = db.relationship(
        "BorrowingRequestDetail",
        back_populates="request",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class BorrowingRequestDetail(db.Model):
    __tablename__ = "borrowing_request_details"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    request_id = db.Column(db.String(36), db.ForeignKey("borrowing_requests.id"), nullable=False, index=True)
    book_id = db.Column(db.String(36), db.ForeignKey("books.id"), nullable=False, index=True)

    request = db.relationship("BorrowingRequest", back_populates="details")
    book = db.relationship("Book")
