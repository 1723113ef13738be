from datetime import datetime

import pytest
from sqlalchemy import delete

from libms.exceptions import (
    BookNotFound,
    BookUnavailable,
    InvalidTransition,
    NotFound,
    QuotaExceeded,
    ValidationError,
)
from libms.extensions import db, transaction
from libms.models.book import Book
from libms.models.borrowing_request import BorrowingRequest, RequestStatus
from libms.repositories.borrowing_request_repo import BorrowingRequestRepo
from libms.services.borrowing_service import BorrowingService

MAY = datetime(2026, 5, 10, 12, 0)


def _request_count():
    return db.session.query(BorrowingRequest).count()


@pytest.mark.parametrize("k", [1, 3, 5])
def test_create_reserves_one_copy_per_book(make_user, make_book, available_of, k):
    user = make_user()
    books = [make_book(quantity=2) for _ in range(k)]

    request = BorrowingService.create_request([b.id for b in books], user.id, now=MAY)

    assert request.status is RequestStatus.WAITING
    assert request.approver_id is None
    assert request.requested_date == MAY
    assert len(request.details) == k
    for b in books:
        assert available_of(b.id) == 1


def test_create_returns_display_data(make_user, make_book):
    user = make_user("reader")
    book = make_book(title="Dune")

    request = BorrowingService.create_request([book.id], user.id)

    assert request.requestor.username == "reader"
    assert [d.book.title for d in request.details] == ["Dune"]


@pytest.mark.parametrize("book_ids", [[], None, "not-a-list", ["a", "b", "c", "d", "e", "f"], ["", "x"], ["  "]])
def test_create_rejects_invalid_input_without_side_effects(make_user, make_book, available_of, book_ids):
    user = make_user()
    book = make_book(quantity=1)

    with pytest.raises(ValidationError) as exc:
        BorrowingService.create_request(book_ids, user.id)

    assert exc.value.details
    assert _request_count() == 0
    assert available_of(book.id) == 1


def test_create_requires_requestor(make_book):
    book = make_book()
    with pytest.raises(ValidationError):
        BorrowingService.create_request([book.id], "")


def test_fourth_request_in_month_exceeds_quota(make_user, make_book, available_of):
    user = make_user()
    book = make_book(quantity=10)

    for day in (1, 2, 3):
        BorrowingService.create_request([book.id], user.id, now=datetime(2026, 5, day))

    with pytest.raises(QuotaExceeded):
        BorrowingService.create_request([book.id], user.id, now=datetime(2026, 5, 31, 23, 59))

    assert available_of(book.id) == 7
    assert _request_count() == 3

    # next calendar month starts a new window
    BorrowingService.create_request([book.id], user.id, now=datetime(2026, 6, 1))
    assert available_of(book.id) == 6


def test_quota_counts_requests_not_books(make_user, make_book):
    user = make_user()
    books = [make_book(quantity=5) for _ in range(5)]
    ids = [b.id for b in books]

    for day in (1, 2, 3):
        BorrowingService.create_request(ids, user.id, now=datetime(2026, 5, day))

    with pytest.raises(QuotaExceeded):
        BorrowingService.create_request(ids[:1], user.id, now=datetime(2026, 5, 4))


def test_unavailable_book_rolls_back_whole_request(make_user, make_book, available_of):
    user = make_user()
    first = make_book(quantity=3)
    second = make_book(quantity=3)
    empty = make_book(quantity=1, available=0)

    with pytest.raises(BookUnavailable):
        BorrowingService.create_request([first.id, second.id, empty.id], user.id)

    assert available_of(first.id) == 3
    assert available_of(second.id) == 3
    assert available_of(empty.id) == 0
    assert _request_count() == 0


def test_available_zero_with_quantity_left_is_unavailable(make_user, make_book):
    # the guard reads `available`; `quantity` alone does not make a book loanable
    user = make_user()
    book = make_book(quantity=4, available=0)

    with pytest.raises(BookUnavailable):
        BorrowingService.create_request([book.id], user.id)


def test_missing_book_rolls_back_whole_request(make_user, make_book, available_of):
    user = make_user()
    book = make_book(quantity=2)

    with pytest.raises(BookNotFound):
        BorrowingService.create_request([book.id, "missing-id"], user.id)

    assert available_of(book.id) == 2
    assert _request_count() == 0


def test_repeated_book_id_reserves_twice(make_user, make_book, available_of):
    user = make_user()
    book = make_book(quantity=2)

    request = BorrowingService.create_request([book.id, book.id], user.id)

    assert len(request.details) == 2
    assert available_of(book.id) == 0


def test_repeated_book_id_beyond_stock_fails(make_user, make_book, available_of):
    user = make_user()
    book = make_book(quantity=1)

    with pytest.raises(BookUnavailable):
        BorrowingService.create_request([book.id, book.id], user.id)
    assert available_of(book.id) == 1


def test_approve_sets_status_and_leaves_inventory(make_user, superuser, make_book, available_of):
    user = make_user()
    book = make_book(quantity=2)
    created = BorrowingService.create_request([book.id], user.id)

    approved = BorrowingService.approve_request(created.id, superuser.id)

    assert approved.status is RequestStatus.APPROVED
    assert approved.approver_id == superuser.id
    assert approved.approver.username == superuser.username
    assert available_of(book.id) == 1


def test_reject_restores_each_book(make_user, superuser, make_book, available_of):
    user = make_user()
    a = make_book(quantity=2)
    b = make_book(quantity=1)
    created = BorrowingService.create_request([a.id, b.id], user.id)
    assert available_of(a.id) == 1
    assert available_of(b.id) == 0

    rejected = BorrowingService.reject_request(created.id, superuser.id)

    assert rejected.status is RequestStatus.REJECTED
    assert rejected.approver_id == superuser.id
    assert available_of(a.id) == 2
    assert available_of(b.id) == 1


def test_reject_restores_repeated_book_per_line(make_user, superuser, make_book, available_of):
    user = make_user()
    book = make_book(quantity=3)
    created = BorrowingService.create_request([book.id, book.id], user.id)

    BorrowingService.reject_request(created.id, superuser.id)

    assert available_of(book.id) == 3


@pytest.mark.parametrize("first", ["approve", "reject"])
@pytest.mark.parametrize("second", ["approve", "reject"])
def test_decided_request_cannot_transition_again(make_user, superuser, make_book, available_of, first, second):
    user = make_user()
    book = make_book(quantity=2)
    created = BorrowingService.create_request([book.id], user.id)

    getattr(BorrowingService, f"{first}_request")(created.id, superuser.id)
    available_before = available_of(book.id)

    with pytest.raises(InvalidTransition):
        getattr(BorrowingService, f"{second}_request")(created.id, superuser.id)

    db.session.expire_all()
    after = db.session.get(BorrowingRequest, created.id)
    expected = RequestStatus.APPROVED if first == "approve" else RequestStatus.REJECTED
    assert after.status is expected
    assert available_of(book.id) == available_before


def test_approve_unknown_request(superuser):
    with pytest.raises(NotFound):
        BorrowingService.approve_request("nope", superuser.id)


def test_reject_unknown_request(superuser):
    with pytest.raises(NotFound):
        BorrowingService.reject_request("nope", superuser.id)


def test_reject_fails_when_book_vanished(make_user, superuser, make_book, available_of):
    user = make_user()
    keep = make_book(quantity=2)
    gone = make_book(quantity=2)
    created = BorrowingService.create_request([keep.id, gone.id], user.id)

    # simulate the catalog losing the row behind the request's back
    db.session.execute(delete(Book).where(Book.id == gone.id))
    db.session.commit()

    with pytest.raises(BookNotFound):
        BorrowingService.reject_request(created.id, superuser.id)

    db.session.expire_all()
    assert db.session.get(BorrowingRequest, created.id).status is RequestStatus.WAITING
    assert available_of(keep.id) == 1


def test_list_for_user_round_trip(make_user, make_book):
    alice = make_user("alice")
    bob = make_user("bob")
    a = make_book(quantity=2)
    b = make_book()
    created = BorrowingService.create_request([b.id, a.id], alice.id)
    BorrowingService.create_request([a.id], bob.id)

    rows = BorrowingService.list_for_user(alice.id)

    assert [r.id for r in rows] == [created.id]
    assert rows[0].status is RequestStatus.WAITING
    assert sorted(d.book_id for d in rows[0].details) == sorted([a.id, b.id])


def test_list_all_returns_every_request(make_user, make_book):
    alice = make_user("alice")
    bob = make_user("bob")
    book = make_book(quantity=5)
    BorrowingService.create_request([book.id], alice.id, now=datetime(2026, 5, 1))
    BorrowingService.create_request([book.id], bob.id, now=datetime(2026, 5, 2))

    rows = BorrowingService.list_all()

    # newest first
    assert [r.requestor.username for r in rows] == ["bob", "alice"]


def test_store_writes_commit_only_with_the_transaction(make_user):
    user = make_user()

    with pytest.raises(RuntimeError):
        with transaction():
            BorrowingRequestRepo.add(BorrowingRequest(requestor_id=user.id, status=RequestStatus.WAITING))
            raise RuntimeError("abort")
    assert _request_count() == 0

    with transaction():
        staged = BorrowingRequestRepo.add(BorrowingRequest(requestor_id=user.id, status=RequestStatus.WAITING))
    assert BorrowingRequestRepo.get(staged.id) is not None
