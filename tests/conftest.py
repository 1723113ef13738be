import pytest

from libms import create_app
from libms.extensions import db
from libms.models.book import Book
from libms.models.category import Category
from libms.models.user import ROLE_SUPERUSER, ROLE_USER
from libms.services.auth_service import AuthService


@pytest.fixture
def app(tmp_path):
    # each test gets its own sqlite file
    db_file = tmp_path / "libms_test.db"
    app = create_app(overrides={
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{db_file}",
        "SQLALCHEMY_ENGINE_OPTIONS": {"connect_args": {"timeout": 30}},
        "JWT_SECRET_KEY": "libms-test-jwt-secret-key-0123456789abcdef",
        "AUTO_CREATE_TABLES": True,
    })
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make(username="alice", role=ROLE_USER, password="secret123"):
        return AuthService.register(
            username=username,
            email=f"{username}@example.com",
            password=password,
            role=role,
        )
    return _make


@pytest.fixture
def superuser(make_user):
    return make_user("librarian", role=ROLE_SUPERUSER)


@pytest.fixture
def category(app):
    c = Category(name="Fiction")
    db.session.add(c)
    db.session.commit()
    return c


@pytest.fixture
def make_book(app, category):
    counter = {"n": 0}

    def _make(title=None, quantity=1, available=None):
        counter["n"] += 1
        book = Book(
            title=title or f"Book {counter['n']}",
            author="Some Author",
            isbn=f"97800000000{counter['n']:02d}",
            quantity=quantity,
            available=quantity if available is None else available,
            category_id=category.id,
        )
        db.session.add(book)
        db.session.commit()
        return book
    return _make


@pytest.fixture
def auth_headers(app):
    def _headers(user):
        access, _refresh = AuthService.issue_tokens(user)
        return {"Authorization": f"Bearer {access}"}
    return _headers


@pytest.fixture
def available_of(app):
    def _available(book_id):
        db.session.expire_all()
        return db.session.get(Book, book_id).available
    return _available
