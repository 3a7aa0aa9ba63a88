import pytest

from library_backend import create_app
from library_backend.config import TestConfig
from library_backend.extensions import db
from library_backend.services.book_service import BookService
from library_backend.services.member_service import MemberService


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_book(app):
    def _make(title="Dune", author="Frank Herbert", copies=1, **extra):
        data = {"title": title, "author": author, "copies": copies}
        data.update(extra)
        return BookService.create_book(data)
    return _make


@pytest.fixture
def make_member(app):
    def _make(name="Ada Lovelace", email=None):
        return MemberService.create_member(name, email)
    return _make
