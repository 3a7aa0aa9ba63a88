import pytest
from werkzeug.security import check_password_hash

from library_backend.errors import AuthError, ConflictError, NotFoundError, ValidationError
from library_backend.extensions import db
from library_backend.models.user import User
from library_backend.services.auth_service import AuthService


def test_register_creates_user_and_member(app):
    result = AuthService.register("Grace Hopper", "Grace@Example.com", "cobol")

    assert result["email"] == "grace@example.com"
    assert result["role"] == "student"
    assert result["name"] == "Grace Hopper"

    profile = AuthService.profile(result["id"])
    assert profile["name"] == "Grace Hopper"
    assert profile["borrowedBooks"] == []


def test_password_is_stored_hashed(app):
    result = AuthService.register("Grace", "grace@example.com", "cobol")
    user = db.session.get(User, result["id"])
    assert user.password_hash != "cobol"
    assert check_password_hash(user.password_hash, "cobol")


def test_register_validation_and_duplicates(app):
    with pytest.raises(ValidationError):
        AuthService.register("", "a@b.c", "pw")
    AuthService.register("Grace", "grace@example.com", "cobol")
    with pytest.raises(ConflictError):
        AuthService.register("Other", "grace@example.com", "pw")


def test_login(app):
    registered = AuthService.register("Grace", "grace@example.com", "cobol")

    result = AuthService.login("grace@example.com", "cobol")

    assert result["id"] == registered["id"]
    assert result["role"] == "student"
    assert result["accessToken"]

    with pytest.raises(AuthError):
        AuthService.login("grace@example.com", "wrong")
    with pytest.raises(AuthError):
        AuthService.login("nobody@example.com", "cobol")


def test_profile_without_member(app):
    with pytest.raises(NotFoundError):
        AuthService.profile(99)


def test_create_admin(app):
    user = AuthService.create_admin("Admin@Library.local", "root", "Head Librarian")
    assert user.role == "admin"
    assert AuthService.login("admin@library.local", "root")["role"] == "admin"
