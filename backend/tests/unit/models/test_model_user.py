"""Tests for the User model."""

from __future__ import annotations

import pytest
from app.models.user import User
from sqlalchemy.exc import IntegrityError


def _user(email: str, user_name: str | None = None) -> User:
    u = User(email=email, user_name=user_name, first_name="Ada", last_name="Lovelace")
    u.password = "secret123"
    return u


class TestUser:
    def test_password_hashing(self, session):
        u = _user("Test@Example.com", "tester")
        session.add(u)
        session.commit()
        assert u.password_hash != "secret123"
        assert u.verify_password("secret123") is True
        assert u.verify_password("wrong") is False

    def test_password_is_write_only(self):
        u = _user("a@example.com", "u1")
        with pytest.raises(AttributeError):
            _ = u.password

    def test_empty_password_rejected(self):
        u = _user("a@example.com")
        with pytest.raises(ValueError):
            u.password = ""

    def test_email_normalized_and_unique(self, session):
        u1 = _user("  Alice@Example.com ", "alice")
        session.add(u1)
        session.commit()
        assert u1.email == "alice@example.com"

        session.add(_user("alice@example.com", "alice2"))
        with pytest.raises(IntegrityError):
            session.commit()
        session.rollback()

    def test_user_name_unique_but_optional(self, session):
        session.add_all([_user("n1@example.com"), _user("n2@example.com")])
        session.commit()  # two accounts without a handle are fine

        session.add(_user("b1@example.com", "bob"))
        session.commit()
        session.add(_user("b2@example.com", "bob"))
        with pytest.raises(IntegrityError):
            session.commit()
        session.rollback()

    def test_blank_user_name_stored_as_none(self):
        assert _user("c@example.com", "   ").user_name is None

    def test_display_name_prefers_handle(self):
        assert _user("d@example.com", "ada").display_name == "ada"
        assert _user("e@example.com").display_name == "Ada Lovelace"

    def test_basic_validations(self):
        with pytest.raises(ValueError):
            _user("")
        with pytest.raises(ValueError):
            _user("not-an-email")
