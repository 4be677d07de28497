# tests/unit/services/test_oauth_service.py
from __future__ import annotations

import pytest
from app.models.user import User
from app.services._shared.ports.token_provider import StubTokenProvider
from app.services.oauth.dto import OAuthProfileIn
from app.services.oauth.service import OAuthService
from app.services.tokens.service import TokenService
from tests.factories.user import DEFAULT_PASSWORD, UserFactory


@pytest.fixture()
def service() -> OAuthService:
    return OAuthService(tokens=TokenService(token_provider=StubTokenProvider()))


def _profile(email: str = "gwen@example.com") -> OAuthProfileIn:
    return OAuthProfileIn(
        email=email, first_name="Gwen", last_name="Stacy", picture="https://img.example/g.png"
    )


def test_first_sign_in_creates_account(service, session):
    out = service.validate_user(_profile())

    assert out.created is True
    assert out.message == "User created successfully"
    assert out.user.email == "gwen@example.com"
    assert out.user.picture == "https://img.example/g.png"
    assert out.access_token.startswith("access.")

    stored = session.query(User).filter_by(email="gwen@example.com").one()
    assert stored.password_hash  # random, never empty


def test_second_sign_in_reuses_account(service, session):
    first = service.validate_user(_profile())
    second = service.validate_user(_profile())

    assert second.created is False
    assert second.message == "User signed in successfully"
    assert second.user.id == first.user.id
    assert session.query(User).filter_by(email="gwen@example.com").count() == 1


def test_existing_password_account_is_linked_by_email(service):
    user = UserFactory(email="gwen@example.com", first_name="Original")

    out = service.validate_user(_profile())

    assert out.created is False
    assert out.user.id == user.id
    assert out.user.first_name == "Original"  # profile left untouched
    refreshed = service.validate_user(_profile())
    assert refreshed.user.id == user.id


def test_existing_password_still_works_after_google_sign_in(service, session):
    user = UserFactory(email="gwen@example.com")
    service.validate_user(_profile())

    session.expire_all()
    assert session.get(User, user.id).verify_password(DEFAULT_PASSWORD)
