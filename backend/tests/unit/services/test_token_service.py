# tests/unit/services/test_token_service.py
from __future__ import annotations

import pytest
from app.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from app.services._shared.errors import AuthenticationError
from app.services._shared.ports.token_provider import StubTokenProvider
from app.services.tokens.dto import RefreshOut, TokenPayload
from app.services.tokens.service import ROTATION_CLAIM, TokenService
from freezegun import freeze_time


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def provider() -> StubTokenProvider:
    return StubTokenProvider()


@pytest.fixture()
def service(provider) -> TokenService:
    return TokenService(token_provider=provider, max_rotations=5)


# -------------------------------- Tests ----------------------------------- #
def test_issue_embeds_identity_and_full_budget(service, provider):
    pair = service.issue(TokenPayload(id=7, email="a@example.com"))

    access = provider.claims(pair.access_token)
    refresh = provider.claims(pair.refresh_token)
    assert access["id"] == 7
    assert access["email"] == "a@example.com"
    assert ROTATION_CLAIM not in access
    assert refresh[ROTATION_CLAIM] == 5


def test_rotation_budget_allows_five_then_refuses(service, provider):
    """countEx walks 5 -> 0; the token holding 0 is refused."""
    token = service.issue(TokenPayload(id=1, email="a@example.com")).refresh_token

    for expected in (4, 3, 2, 1, 0):
        out = service.rotate(token)
        assert isinstance(out, RefreshOut)
        assert out.message == "Tokens refreshed successfully"
        token = out.refresh_token
        assert provider.claims(token)[ROTATION_CLAIM] == expected

    with pytest.raises(AuthenticationError, match="please go to login"):
        service.rotate(token)


@pytest.mark.parametrize("token", [None, "", "   "])
def test_blank_token_is_required(service, token):
    with pytest.raises(AuthenticationError, match="Refresh token is required"):
        service.rotate(token)


def test_expired_token(service, provider):
    token = service.issue(TokenPayload(id=1, email="a@example.com")).refresh_token
    provider.expire(token)

    with pytest.raises(AuthenticationError, match="Refresh token expired"):
        service.rotate(token)


def test_access_token_is_not_a_refresh_token(service):
    pair = service.issue(TokenPayload(id=1, email="a@example.com"))

    with pytest.raises(AuthenticationError, match="Invalid refresh token"):
        service.rotate(pair.access_token)


def test_missing_or_bogus_counter_is_exhausted(provider):
    service = TokenService(token_provider=provider)
    token = provider.create_refresh_token(identity=1, additional_claims={ROTATION_CLAIM: True})

    with pytest.raises(AuthenticationError, match="please go to login"):
        service.rotate(token)


# ------------------------ With the real JWT adapter ------------------------ #
class TestWithJWTProvider:
    @pytest.fixture()
    def jwt_service(self, app):
        return TokenService(token_provider=JWTTokenProvider(), max_rotations=2)

    def test_rotate_real_tokens(self, jwt_service):
        pair = jwt_service.issue(TokenPayload(id=3, email="c@example.com"))

        out = jwt_service.rotate(pair.refresh_token)

        assert out.refresh_token != pair.refresh_token
        assert out.access_token

    def test_refresh_expires_after_seven_days(self, jwt_service):
        with freeze_time("2024-01-01 12:00:00"):
            pair = jwt_service.issue(TokenPayload(id=3, email="c@example.com"))

        with freeze_time("2024-01-08 12:00:01"), pytest.raises(
            AuthenticationError, match="Refresh token expired"
        ):
            jwt_service.rotate(pair.refresh_token)

    def test_tampered_token_rejected(self, jwt_service):
        pair = jwt_service.issue(TokenPayload(id=3, email="c@example.com"))

        with pytest.raises(AuthenticationError, match="Invalid refresh token"):
            jwt_service.rotate(pair.refresh_token[:-2] + "xx")

    def test_access_jwt_rejected_as_refresh(self, jwt_service):
        pair = jwt_service.issue(TokenPayload(id=3, email="c@example.com"))

        with pytest.raises(AuthenticationError, match="Invalid refresh token"):
            jwt_service.rotate(pair.access_token)
