"""Tests for the Google OpenID Connect adapter.

Google's token endpoint is mocked with ``responses`` and the JWKS lookup is
replaced by an in-process RSA key, so the tests never leave the machine.
"""

from __future__ import annotations

import time
from types import SimpleNamespace
from urllib.parse import parse_qs, urlparse

import jwt
import pytest
import responses
from app.infra.oauth.google import (
    AUTHORIZE_URL,
    TOKEN_URL,
    GoogleOAuthClient,
    OAuthIdentityError,
    OAuthProviderError,
    OAuthStateError,
    pkce_pair,
)
from cryptography.hazmat.primitives.asymmetric import rsa

CLIENT_ID = "client-123.apps.googleusercontent.com"


class _StaticJWKS:
    """Stand-in for :class:`jwt.PyJWKClient` returning one fixed key."""

    def __init__(self, public_key):
        self._key = SimpleNamespace(key=public_key)

    def get_signing_key_from_jwt(self, token):
        return self._key


@pytest.fixture(scope="module")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture()
def client(rsa_key) -> GoogleOAuthClient:
    return GoogleOAuthClient(
        client_id=CLIENT_ID,
        client_secret="shh",
        redirect_uri="http://localhost/oauth/google_/callback",
        secret_key="cookie-secret",
        jwks_client=_StaticJWKS(rsa_key.public_key()),
    )


def _id_token(rsa_key, **overrides) -> str:
    now = int(time.time())
    claims = {
        "iss": "https://accounts.google.com",
        "aud": CLIENT_ID,
        "sub": "1080",
        "email": "Gwen@Example.com",
        "email_verified": True,
        "given_name": "Gwen",
        "family_name": "Stacy",
        "picture": "https://img.example/g.png",
        "iat": now,
        "exp": now + 600,
    }
    claims.update(overrides)
    return jwt.encode(claims, rsa_key, algorithm="RS256")


def _start(client):
    """Return ``(state, nonce, cookie)`` of a fresh authorization request."""
    req = client.authorization_request()
    query = parse_qs(urlparse(req.url).query)
    return query["state"][0], query["nonce"][0], req.cookie_value


# ----------------------------- Authorization ------------------------------ #
def test_authorization_request_uses_pkce_and_state(client):
    req = client.authorization_request()

    assert req.url.startswith(AUTHORIZE_URL)
    query = parse_qs(urlparse(req.url).query)
    assert query["client_id"] == [CLIENT_ID]
    assert query["response_type"] == ["code"]
    assert query["code_challenge_method"] == ["S256"]
    assert set(query["scope"][0].split()) == {"openid", "email", "profile"}
    assert query["state"][0] not in req.cookie_value  # signed, not plain


def test_pkce_pair_is_s256():
    verifier, challenge = pkce_pair()
    assert len(verifier) >= 43
    assert "=" not in challenge


def test_configured_flag(client):
    assert client.configured
    assert not GoogleOAuthClient(
        client_id="", client_secret="", redirect_uri="", secret_key="k"
    ).configured


# -------------------------------- Callback -------------------------------- #
@responses.activate
def test_complete_returns_verified_profile(client, rsa_key):
    state, nonce, cookie = _start(client)
    responses.add(
        responses.POST, TOKEN_URL, json={"id_token": _id_token(rsa_key, nonce=nonce)}, status=200
    )

    profile = client.complete(state=state, code="auth-code", cookie_value=cookie)

    assert profile.email == "gwen@example.com"
    assert profile.first_name == "Gwen"
    assert profile.last_name == "Stacy"
    assert profile.picture == "https://img.example/g.png"
    body = parse_qs(responses.calls[0].request.body)
    assert body["code"] == ["auth-code"]
    assert body["grant_type"] == ["authorization_code"]
    assert body["code_verifier"][0]


def test_state_mismatch(client):
    _, _, cookie = _start(client)

    with pytest.raises(OAuthStateError):
        client.complete(state="forged", code="c", cookie_value=cookie)


def test_missing_or_tampered_cookie(client):
    state, _, cookie = _start(client)

    with pytest.raises(OAuthStateError):
        client.complete(state=state, code="c", cookie_value=None)
    with pytest.raises(OAuthStateError):
        client.complete(state=state, code="c", cookie_value=cookie + "x")


def test_missing_code(client):
    state, _, cookie = _start(client)

    with pytest.raises(OAuthStateError):
        client.complete(state=state, code=None, cookie_value=cookie)


@responses.activate
def test_token_endpoint_error(client):
    state, _, cookie = _start(client)
    responses.add(responses.POST, TOKEN_URL, json={"error": "invalid_grant"}, status=400)

    with pytest.raises(OAuthProviderError, match="HTTP 400"):
        client.complete(state=state, code="c", cookie_value=cookie)


@responses.activate
def test_token_response_without_id_token(client):
    state, _, cookie = _start(client)
    responses.add(responses.POST, TOKEN_URL, json={"access_token": "x"}, status=200)

    with pytest.raises(OAuthProviderError):
        client.complete(state=state, code="c", cookie_value=cookie)


# ------------------------------ id_token checks --------------------------- #
def test_wrong_audience_rejected(client, rsa_key):
    with pytest.raises(OAuthIdentityError):
        client.verify_id_token(_id_token(rsa_key, aud="someone-else"))


def test_wrong_issuer_rejected(client, rsa_key):
    with pytest.raises(OAuthIdentityError):
        client.verify_id_token(_id_token(rsa_key, iss="https://evil.example"))


def test_unverified_email_rejected(client, rsa_key):
    with pytest.raises(OAuthIdentityError, match="not verified"):
        client.verify_id_token(_id_token(rsa_key, email_verified=False))


def test_nonce_mismatch_rejected(client, rsa_key):
    with pytest.raises(OAuthIdentityError, match="nonce"):
        client.verify_id_token(_id_token(rsa_key, nonce="a"), expected_nonce="b")


def test_foreign_signature_rejected(client):
    other = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    with pytest.raises(OAuthIdentityError):
        client.verify_id_token(_id_token(other))
