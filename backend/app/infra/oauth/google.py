"""
Google OpenID Connect adapter.

Runs the authorization-code flow with PKCE without any server-side session:
``state``, the PKCE verifier and the ``nonce`` travel in a short-lived cookie
signed with itsdangerous. The callback exchanges the code at Google's token
endpoint and verifies the returned ``id_token`` against Google's JWKS.
"""

from __future__ import annotations

import base64
import hashlib
import logging
import secrets
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

import jwt
import requests
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from jwt import PyJWKClient
from jwt.exceptions import PyJWKClientError

from app.services.oauth.dto import OAuthProfileIn

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
JWKS_URL = "https://www.googleapis.com/oauth2/v3/certs"
ISSUERS = ["accounts.google.com", "https://accounts.google.com"]
STATE_COOKIE = "google_oauth_state"
_COOKIE_SALT = "google-oauth-state"


class OAuthError(Exception):
    """Base class for Google sign-in failures."""


class OAuthStateError(OAuthError):
    """Missing, forged, expired or mismatched ``state`` cookie."""


class OAuthIdentityError(OAuthError):
    """The ``id_token`` is invalid or does not assert a usable identity."""


class OAuthProviderError(OAuthError):
    """Google could not be reached or answered with an error."""


@dataclass(frozen=True, slots=True)
class AuthorizationRequest:
    """Where to send the browser, plus the signed cookie to set on the redirect."""

    url: str
    cookie_value: str


def pkce_pair() -> tuple[str, str]:
    """Return ``(verifier, S256 challenge)``."""
    verifier = secrets.token_urlsafe(64)
    digest = hashlib.sha256(verifier.encode("utf-8")).digest()
    challenge = base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")
    return verifier, challenge


@dataclass
class GoogleOAuthClient:
    """
    Google sign-in for one OAuth client registration.

    :param client_id: OAuth client id (also the expected ``aud``).
    :param client_secret: OAuth client secret.
    :param redirect_uri: Registered callback URL.
    :param secret_key: Key signing the state cookie.
    :param state_max_age: Cookie lifetime in seconds.
    :param timeout: HTTP timeout for the token exchange, in seconds.
    :param jwks_client: JWKS resolver; defaults to Google's certs endpoint.
    """

    client_id: str
    client_secret: str
    redirect_uri: str
    secret_key: str
    state_max_age: int = 600
    timeout: float = 10.0
    jwks_client: Any = field(default=None)

    @classmethod
    def from_config(cls, cfg) -> GoogleOAuthClient:
        return cls(
            client_id=cfg.get("GOOGLE_CLIENT_ID", ""),
            client_secret=cfg.get("GOOGLE_CLIENT_SECRET", ""),
            redirect_uri=cfg.get("GOOGLE_CALLBACK_URL", ""),
            secret_key=cfg["SECRET_KEY"],
            state_max_age=int(cfg.get("OAUTH_STATE_MAX_AGE", 600)),
        )

    @property
    def configured(self) -> bool:
        return bool(self.client_id and self.client_secret and self.redirect_uri)

    # ------------------------------------------------------------------ #
    # Step 1: redirect to Google
    # ------------------------------------------------------------------ #

    def authorization_request(self) -> AuthorizationRequest:
        state = secrets.token_urlsafe(32)
        nonce = secrets.token_urlsafe(32)
        verifier, challenge = pkce_pair()
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": "openid email profile",
            "state": state,
            "prompt": "select_account",
            "code_challenge": challenge,
            "code_challenge_method": "S256",
            "nonce": nonce,
        }
        cookie = self._serializer().dumps(
            {"state": state, "code_verifier": verifier, "nonce": nonce}
        )
        return AuthorizationRequest(url=f"{AUTHORIZE_URL}?{urlencode(params)}", cookie_value=cookie)

    # ------------------------------------------------------------------ #
    # Step 2: callback
    # ------------------------------------------------------------------ #

    def complete(self, *, state: str | None, code: str | None, cookie_value: str | None) -> OAuthProfileIn:
        """
        Finish the flow and return the verified Google identity.

        :raises OAuthStateError: Bad or missing state.
        :raises OAuthProviderError: Token exchange failed.
        :raises OAuthIdentityError: ``id_token`` rejected.
        """
        stored = self._load_cookie(cookie_value)
        expected = stored.get("state")
        if not state or not isinstance(expected, str) or not secrets.compare_digest(expected, state):
            raise OAuthStateError("OAuth state mismatch")
        if not code:
            raise OAuthStateError("Missing authorization code")

        tokens = self._exchange_code(code, stored.get("code_verifier", ""))
        id_token = tokens.get("id_token")
        if not isinstance(id_token, str) or not id_token.strip():
            raise OAuthProviderError("Google response carried no id_token")

        claims = self.verify_id_token(id_token, expected_nonce=stored.get("nonce"))
        return self._profile(claims)

    def verify_id_token(self, id_token: str, *, expected_nonce: str | None = None) -> dict[str, Any]:
        """Verify signature, audience, issuer, nonce and email verification."""
        try:
            signing_key = self._jwks().get_signing_key_from_jwt(id_token).key
            claims = jwt.decode(
                id_token,
                signing_key,
                algorithms=["RS256"],
                audience=self.client_id,
                issuer=ISSUERS,
                leeway=60,
            )
        except PyJWKClientError as exc:
            raise OAuthProviderError("Google signing keys unavailable") from exc
        except jwt.InvalidTokenError as exc:
            raise OAuthIdentityError(f"Invalid Google credential: {exc}") from exc

        if claims.get("email_verified") is not True:
            raise OAuthIdentityError("Google email is not verified")
        if expected_nonce:
            nonce = claims.get("nonce")
            if not isinstance(nonce, str) or not secrets.compare_digest(nonce, expected_nonce):
                raise OAuthIdentityError("Google token nonce mismatch")
        return claims

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _serializer(self) -> URLSafeTimedSerializer:
        return URLSafeTimedSerializer(secret_key=self.secret_key, salt=_COOKIE_SALT)

    def _load_cookie(self, raw: str | None) -> dict[str, Any]:
        if not raw:
            raise OAuthStateError("Missing OAuth state cookie")
        try:
            payload = self._serializer().loads(raw, max_age=self.state_max_age)
        except SignatureExpired as exc:
            raise OAuthStateError("OAuth state expired") from exc
        except BadSignature as exc:
            raise OAuthStateError("OAuth state is invalid") from exc
        if not isinstance(payload, dict):
            raise OAuthStateError("OAuth state is invalid")
        return payload

    def _exchange_code(self, code: str, verifier: str) -> dict[str, Any]:
        try:
            resp = requests.post(
                TOKEN_URL,
                data={
                    "code": code,
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "redirect_uri": self.redirect_uri,
                    "grant_type": "authorization_code",
                    "code_verifier": verifier,
                },
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("oauth.google.network_error", extra={"error": str(exc)})
            raise OAuthProviderError("Google auth failed (network error)") from exc

        if resp.status_code != 200:
            logger.warning("oauth.google.token_error", extra={"status": resp.status_code})
            raise OAuthProviderError(f"Google auth failed (HTTP {resp.status_code})")
        try:
            payload = resp.json()
        except ValueError as exc:
            raise OAuthProviderError("Google auth failed (invalid JSON response)") from exc
        return payload if isinstance(payload, dict) else {}

    def _jwks(self) -> Any:
        if self.jwks_client is None:
            self.jwks_client = PyJWKClient(JWKS_URL)
        return self.jwks_client

    @staticmethod
    def _profile(claims: dict[str, Any]) -> OAuthProfileIn:
        email = claims.get("email")
        if not isinstance(email, str) or not email.strip():
            raise OAuthIdentityError("Google token missing email")
        return OAuthProfileIn(
            email=email.strip().lower(),
            first_name=claims.get("given_name") or email.split("@")[0],
            last_name=claims.get("family_name") or "",
            picture=claims.get("picture"),
        )
