from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any, Protocol


class TokenError(Exception):
    """Base class for token verification failures raised by providers."""


class ExpiredTokenError(TokenError):
    """The token signature is valid but its ``exp`` is in the past."""


class InvalidTokenError(TokenError):
    """The token is malformed, tampered with or signed by another key."""


class TokenProvider(Protocol):
    """Port for signing and verifying JWTs.

    Access and refresh tokens are signed with independent secrets so one can
    never be replayed as the other.
    """

    def create_access_token(
        self,
        *,
        identity: int | str,
        additional_claims: dict[str, Any] | None = None,
    ) -> str: ...

    def create_refresh_token(
        self,
        *,
        identity: int | str,
        additional_claims: dict[str, Any] | None = None,
    ) -> str: ...

    def decode_refresh_token(self, token: str) -> dict[str, Any]:
        """Verify signature and expiry and return the claims.

        :raises ExpiredTokenError: When ``exp`` has passed.
        :raises InvalidTokenError: For any other verification failure.
        """
        ...


class StubTokenProvider(TokenProvider):
    """Deterministic token provider used in unit tests."""

    def __init__(self) -> None:
        self._seq = 0
        self._issued: dict[str, dict[str, Any]] = {}

    def _mk(self, ttype: str, identity: int | str, claims: dict[str, Any] | None) -> str:
        self._seq += 1
        token = f"{ttype}.{identity}.{self._seq}"
        payload: dict[str, Any] = {
            "sub": str(identity),
            "type": ttype,
            "exp": int((datetime.now(tz=UTC) + timedelta(days=7)).timestamp()),
        }
        payload.update(claims or {})
        self._issued[token] = payload
        return token

    def create_access_token(
        self,
        *,
        identity: int | str,
        additional_claims: dict[str, Any] | None = None,
    ) -> str:
        return self._mk("access", identity, additional_claims)

    def create_refresh_token(
        self,
        *,
        identity: int | str,
        additional_claims: dict[str, Any] | None = None,
    ) -> str:
        return self._mk("refresh", identity, additional_claims)

    def decode_refresh_token(self, token: str) -> dict[str, Any]:
        payload = self._issued.get(token)
        if payload is None or payload["type"] != "refresh":
            raise InvalidTokenError("invalid signature")
        if payload["exp"] <= int(datetime.now(tz=UTC).timestamp()):
            raise ExpiredTokenError("Signature has expired")
        return dict(payload)

    def expire(self, token: str) -> None:
        """Force ``token`` into the past (test helper)."""
        self._issued[token]["exp"] = 0

    def claims(self, token: str) -> dict[str, Any]:
        """Return the raw claims of any issued token (test helper)."""
        return dict(self._issued[token])
