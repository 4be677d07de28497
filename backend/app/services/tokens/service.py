"""
TokenService
============

Issues access/refresh token pairs and rotates refresh tokens.

Refresh tokens are stateless: each one embeds a rotation counter
(``countEx``) that starts at the configured budget and is decremented on
every rotation. A token whose counter has reached zero is refused, which
forces a fresh sign-in at least every ``budget + 1`` refresh cycles. Nothing
is stored server side, so an individual refresh token cannot be revoked
before its expiry.
"""

from __future__ import annotations

import logging
from typing import Any

from app.services._shared.base import BaseService
from app.services._shared.errors import AuthenticationError
from app.services._shared.ports import ExpiredTokenError, InvalidTokenError, TokenProvider
from app.services.tokens.dto import RefreshOut, TokenPairOut, TokenPayload

logger = logging.getLogger(__name__)

ROTATION_CLAIM = "countEx"
DEFAULT_MAX_ROTATIONS = 5


class TokenService(BaseService):
    """Token lifecycle (issue / rotate) over a pluggable :class:`TokenProvider`."""

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        max_rotations: int = DEFAULT_MAX_ROTATIONS,
    ) -> None:
        super().__init__()
        self.tokens = token_provider
        self.max_rotations = max_rotations

    def issue(self, payload: TokenPayload) -> TokenPairOut:
        """
        Sign a fresh token pair for ``payload``.

        :param payload: Identity to embed.
        :returns: Access token and a refresh token carrying the full
            rotation budget.
        """
        return self._sign(payload, remaining=self.max_rotations)

    def rotate(self, refresh_token: str | None) -> RefreshOut:
        """
        Exchange a refresh token for a new pair with one fewer rotation left.

        :param refresh_token: Encoded refresh JWT.
        :returns: New access token and refresh token (``countEx - 1``).
        :raises AuthenticationError: When the token is missing, invalid,
            expired, or its rotation budget is exhausted.
        """
        if refresh_token is None or not refresh_token.strip():
            raise AuthenticationError("Refresh token is required")

        try:
            claims = self.tokens.decode_refresh_token(refresh_token.strip())
        except ExpiredTokenError as exc:
            raise AuthenticationError("Refresh token expired") from exc
        except InvalidTokenError as exc:
            raise AuthenticationError(f"Invalid refresh token: {exc}") from exc

        remaining = self._remaining(claims)
        if remaining <= 0:
            logger.info("tokens.rotation_exhausted", extra={"user_id": claims.get("sub")})
            raise AuthenticationError("Invalid refresh token, please go to login")

        payload = TokenPayload(id=self._user_id(claims), email=str(claims.get("email", "")))
        pair = self._sign(payload, remaining=remaining - 1)
        return RefreshOut(access_token=pair.access_token, refresh_token=pair.refresh_token)

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _sign(self, payload: TokenPayload, *, remaining: int) -> TokenPairOut:
        claims: dict[str, Any] = {"id": payload.id, "email": payload.email}
        access = self.tokens.create_access_token(identity=payload.id, additional_claims=claims)
        refresh = self.tokens.create_refresh_token(
            identity=payload.id,
            additional_claims={**claims, ROTATION_CLAIM: remaining},
        )
        return TokenPairOut(access_token=access, refresh_token=refresh)

    @staticmethod
    def _remaining(claims: dict[str, Any]) -> int:
        value = claims.get(ROTATION_CLAIM)
        if isinstance(value, bool) or not isinstance(value, int):
            return 0
        return value

    @staticmethod
    def _user_id(claims: dict[str, Any]) -> int:
        subject = claims.get("sub", claims.get("id"))
        try:
            return int(subject)
        except (TypeError, ValueError) as exc:
            raise AuthenticationError("Invalid refresh token: bad subject") from exc
