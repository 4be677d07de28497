from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, cast
from uuid import uuid4

import jwt
from flask import current_app

from app.services._shared.ports import ExpiredTokenError, InvalidTokenError, TokenProvider

REFRESH_ALGORITHM = "HS256"


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    Token adapter backed by Flask-JWT-Extended and PyJWT.

    Access tokens are minted by Flask-JWT-Extended so ``verify_jwt_in_request``
    accepts them. Refresh tokens are signed with PyJWT under
    ``JWT_REFRESH_SECRET_KEY``; they are never accepted as bearer tokens.

    .. note::
       Requires an active Flask app context.
    """

    def create_access_token(
        self,
        *,
        identity: int | str,
        additional_claims: dict[str, Any] | None = None,
    ) -> str:
        from flask_jwt_extended import create_access_token as _create_access

        return cast(
            str,
            _create_access(identity=str(identity), additional_claims=additional_claims or {}),
        )

    def create_refresh_token(
        self,
        *,
        identity: int | str,
        additional_claims: dict[str, Any] | None = None,
    ) -> str:
        cfg = current_app.config
        now = datetime.now(tz=UTC)
        lifetime = cast(timedelta, cfg["JWT_REFRESH_TOKEN_EXPIRES"])
        payload: dict[str, Any] = dict(additional_claims or {})
        payload.update(
            {
                "sub": str(identity),
                "type": "refresh",
                "jti": uuid4().hex,
                "iat": now,
                "exp": now + lifetime,
            }
        )
        return jwt.encode(payload, cfg["JWT_REFRESH_SECRET_KEY"], algorithm=REFRESH_ALGORITHM)

    def decode_refresh_token(self, token: str) -> dict[str, Any]:
        try:
            claims = jwt.decode(
                token,
                current_app.config["JWT_REFRESH_SECRET_KEY"],
                algorithms=[REFRESH_ALGORITHM],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise ExpiredTokenError(str(exc)) from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError(str(exc)) from exc
        if claims.get("type") != "refresh":
            raise InvalidTokenError("not a refresh token")
        return cast(dict[str, Any], claims)
