"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar, cast

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request

from app.core.errors import Unauthorized
from app.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from app.schemas.common import PaginationQuerySchema
from app.services._shared.ports.mailer import Mailer
from app.services.tokens.service import DEFAULT_MAX_ROTATIONS, TokenService

F = TypeVar("F", bound=Callable[..., Any])


@dataclass(frozen=True, slots=True)
class AuthContext:
    """Identity of the caller, built only from a verified access token."""

    user_id: int
    email: str


@dataclass(slots=True)
class Pagination:
    """Container holding pagination arguments parsed from the request."""

    page: int
    limit: int


def parse_pagination(default_limit: int = 10, max_limit: int = 100) -> Pagination:
    """Parse pagination parameters from ``request.args`` using Marshmallow."""

    schema = PaginationQuerySchema(default_limit=default_limit, max_limit=max_limit)
    data = schema.load(request.args)
    return Pagination(page=data["page"], limit=data["limit"])


def _context_from_jwt() -> AuthContext:
    identity = get_jwt_identity()
    claims = get_jwt() or {}
    try:
        user_id = int(identity)
    except (TypeError, ValueError) as exc:
        raise Unauthorized("Invalid token subject") from exc
    return AuthContext(user_id=user_id, email=str(claims.get("email", "")))


def current_auth() -> AuthContext:
    """Return the caller's identity; a missing or bad bearer token yields 401."""

    verify_jwt_in_request(optional=False)
    return _context_from_jwt()


def optional_auth() -> AuthContext | None:
    """Like :func:`current_auth` but anonymous requests return ``None``.

    A bearer token that is present but invalid still yields 401.
    """

    verify_jwt_in_request(optional=True)
    if get_jwt_identity() is None:
        return None
    return _context_from_jwt()


# --------------------------- Service wiring -------------------------------


def token_service() -> TokenService:
    """Build a :class:`TokenService` from the current app config."""

    cfg = current_app.config
    return TokenService(
        token_provider=JWTTokenProvider(),
        max_rotations=int(cfg.get("JWT_REFRESH_MAX_ROTATIONS", DEFAULT_MAX_ROTATIONS)),
    )


def mailer() -> Mailer:
    """Return the mailer registered by the app factory."""

    return cast(Mailer, current_app.extensions["mailer"])


def json_body() -> dict[str, Any]:
    """Return the JSON body, or form fields for multipart/urlencoded posts."""

    if request.is_json:
        return cast(dict[str, Any], request.get_json(silent=True) or {})
    return request.form.to_dict()


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
