"""Google sign-in endpoints."""

from __future__ import annotations

import logging

from flask import Blueprint, current_app, redirect, request

from app.api.deps import json_response, timing, token_service
from app.core.errors import BadGateway, NotFound, Unauthorized
from app.infra.oauth.google import (
    STATE_COOKIE,
    GoogleOAuthClient,
    OAuthIdentityError,
    OAuthProviderError,
    OAuthStateError,
)
from app.schemas import OAuthResponseSchema
from app.services.oauth.service import OAuthService

log = logging.getLogger(__name__)

bp = Blueprint("oauth", __name__, url_prefix="/oauth")

oauth_response_schema = OAuthResponseSchema()


def _google() -> GoogleOAuthClient:
    client: GoogleOAuthClient = current_app.extensions["google_oauth"]
    if not client.configured:
        raise NotFound("Google sign-in is not configured")
    return client


def _cookie_path() -> str:
    prefix = current_app.config.get("API_BASE_PREFIX", "").rstrip("/")
    return f"{prefix}/oauth/google_/callback"


@bp.get("/google/sign")
@timing
def google_sign():
    """Redirect to Google; the flow state rides in a signed HttpOnly cookie."""

    client = _google()
    auth_request = client.authorization_request()
    resp = redirect(auth_request.url)
    resp.headers["Cache-Control"] = "no-store"
    resp.set_cookie(
        STATE_COOKIE,
        auth_request.cookie_value,
        max_age=client.state_max_age,
        httponly=True,
        secure=request.is_secure,
        samesite="Lax",
        path=_cookie_path(),
    )
    return resp


@bp.get("/google_/callback")
@timing
def google_callback():
    """Finish Google sign-in and return the local account with tokens."""

    client = _google()
    error = request.args.get("error")
    if error:
        raise Unauthorized(f"Google sign-in failed: {error}")
    try:
        profile = client.complete(
            state=request.args.get("state"),
            code=request.args.get("code"),
            cookie_value=request.cookies.get(STATE_COOKIE),
        )
    except (OAuthStateError, OAuthIdentityError) as exc:
        raise Unauthorized(str(exc)) from exc
    except OAuthProviderError as exc:
        raise BadGateway(str(exc)) from exc

    result = OAuthService(tokens=token_service()).validate_user(profile)
    resp = json_response(oauth_response_schema.dump(result))
    resp.delete_cookie(STATE_COOKIE, path=_cookie_path())
    return resp
