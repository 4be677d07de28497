"""Authentication endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from app.api.deps import current_auth, json_response, mailer, timing, token_service
from app.core.extensions import limiter
from app.schemas import (
    AuthResponseSchema,
    ChangePasswordSchema,
    LoggedInPasswordChangeSchema,
    MessageSchema,
    RefreshResponseSchema,
    ResetPasswordSchema,
    SigninSchema,
    SignupSchema,
    VerifyCodeSchema,
)
from app.services.auth.dto import (
    ChangePasswordIn,
    LoggedInPasswordChangeIn,
    SigninIn,
    SignupIn,
    VerifyCodeIn,
)
from app.services.auth.service import AuthService

bp = Blueprint("auth", __name__, url_prefix="/auth")

signup_schema = SignupSchema()
signin_schema = SigninSchema()
reset_schema = ResetPasswordSchema()
verify_schema = VerifyCodeSchema()
change_schema = ChangePasswordSchema()
logged_in_change_schema = LoggedInPasswordChangeSchema()
auth_response_schema = AuthResponseSchema()
refresh_response_schema = RefreshResponseSchema()
message_schema = MessageSchema()


def _auth_rate_limit() -> str:
    return str(current_app.config.get("AUTH_RATE_LIMIT", "10 per minute"))


def _service() -> AuthService:
    return AuthService(tokens=token_service(), mailer=mailer())


@bp.post("/signup")
@timing
def signup():
    """Register an account and return the user with a token pair."""

    data = signup_schema.load(request.get_json(silent=True) or {})
    result = _service().signup(SignupIn(**data))
    return json_response(auth_response_schema.dump(result), status=201)


@bp.post("/signin")
@limiter.limit(_auth_rate_limit)
@timing
def signin():
    """Authenticate credentials and issue a token pair."""

    data = signin_schema.load(request.get_json(silent=True) or {})
    result = _service().signin(SigninIn(**data))
    return json_response(auth_response_schema.dump(result))


@bp.post("/signout")
@timing
def signout():
    auth = current_auth()
    return json_response(message_schema.dump(_service().signout(auth.user_id)))


@bp.post("/refreshToken/<path:token>")
@timing
def refresh_token(token: str):
    """Rotate a refresh token passed in the path."""

    result = _service().refresh_token(token)
    return json_response(refresh_response_schema.dump(result))


@bp.post("/reset-password")
@limiter.limit(_auth_rate_limit)
@timing
def reset_password():
    data = reset_schema.load(request.get_json(silent=True) or {})
    return json_response(message_schema.dump(_service().reset_password(data["email"])))


@bp.post("/verify-code")
@timing
def verify_code():
    data = verify_schema.load(request.get_json(silent=True) or {})
    return json_response(message_schema.dump(_service().verify_code(VerifyCodeIn(**data))))


@bp.post("/change-password")
@timing
def change_password():
    """Set a new password after a verified reset code."""

    data = change_schema.load(request.get_json(silent=True) or {})
    result = _service().change_password(ChangePasswordIn(**data))
    return json_response(message_schema.dump(result))


@bp.post("/change-password-for-logged-in-user")
@timing
def change_password_for_logged_in_user():
    auth = current_auth()
    data = logged_in_change_schema.load(request.get_json(silent=True) or {})
    result = _service().change_password_for_logged_in_user(
        LoggedInPasswordChangeIn(user_id=auth.user_id, **data)
    )
    return json_response(message_schema.dump(result))
