"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import fields, validate

from .common import CamelCaseSchema
from .user import UserSchema

PASSWORD = validate.Length(min=8, max=128)


class SignupSchema(CamelCaseSchema):
    """Input payload for account registration.

    Password confirmation is compared by the service so the client gets the
    same 400 message from every entry point.
    """

    user_name = fields.String(load_default=None, validate=validate.Length(min=1, max=50))
    email = fields.Email(required=True, validate=validate.Length(max=254))
    first_name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    last_name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    password = fields.String(required=True, load_only=True, validate=PASSWORD)
    confirm_password = fields.String(required=True, load_only=True)


class SigninSchema(CamelCaseSchema):
    """Input payload for authenticating a user."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=1))


class ResetPasswordSchema(CamelCaseSchema):
    email = fields.Email(required=True, validate=validate.Length(max=254))


class VerifyCodeSchema(CamelCaseSchema):
    email = fields.Email(required=True, validate=validate.Length(max=254))
    code = fields.String(required=True, validate=validate.Length(min=1, max=16))


class ChangePasswordSchema(CamelCaseSchema):
    """Logged-out password change (after a verified reset code)."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    new_password = fields.String(required=True, load_only=True, validate=PASSWORD)


class LoggedInPasswordChangeSchema(CamelCaseSchema):
    current_password = fields.String(required=True, load_only=True)
    new_password = fields.String(required=True, load_only=True, validate=PASSWORD)
    confirm_password = fields.String(required=True, load_only=True)


class AuthResponseSchema(CamelCaseSchema):
    """Sanitized user plus a token pair."""

    user = fields.Nested(UserSchema, required=True)
    access_token = fields.String(required=True)
    refresh_token = fields.String(required=True)


class OAuthResponseSchema(AuthResponseSchema):
    message = fields.String(required=True)


class RefreshResponseSchema(CamelCaseSchema):
    message = fields.String(required=True)
    access_token = fields.String(required=True)
    refresh_token = fields.String(required=True)
