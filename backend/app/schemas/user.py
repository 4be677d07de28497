"""User-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import RAISE, fields, validate

from .common import CamelCaseSchema, UserSummarySchema


class UserSchema(CamelCaseSchema):
    """Serialized representation of a user profile (never credentials)."""

    id = fields.Integer(required=True)
    email = fields.Email(required=True)
    user_name = fields.String(allow_none=True)
    first_name = fields.String(required=True)
    last_name = fields.String(required=True)
    picture = fields.String(allow_none=True)
    bio = fields.String(allow_none=True)
    location = fields.String(allow_none=True)
    created_at = fields.DateTime()
    updated_at = fields.DateTime()


class ProfileUpdateSchema(CamelCaseSchema):
    """Partial profile update; unknown keys are rejected.

    ``password`` is accepted here only so the service can answer with a
    pointer to the change-password endpoint.
    """

    class Meta:
        unknown = RAISE

    user_name = fields.String(validate=validate.Length(min=1, max=50))
    first_name = fields.String(validate=validate.Length(min=1, max=100))
    last_name = fields.String(validate=validate.Length(min=1, max=100))
    picture = fields.String(allow_none=True)
    bio = fields.String(allow_none=True, validate=validate.Length(max=500))
    location = fields.String(allow_none=True, validate=validate.Length(max=120))
    password = fields.String(load_only=True)


class FollowersSchema(CamelCaseSchema):
    followers = fields.List(fields.Nested(UserSummarySchema), attribute="users")


class FollowingSchema(CamelCaseSchema):
    following = fields.List(fields.Nested(UserSummarySchema), attribute="users")


class FollowCountsSchema(CamelCaseSchema):
    followers_count = fields.Integer(required=True)
    following_count = fields.Integer(required=True)


class IsFollowingSchema(CamelCaseSchema):
    is_following = fields.Boolean(required=True)


class FollowToggleSchema(CamelCaseSchema):
    followed = fields.Boolean(attribute="active")
    followers_count = fields.Integer(attribute="count")
