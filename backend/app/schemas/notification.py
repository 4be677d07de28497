"""Notification Marshmallow schemas."""

from __future__ import annotations

from marshmallow import fields, validate

from .common import CamelCaseSchema, UserSummarySchema


class NotificationSchema(CamelCaseSchema):
    id = fields.Integer(required=True)
    type = fields.String()
    content = fields.String()
    is_read = fields.Boolean()
    created_at = fields.DateTime()
    post_id = fields.Integer(allow_none=True)
    comment_id = fields.Integer(allow_none=True)
    from_user = fields.Nested(UserSummarySchema)


class NotificationPageSchema(CamelCaseSchema):
    notifications = fields.List(fields.Nested(NotificationSchema))
    total_count = fields.Integer()
    total_pages = fields.Integer()


class NotificationIdsSchema(CamelCaseSchema):
    """Optional ``notificationIds``; absent or empty targets the whole inbox."""

    notification_ids = fields.List(
        fields.Integer(validate=validate.Range(min=1)), load_default=None
    )


class SuccessSchema(CamelCaseSchema):
    success = fields.Boolean(required=True)
