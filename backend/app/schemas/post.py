"""Post and comment Marshmallow schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, ValidationError, fields, validate, validates_schema

from .common import CamelCaseSchema, UserSummarySchema

MAX_CONTENT = 280


class PostListQuerySchema(CamelCaseSchema):
    """Feed query: ``page``, ``limit``, ``cursor``, ``userId``."""

    class Meta:
        unknown = EXCLUDE

    page = fields.Integer(load_default=1, validate=validate.Range(min=1))
    limit = fields.Integer(load_default=10, validate=validate.Range(min=1, max=100))
    cursor = fields.Integer(load_default=None, validate=validate.Range(min=1))
    user_id = fields.Integer(load_default=None, validate=validate.Range(min=1))


class PostCreateSchema(CamelCaseSchema):
    content = fields.String(load_default="", validate=validate.Length(max=MAX_CONTENT))
    image = fields.String(load_default="")

    @validates_schema
    def content_or_image(self, data: dict[str, Any], **_: Any) -> None:
        if not (data.get("content") or "").strip() and not (data.get("image") or "").strip():
            raise ValidationError(
                "Post content is required when no image is provided", field_name="content"
            )


class CommentSchema(CamelCaseSchema):
    id = fields.Integer(required=True)
    post_id = fields.Integer()
    content = fields.String()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
    user = fields.Nested(UserSummarySchema)
    likes_count = fields.Integer()
    is_liked = fields.Boolean()


class CommentCreateSchema(CamelCaseSchema):
    content = fields.String(required=True, validate=validate.Length(min=1, max=1000))


class PostSchema(CamelCaseSchema):
    id = fields.Integer(required=True)
    content = fields.String()
    image = fields.String()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
    user = fields.Nested(UserSummarySchema)
    likes_count = fields.Integer()
    comments_count = fields.Integer()
    is_liked = fields.Boolean()
    has_comments = fields.Boolean()


class PostDetailSchema(PostSchema):
    comments = fields.List(fields.Nested(CommentSchema))


class PostPageSchema(CamelCaseSchema):
    posts = fields.List(fields.Nested(PostSchema))
    has_next_page = fields.Boolean()
    next_cursor = fields.Method("dump_next_cursor")
    total_count = fields.Integer()
    current_page = fields.Integer()
    total_pages = fields.Integer()

    def dump_next_cursor(self, page) -> str | None:
        """Serialize the cursor as a string id."""
        return None if page.next_cursor is None else str(page.next_cursor)


class LikeToggleSchema(CamelCaseSchema):
    liked = fields.Boolean(attribute="active")
    likes_count = fields.Integer(attribute="count")
