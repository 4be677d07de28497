"""Common Marshmallow schemas shared across resources."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load, validate


def camelcase(s: str) -> str:
    head, *tail = s.split("_")
    return head + "".join(part.title() for part in tail)


class CamelCaseSchema(Schema):
    """Expose snake_case attributes under camelCase JSON keys."""

    def on_bind_field(self, field_name: str, field_obj: fields.Field) -> None:
        field_obj.data_key = camelcase(field_obj.data_key or field_name)


class PaginationQuerySchema(Schema):
    """Validate ``page``/``limit`` query parameters with configurable defaults."""

    class Meta:
        unknown = EXCLUDE

    def __init__(self, *, default_limit: int = 10, max_limit: int = 100, **kwargs: Any) -> None:
        self._default_limit = default_limit
        self._max_limit = max_limit
        super().__init__(**kwargs)

    page = fields.Integer(load_default=1, validate=validate.Range(min=1))
    limit = fields.Integer(validate=validate.Range(min=1))

    @post_load
    def apply_defaults(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        limit = data.get("limit", self._default_limit)
        data["limit"] = min(max(limit, 1), self._max_limit)
        data.setdefault("page", 1)
        return data


class MessageSchema(Schema):
    message = fields.String(required=True)


class UserSummarySchema(CamelCaseSchema):
    """Author / sender summary embedded in other resources."""

    id = fields.Integer(required=True)
    user_name = fields.String(allow_none=True)
    first_name = fields.String()
    last_name = fields.String()
    picture = fields.String(allow_none=True)
