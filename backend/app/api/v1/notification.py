"""Notification inbox endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from app.api.deps import current_auth, json_response, parse_pagination, timing
from app.schemas import NotificationIdsSchema, NotificationPageSchema, SuccessSchema
from app.services.notifications.service import NotificationService

bp = Blueprint("notification", __name__, url_prefix="/notification")

page_schema = NotificationPageSchema()
ids_schema = NotificationIdsSchema()
success_schema = SuccessSchema()


@bp.get("")
@timing
def list_notifications():
    auth = current_auth()
    pagination = parse_pagination()
    result = NotificationService().list_notifications(
        auth.user_id, page=pagination.page, limit=pagination.limit
    )
    return json_response(page_schema.dump(result))


@bp.post("/mark-read")
@timing
def mark_read():
    """Mark ``notificationIds`` (or every unread notification) as read."""

    auth = current_auth()
    data = ids_schema.load(request.get_json(silent=True) or {})
    result = NotificationService().mark_read(auth.user_id, data["notification_ids"])
    return json_response(success_schema.dump(result))


@bp.delete("")
@timing
def delete_notifications():
    """Delete ``notificationIds`` (or the whole inbox)."""

    auth = current_auth()
    data = ids_schema.load(request.get_json(silent=True) or {})
    result = NotificationService().delete(auth.user_id, data["notification_ids"])
    return json_response(success_schema.dump(result))
