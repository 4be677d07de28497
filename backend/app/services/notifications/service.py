"""
NotificationService
===================

Inbox queries for a user plus :meth:`NotificationService.emit`, the
best-effort writer used by the engagement, comment and follow flows.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from app.models.notification import NotificationType
from app.repositories.notification import NotificationRepository
from app.services._shared.base import BaseService
from app.services._shared.dto import user_summary
from app.services.notifications.dto import (
    NotificationIn,
    NotificationOut,
    NotificationPageOut,
    SuccessOut,
)

logger = logging.getLogger(__name__)

_TEMPLATES: dict[NotificationType, str] = {
    NotificationType.LIKE: "{actor} liked your post",
    NotificationType.COMMENT_LIKE: "{actor} liked your comment",
    NotificationType.FOLLOW: "{actor} started following you",
    NotificationType.COMMENT: "{actor} commented on your post",
}


def notification_content(kind: NotificationType, actor_display: str) -> str:
    """Render the human-readable text for a notification of ``kind``."""
    return _TEMPLATES[kind].format(actor=actor_display)


def _to_out(notification) -> NotificationOut:
    kind = notification.type
    return NotificationOut(
        id=notification.id,
        type=kind.value if isinstance(kind, NotificationType) else str(kind),
        content=notification.content,
        is_read=bool(notification.is_read),
        created_at=notification.created_at,
        post_id=notification.post_id,
        comment_id=notification.comment_id,
        from_user=user_summary(notification.from_user),
    )


class NotificationService(BaseService):
    """Read, acknowledge and record notifications."""

    def list_notifications(self, user_id: int, *, page: int = 1, limit: int = 10) -> NotificationPageOut:
        """
        Return one page of ``user_id``'s notifications, newest first.

        :param user_id: Recipient.
        :param page: 1-based page number.
        :param limit: Page size.
        """
        page = max(int(page), 1)
        limit = max(int(limit), 1)
        with self.ro_uow() as uow:
            repo: NotificationRepository = uow.notifications
            result = repo.inbox(user_id, page=page, limit=limit)
            items = [_to_out(n) for n in result.items]
        return NotificationPageOut(
            notifications=items,
            total_count=result.total,
            total_pages=math.ceil(result.total / limit),
            page=page,
        )

    def mark_read(self, user_id: int, ids: Sequence[int] | None = None) -> SuccessOut:
        """Mark ``ids`` (or every unread notification) of ``user_id`` as read."""
        with self.rw_uow() as uow:
            count = uow.notifications.mark_read(user_id, ids)
        return SuccessOut(success=True, count=count)

    def delete(self, user_id: int, ids: Sequence[int] | None = None) -> SuccessOut:
        """Delete ``ids`` (or every notification) of ``user_id``."""
        with self.rw_uow() as uow:
            count = uow.notifications.delete_for(user_id, ids)
        return SuccessOut(success=True, count=count)

    # ------------------------------------------------------------------ #
    # Emission
    # ------------------------------------------------------------------ #

    def emit(self, dto: NotificationIn) -> None:
        """
        Record a notification in its own transaction.

        Never raises: the triggering action has already committed, so any
        failure here is logged and dropped.
        """
        if dto.recipient_id == dto.from_user_id:
            return
        self.after_commit(f"notification.{dto.type.value.lower()}", lambda: self._create(dto))

    def _create(self, dto: NotificationIn) -> None:
        with self.rw_uow() as uow:
            actor = uow.users.get(dto.from_user_id)
            recipient = uow.users.get(dto.recipient_id)
            if actor is None or recipient is None:
                logger.warning(
                    "notification.skipped",
                    extra={"from_user_id": dto.from_user_id, "user_id": dto.recipient_id},
                )
                return
            repo: NotificationRepository = uow.notifications
            repo.add(
                repo.model(
                    user_id=dto.recipient_id,
                    from_user_id=dto.from_user_id,
                    type=dto.type,
                    content=notification_content(dto.type, actor.display_name),
                    post_id=dto.post_id,
                    comment_id=dto.comment_id,
                )
            )
