"""DTOs for NotificationService."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from app.models.notification import NotificationType
from app.services._shared.dto import UserSummaryOut


@dataclass(frozen=True, slots=True)
class NotificationIn:
    """
    A notification to record.

    :param recipient_id: User receiving the notification.
    :param from_user_id: User whose action triggered it.
    :param type: Kind of event.
    :param post_id: Related post, when any.
    :param comment_id: Related comment, when any.
    """

    recipient_id: int
    from_user_id: int
    type: NotificationType
    post_id: int | None = None
    comment_id: int | None = None


@dataclass(frozen=True, slots=True)
class NotificationOut:
    id: int
    type: str
    content: str
    is_read: bool
    created_at: datetime | None
    post_id: int | None
    comment_id: int | None
    from_user: UserSummaryOut


@dataclass(frozen=True, slots=True)
class NotificationPageOut:
    """
    One page of a user's inbox.

    :param notifications: Items, newest first.
    :param total_count: All notifications of the user.
    :param total_pages: ``ceil(total_count / limit)``.
    :param page: Current 1-based page.
    """

    notifications: list[NotificationOut]
    total_count: int
    total_pages: int
    page: int


@dataclass(frozen=True, slots=True)
class SuccessOut:
    success: bool
    count: int = 0
