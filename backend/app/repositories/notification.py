"""Notification repository."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.orm import joinedload

from app.models.notification import Notification
from app.repositories.base import BaseRepository, Page, paginate_select


class NotificationRepository(BaseRepository[Notification]):
    """Persistence for a user's notification inbox.

    Bulk operations are always scoped by recipient so ids belonging to other
    users are silently ignored.
    """

    model = Notification

    def _filterable_fields(self):
        return {"user_id": Notification.user_id, "is_read": Notification.is_read}

    def inbox(self, user_id: int, *, page: int, limit: int) -> Page[Notification]:
        """Notifications for ``user_id`` newest first, sender eagerly loaded."""
        stmt = (
            select(Notification)
            .where(Notification.user_id == user_id)
            .options(joinedload(Notification.from_user))
            .order_by(Notification.created_at.desc(), Notification.id.desc())
        )
        items, total = paginate_select(self.session, stmt, page=page, limit=limit)
        return Page(items=items, total=total, page=page, limit=limit)

    def mark_read(self, user_id: int, ids: Sequence[int] | None = None) -> int:
        """Mark the given (or all unread) notifications of ``user_id`` read.

        :returns: Number of rows updated.
        """
        stmt = update(Notification).where(Notification.user_id == user_id)
        if ids:
            stmt = stmt.where(Notification.id.in_(list(ids)))
        else:
            stmt = stmt.where(Notification.is_read.is_(False))
        result = self.session.execute(
            stmt.values(is_read=True).execution_options(synchronize_session=False)
        )
        return int(result.rowcount or 0)

    def delete_for(self, user_id: int, ids: Sequence[int] | None = None) -> int:
        """Delete the given (or all) notifications of ``user_id``.

        :returns: Number of rows deleted.
        """
        stmt = delete(Notification).where(Notification.user_id == user_id)
        if ids:
            stmt = stmt.where(Notification.id.in_(list(ids)))
        result = self.session.execute(stmt.execution_options(synchronize_session=False))
        return int(result.rowcount or 0)
