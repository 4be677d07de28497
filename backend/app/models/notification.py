"""In-app notifications produced by engagement actions."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Enum, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.extensions import db

from .base import CreatedAtMixin, PKMixin, ReprMixin

if TYPE_CHECKING:
    from .comment import Comment
    from .post import Post
    from .user import User


class NotificationType(str, enum.Enum):
    """Kinds of events that notify a user."""

    LIKE = "LIKE"
    COMMENT = "COMMENT"
    COMMENT_LIKE = "COMMENT_LIKE"
    FOLLOW = "FOLLOW"


class Notification(PKMixin, CreatedAtMixin, ReprMixin, db.Model):
    """
    Message delivered to ``recipient`` about something ``from_user`` did.

    ``post_id`` / ``comment_id`` point at the subject of the event when it
    has one (likes and comments); follow notifications carry neither.
    """

    __tablename__ = "notifications"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    from_user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    type: Mapped[NotificationType] = mapped_column(
        Enum(NotificationType, name="notification_type", native_enum=False), nullable=False
    )
    content: Mapped[str] = mapped_column(String(255), nullable=False)
    post_id: Mapped[int | None] = mapped_column(
        ForeignKey("posts.id", ondelete="CASCADE"), nullable=True
    )
    comment_id: Mapped[int | None] = mapped_column(
        ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    )
    is_read: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="0"
    )

    __table_args__ = (Index("ix_notifications_user_read", "user_id", "is_read"),)

    recipient: Mapped[User] = relationship(
        "User", foreign_keys=[user_id], back_populates="notifications"
    )
    from_user: Mapped[User] = relationship(
        "User", foreign_keys=[from_user_id], back_populates="sent_notifications"
    )
    post: Mapped[Post | None] = relationship("Post", back_populates="notifications")
    comment: Mapped[Comment | None] = relationship("Comment", back_populates="notifications")
