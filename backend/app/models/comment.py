"""Comments on posts and comment likes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.extensions import db

from .base import CreatedAtMixin, PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .notification import Notification
    from .post import Post
    from .user import User


class Comment(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """A comment left by ``author`` on ``post``."""

    __tablename__ = "comments"

    content: Mapped[str] = mapped_column(Text, nullable=False)
    post_id: Mapped[int] = mapped_column(
        ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    post: Mapped[Post] = relationship("Post", back_populates="comments")
    author: Mapped[User] = relationship("User", back_populates="comments")
    likes: Mapped[list[CommentLike]] = relationship(
        "CommentLike", back_populates="comment", cascade="all, delete-orphan"
    )
    notifications: Mapped[list[Notification]] = relationship(
        "Notification", back_populates="comment", cascade="all, delete-orphan"
    )


class CommentLike(PKMixin, CreatedAtMixin, ReprMixin, db.Model):
    """A user's like on a comment; at most one per ``(comment, user)``."""

    __tablename__ = "comment_likes"

    comment_id: Mapped[int] = mapped_column(
        ForeignKey("comments.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    __table_args__ = (
        UniqueConstraint("comment_id", "user_id", name="uq_comment_likes_comment_user"),
    )

    comment: Mapped[Comment] = relationship("Comment", back_populates="likes")
    user: Mapped[User] = relationship("User", back_populates="comment_likes")
