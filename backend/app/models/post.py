"""Posts and post likes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.extensions import db

from .base import CreatedAtMixin, PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .comment import Comment
    from .notification import Notification
    from .user import User


class Post(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """
    A short text post, optionally carrying an image URL.

    ``image`` is stored as an empty string when the post has no image.
    """

    __tablename__ = "posts"

    content: Mapped[str] = mapped_column(String(280), nullable=False, default="")
    image: Mapped[str] = mapped_column(Text, nullable=False, default="")
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    __table_args__ = (Index("ix_posts_user_created", "user_id", "created_at"),)

    author: Mapped[User] = relationship("User", back_populates="posts")
    comments: Mapped[list[Comment]] = relationship(
        "Comment", back_populates="post", cascade="all, delete-orphan"
    )
    likes: Mapped[list[Like]] = relationship(
        "Like", back_populates="post", cascade="all, delete-orphan"
    )
    notifications: Mapped[list[Notification]] = relationship(
        "Notification", back_populates="post", cascade="all, delete-orphan"
    )


class Like(PKMixin, CreatedAtMixin, ReprMixin, db.Model):
    """A user's like on a post; at most one per ``(post, user)``."""

    __tablename__ = "likes"

    post_id: Mapped[int] = mapped_column(
        ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    __table_args__ = (UniqueConstraint("post_id", "user_id", name="uq_likes_post_user"),)

    post: Mapped[Post] = relationship("Post", back_populates="likes")
    user: Mapped[User] = relationship("User", back_populates="likes")
