"""Directed follow edges between users."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.extensions import db

from .base import CreatedAtMixin, PKMixin, ReprMixin

if TYPE_CHECKING:
    from .user import User


class Follow(PKMixin, CreatedAtMixin, ReprMixin, db.Model):
    """
    ``follower`` follows ``following``.

    Row presence is the relation state; the pair is unique and self-edges are
    rejected by the database.
    """

    __tablename__ = "follows"

    follower_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    following_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    __table_args__ = (
        UniqueConstraint("follower_id", "following_id", name="uq_follows_follower_following"),
        CheckConstraint("follower_id <> following_id", name="no_self_follow"),
    )

    follower: Mapped[User] = relationship(
        "User", foreign_keys=[follower_id], back_populates="following"
    )
    following: Mapped[User] = relationship(
        "User", foreign_keys=[following_id], back_populates="followers"
    )
