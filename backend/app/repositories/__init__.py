"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from app.repositories.base import BaseRepository, Page, paginate_select
from app.repositories.comment import CommentLikeRepository, CommentRepository, CommentRow
from app.repositories.follow import FollowRepository
from app.repositories.notification import NotificationRepository
from app.repositories.post import LikeRepository, PostRepository, PostRow
from app.repositories.user import UserRepository

__all__ = [
    # Base
    "BaseRepository",
    "Page",
    "paginate_select",
    # Domain
    "CommentLikeRepository",
    "CommentRepository",
    "CommentRow",
    "FollowRepository",
    "LikeRepository",
    "NotificationRepository",
    "PostRepository",
    "PostRow",
    "UserRepository",
]
