"""Comment and comment-like repositories."""

from __future__ import annotations

from typing import Any, NamedTuple

from sqlalchemy import Select, exists, false, func, select
from sqlalchemy.orm import joinedload

from app.models.comment import Comment, CommentLike
from app.repositories.base import BaseRepository


class CommentRow(NamedTuple):
    """A comment with its like metrics."""

    comment: Comment
    likes_count: int
    is_liked: bool


def _metrics_select(requester_id: int | None) -> Select[Any]:
    likes_count = (
        select(func.count(CommentLike.id))
        .where(CommentLike.comment_id == Comment.id)
        .correlate(Comment)
        .scalar_subquery()
    )
    if requester_id is None:
        is_liked: Any = false()
    else:
        is_liked = exists().where(
            CommentLike.comment_id == Comment.id, CommentLike.user_id == requester_id
        )
    return select(
        Comment, likes_count.label("likes_count"), is_liked.label("is_liked")
    ).options(joinedload(Comment.author))


class CommentRepository(BaseRepository[Comment]):
    """Persistence for :class:`Comment`."""

    model = Comment

    def _filterable_fields(self):
        return {"post_id": Comment.post_id, "user_id": Comment.user_id}

    def for_post(self, post_id: int, requester_id: int | None = None) -> list[CommentRow]:
        """All comments on ``post_id`` newest first, with like metrics."""
        stmt = (
            _metrics_select(requester_id)
            .where(Comment.post_id == post_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
        )
        rows = self.session.execute(stmt).unique().all()
        return [CommentRow(r[0], int(r[1] or 0), bool(r[2])) for r in rows]

    def get_with_metrics(
        self, comment_id: int, requester_id: int | None = None
    ) -> CommentRow | None:
        stmt = _metrics_select(requester_id).where(Comment.id == comment_id)
        row = self.session.execute(stmt).unique().first()
        if row is None:
            return None
        return CommentRow(row[0], int(row[1] or 0), bool(row[2]))


class CommentLikeRepository(BaseRepository[CommentLike]):
    """Persistence for comment likes (edge ``user -> comment``)."""

    model = CommentLike

    def _filterable_fields(self):
        return {"comment_id": CommentLike.comment_id, "user_id": CommentLike.user_id}

    def find_edge(self, actor_id: int, target_id: int) -> CommentLike | None:
        return self.find_one(user_id=actor_id, comment_id=target_id)

    def new_edge(self, actor_id: int, target_id: int) -> CommentLike:
        return CommentLike(user_id=actor_id, comment_id=target_id)
