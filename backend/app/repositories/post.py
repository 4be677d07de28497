"""Post and post-like repositories.

Feed queries attach engagement metrics as correlated scalar subqueries so a
page of posts is loaded in one statement regardless of its size.
"""

from __future__ import annotations

from typing import Any, NamedTuple

from sqlalchemy import Select, exists, false, func, select
from sqlalchemy.orm import joinedload

from app.models.comment import Comment
from app.models.post import Like, Post
from app.repositories.base import BaseRepository


class PostRow(NamedTuple):
    """A post with its derived engagement metrics."""

    post: Post
    likes_count: int
    comments_count: int
    is_liked: bool


def _metrics_select(requester_id: int | None) -> Select[Any]:
    likes_count = (
        select(func.count(Like.id)).where(Like.post_id == Post.id).correlate(Post).scalar_subquery()
    )
    comments_count = (
        select(func.count(Comment.id))
        .where(Comment.post_id == Post.id)
        .correlate(Post)
        .scalar_subquery()
    )
    if requester_id is None:
        is_liked: Any = false()
    else:
        is_liked = exists().where(Like.post_id == Post.id, Like.user_id == requester_id)
    return select(
        Post,
        likes_count.label("likes_count"),
        comments_count.label("comments_count"),
        is_liked.label("is_liked"),
    ).options(joinedload(Post.author))


class PostRepository(BaseRepository[Post]):
    """Persistence for :class:`Post` plus feed queries."""

    model = Post

    def _filterable_fields(self):
        return {"user_id": Post.user_id}

    def feed_window(
        self,
        *,
        limit: int,
        offset: int = 0,
        cursor: int | None = None,
        user_id: int | None = None,
        requester_id: int | None = None,
    ) -> list[PostRow]:
        """Fetch up to ``limit`` posts newest first.

        ``cursor`` keeps only posts with ``id < cursor``; ``user_id`` restricts
        to one author. Rows are ordered ``created_at DESC, id DESC`` so equal
        timestamps still page deterministically.
        """
        stmt = _metrics_select(requester_id)
        if user_id is not None:
            stmt = stmt.where(Post.user_id == user_id)
        if cursor is not None:
            stmt = stmt.where(Post.id < cursor)
        stmt = stmt.order_by(Post.created_at.desc(), Post.id.desc()).limit(limit).offset(offset)
        rows = self.session.execute(stmt).unique().all()
        return [PostRow(r[0], int(r[1] or 0), int(r[2] or 0), bool(r[3])) for r in rows]

    def get_with_metrics(self, post_id: int, requester_id: int | None = None) -> PostRow | None:
        stmt = _metrics_select(requester_id).where(Post.id == post_id)
        row = self.session.execute(stmt).unique().first()
        if row is None:
            return None
        return PostRow(row[0], int(row[1] or 0), int(row[2] or 0), bool(row[3]))


class LikeRepository(BaseRepository[Like]):
    """Persistence for post likes (edge ``user -> post``)."""

    model = Like

    def _filterable_fields(self):
        return {"post_id": Like.post_id, "user_id": Like.user_id}

    def find_edge(self, actor_id: int, target_id: int) -> Like | None:
        return self.find_one(user_id=actor_id, post_id=target_id)

    def new_edge(self, actor_id: int, target_id: int) -> Like:
        return Like(user_id=actor_id, post_id=target_id)
