"""DTOs for CommentService."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from app.services._shared.dto import UserSummaryOut, user_summary


@dataclass(frozen=True, slots=True)
class CreateCommentIn:
    post_id: int
    user_id: int
    content: str


@dataclass(frozen=True, slots=True)
class CommentOut:
    """
    A comment with like metrics for the requester.

    :param id: Comment id.
    :param post_id: Post the comment belongs to.
    :param content: Comment text.
    :param user: Author summary.
    :param likes_count: Number of likes.
    :param is_liked: Whether the requester liked it.
    """

    id: int
    post_id: int
    content: str
    created_at: datetime | None
    updated_at: datetime | None
    user: UserSummaryOut
    likes_count: int
    is_liked: bool


def to_comment_out(row) -> CommentOut:
    """Map a ``CommentRow`` to :class:`CommentOut`."""
    comment = row.comment
    return CommentOut(
        id=comment.id,
        post_id=comment.post_id,
        content=comment.content,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
        user=user_summary(comment.author),
        likes_count=row.likes_count,
        is_liked=row.is_liked,
    )
