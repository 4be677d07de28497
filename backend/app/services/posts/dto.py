"""
DTOs for PostService.

Feed responses carry derived engagement metrics computed for the
requester; anonymous requests always see ``is_liked=False``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from app.services._shared.dto import UserSummaryOut, user_summary
from app.services.comments.dto import CommentOut

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class PostListIn:
    """
    Feed query.

    :param page: 1-based page, used only without ``cursor``.
    :type page: int
    :param limit: Page size.
    :type limit: int
    :param cursor: Return posts with ``id < cursor``; disables the offset.
    :type cursor: int | None
    :param user_id: Restrict to one author.
    :type user_id: int | None
    """

    page: int = 1
    limit: int = 10
    cursor: int | None = None
    user_id: int | None = None


@dataclass(frozen=True, slots=True)
class CreatePostIn:
    """
    New post.

    :param user_id: Author (the authenticated user).
    :param content: Text, may be empty when an image is given.
    :param image: Image URL, empty when absent.
    """

    user_id: int
    content: str = ""
    image: str = ""


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class PostOut:
    id: int
    content: str
    image: str
    created_at: datetime | None
    updated_at: datetime | None
    user: UserSummaryOut
    likes_count: int
    comments_count: int
    is_liked: bool

    @property
    def has_comments(self) -> bool:
        return self.comments_count > 0


@dataclass(frozen=True, slots=True)
class PostDetailOut(PostOut):
    comments: list[CommentOut] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class PostPageOut:
    """
    One window of the feed.

    :param posts: Posts newest first.
    :param has_next_page: More rows exist after this window.
    :param next_cursor: Id of the last returned post when ``has_next_page``.
    :param total_count: Posts matching the author filter, cursor ignored.
    :param current_page: Requested page.
    :param total_pages: ``ceil(total_count / limit)``.
    """

    posts: list[PostOut]
    has_next_page: bool
    next_cursor: int | None
    total_count: int
    current_page: int
    total_pages: int


def to_post_out(row) -> PostOut:
    """Map a ``PostRow`` to :class:`PostOut`."""
    post = row.post
    return PostOut(
        id=post.id,
        content=post.content,
        image=post.image or "",
        created_at=post.created_at,
        updated_at=post.updated_at,
        user=user_summary(post.author),
        likes_count=row.likes_count,
        comments_count=row.comments_count,
        is_liked=row.is_liked,
    )
