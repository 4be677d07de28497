"""
PostService
===========

Feed listing with hybrid cursor/offset pagination, post detail with nested
comments, post creation and owner-only deletion.
"""

from __future__ import annotations

import logging
import math

from app.repositories.comment import CommentRepository
from app.repositories.post import PostRepository, PostRow
from app.services._shared.base import BaseService
from app.services._shared.dto import MessageOut
from app.services._shared.errors import NotFoundError, ServiceError
from app.services.comments.dto import to_comment_out
from app.services.posts.dto import (
    CreatePostIn,
    PostDetailOut,
    PostListIn,
    PostOut,
    PostPageOut,
    to_post_out,
)

logger = logging.getLogger(__name__)

MAX_CONTENT_LENGTH = 280


class PostService(BaseService):
    """Use cases around posts."""

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def list_posts(self, dto: PostListIn, requester_id: int | None = None) -> PostPageOut:
        """
        Return one window of the feed, newest first.

        With a cursor the window starts right after the cursor post and the
        page number only echoes back; without one the window starts at
        ``(page - 1) * limit``. One extra row is read to detect a next page.
        ``total_count`` ignores the cursor, so in cursor mode it reports the
        whole feed rather than what is left.

        :param dto: Paging and filter input.
        :param requester_id: Viewer, for ``is_liked``.
        """
        page = max(int(dto.page), 1)
        limit = max(int(dto.limit), 1)
        offset = 0 if dto.cursor is not None else (page - 1) * limit

        with self.ro_uow() as uow:
            repo: PostRepository = uow.posts
            rows: list[PostRow] = repo.feed_window(
                limit=limit + 1,
                offset=offset,
                cursor=dto.cursor,
                user_id=dto.user_id,
                requester_id=requester_id,
            )
            filters = {"user_id": dto.user_id} if dto.user_id is not None else {}
            total = repo.count(**filters)

            has_next_page = len(rows) > limit
            rows = rows[:limit]
            posts = [to_post_out(r) for r in rows]

        return PostPageOut(
            posts=posts,
            has_next_page=has_next_page,
            next_cursor=posts[-1].id if has_next_page else None,
            total_count=total,
            current_page=page,
            total_pages=math.ceil(total / limit),
        )

    def get_post(self, post_id: int, requester_id: int | None = None) -> PostDetailOut:
        """
        Return one post with all its comments (newest first).

        :raises NotFoundError: When the post does not exist.
        """
        with self.ro_uow() as uow:
            posts: PostRepository = uow.posts
            comments: CommentRepository = uow.comments
            row = posts.get_with_metrics(post_id, requester_id)
            if row is None:
                raise NotFoundError("Post", post_id)
            base = to_post_out(row)
            nested = [to_comment_out(c) for c in comments.for_post(post_id, requester_id)]

        return PostDetailOut(
            id=base.id,
            content=base.content,
            image=base.image,
            created_at=base.created_at,
            updated_at=base.updated_at,
            user=base.user,
            likes_count=base.likes_count,
            comments_count=base.comments_count,
            is_liked=base.is_liked,
            comments=nested,
        )

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def create_post(self, dto: CreatePostIn) -> PostOut:
        """
        Publish a post for ``dto.user_id``.

        :raises ServiceError: Empty post, or text over 280 characters.
        """
        content = (dto.content or "").strip()
        image = (dto.image or "").strip()
        if not content and not image:
            raise ServiceError("Post content is required")
        if len(content) > MAX_CONTENT_LENGTH:
            raise ServiceError(f"Post content must be at most {MAX_CONTENT_LENGTH} characters")

        with self.rw_uow() as uow:
            repo: PostRepository = uow.posts
            if uow.users.get(dto.user_id) is None:
                raise NotFoundError("User", dto.user_id)
            post = repo.add(repo.model(content=content, image=image, user_id=dto.user_id))
            row = PostRow(post, 0, 0, False)
            out = to_post_out(row)

        logger.info("posts.created", extra={"post_id": out.id, "user_id": dto.user_id})
        return out

    def delete_post(self, post_id: int, actor_id: int) -> MessageOut:
        """
        Delete a post owned by ``actor_id``.

        :raises NotFoundError: When the post does not exist.
        :raises AuthorizationError: When ``actor_id`` is not the author.
        """
        with self.rw_uow() as uow:
            repo: PostRepository = uow.posts
            post = repo.get(post_id)
            if post is None:
                raise NotFoundError("Post", post_id)
            self.ensure_owner(actor_id, post.user_id, msg="You are not allowed to delete this post")
            repo.delete(post)

        logger.info("posts.deleted", extra={"post_id": post_id, "user_id": actor_id})
        return MessageOut(message="Post deleted successfully")
