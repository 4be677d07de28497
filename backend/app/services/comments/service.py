"""CommentService: comments on posts."""

from __future__ import annotations

import logging

from app.models.notification import NotificationType
from app.repositories.comment import CommentRepository, CommentRow
from app.services._shared.base import BaseService
from app.services._shared.dto import MessageOut
from app.services._shared.errors import NotFoundError, ServiceError
from app.services.comments.dto import CommentOut, CreateCommentIn, to_comment_out
from app.services.notifications.dto import NotificationIn
from app.services.notifications.service import NotificationService

logger = logging.getLogger(__name__)


class CommentService(BaseService):
    """List, create and delete comments."""

    def __init__(self, *, notifications: NotificationService | None = None) -> None:
        super().__init__()
        self.notifications = notifications or NotificationService()

    def list_comments(self, post_id: int, requester_id: int | None = None) -> list[CommentOut]:
        """
        All comments of ``post_id``, newest first.

        :raises NotFoundError: When the post does not exist.
        """
        with self.ro_uow() as uow:
            if uow.posts.get(post_id) is None:
                raise NotFoundError("Post", post_id)
            repo: CommentRepository = uow.comments
            return [to_comment_out(r) for r in repo.for_post(post_id, requester_id)]

    def create_comment(self, dto: CreateCommentIn) -> CommentOut:
        """
        Add a comment and notify the post author (unless they wrote it).

        :raises NotFoundError: When the post does not exist.
        """
        content = (dto.content or "").strip()
        if not content:
            raise ServiceError("Comment content is required")

        with self.rw_uow() as uow:
            post = uow.posts.get(dto.post_id)
            if post is None:
                raise NotFoundError("Post", dto.post_id)
            owner_id = post.user_id

            repo: CommentRepository = uow.comments
            comment = repo.add(
                repo.model(content=content, post_id=dto.post_id, user_id=dto.user_id)
            )
            out = to_comment_out(CommentRow(comment, 0, False))

        if owner_id != dto.user_id:
            self.notifications.emit(
                NotificationIn(
                    recipient_id=owner_id,
                    from_user_id=dto.user_id,
                    type=NotificationType.COMMENT,
                    post_id=dto.post_id,
                    comment_id=out.id,
                )
            )
        return out

    def delete_comment(self, comment_id: int, actor_id: int) -> MessageOut:
        """
        Delete a comment written by ``actor_id``.

        :raises NotFoundError: When the comment does not exist.
        :raises AuthorizationError: When ``actor_id`` is not the author.
        """
        with self.rw_uow() as uow:
            repo: CommentRepository = uow.comments
            comment = repo.get(comment_id)
            if comment is None:
                raise NotFoundError("Comment", comment_id)
            self.ensure_owner(
                actor_id, comment.user_id, msg="You are not allowed to delete this comment"
            )
            repo.delete(comment)

        return MessageOut(message="Comment deleted successfully")
