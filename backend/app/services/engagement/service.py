"""
EngagementService
=================

Idempotent on/off relations between a user and a target:

============  ==============  =======================
Relation      Target          Notification on "on"
============  ==============  =======================
post like     Post            ``LIKE``
comment like  Comment         ``COMMENT_LIKE``
follow        User            ``FOLLOW``
============  ==============  =======================

Row presence is the only state. A toggle deletes an existing row or
inserts a missing one; the unique key on each relation table settles
concurrent inserts. Turning a relation on notifies the target's owner
unless the owner is the actor; turning it off never notifies.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import IntegrityError

from app.models.notification import NotificationType
from app.services._shared.base import BaseService
from app.services._shared.errors import NotFoundError, ServiceError
from app.services.engagement.dto import ToggleOut
from app.services.notifications.dto import NotificationIn
from app.services.notifications.service import NotificationService

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Relation:
    """
    Describes one toggleable relation.

    :param name: Label used in logs.
    :param entity: Target entity name for ``NotFoundError``.
    :param target_repo: UoW attribute holding the target repository.
    :param edge_repo: UoW attribute holding the relation repository.
    :param kind: Notification type emitted on a real insert.
    :param describe: ``target -> (owner_id, post_id, comment_id)``.
    :param counter: ``(uow, target_id) -> int`` metric returned to the caller.
    """

    name: str
    entity: str
    target_repo: str
    edge_repo: str
    kind: NotificationType
    describe: Callable[[Any], tuple[int, int | None, int | None]]
    counter: Callable[[Any, int], int]


POST_LIKE = Relation(
    name="post_like",
    entity="Post",
    target_repo="posts",
    edge_repo="likes",
    kind=NotificationType.LIKE,
    describe=lambda post: (post.user_id, post.id, None),
    counter=lambda uow, target_id: uow.likes.count(post_id=target_id),
)

COMMENT_LIKE = Relation(
    name="comment_like",
    entity="Comment",
    target_repo="comments",
    edge_repo="comment_likes",
    kind=NotificationType.COMMENT_LIKE,
    describe=lambda comment: (comment.user_id, comment.post_id, comment.id),
    counter=lambda uow, target_id: uow.comment_likes.count(comment_id=target_id),
)

FOLLOW = Relation(
    name="follow",
    entity="User",
    target_repo="users",
    edge_repo="follows",
    kind=NotificationType.FOLLOW,
    describe=lambda user: (user.id, None, None),
    counter=lambda uow, target_id: uow.follows.count(following_id=target_id),
)


class EngagementService(BaseService):
    """Like, comment-like and follow toggles."""

    def __init__(self, *, notifications: NotificationService | None = None) -> None:
        super().__init__()
        self.notifications = notifications or NotificationService()

    def toggle_post_like(self, actor_id: int, post_id: int) -> ToggleOut:
        return self.toggle(POST_LIKE, actor_id, post_id)

    def toggle_comment_like(self, actor_id: int, comment_id: int) -> ToggleOut:
        return self.toggle(COMMENT_LIKE, actor_id, comment_id)

    def toggle_follow(self, actor_id: int, target_user_id: int) -> ToggleOut:
        """
        Follow or unfollow ``target_user_id``.

        :raises ServiceError: When ``actor_id == target_user_id``.
        :raises NotFoundError: When the target user does not exist.
        """
        if actor_id == target_user_id:
            raise ServiceError("You cannot follow or unfollow yourself")
        return self.toggle(FOLLOW, actor_id, target_user_id)

    # ------------------------------------------------------------------ #
    # Generic toggle
    # ------------------------------------------------------------------ #

    def toggle(self, relation: Relation, actor_id: int, target_id: int) -> ToggleOut:
        """
        Flip the ``relation`` between ``actor_id`` and ``target_id``.

        :returns: The new state and the target's updated count.
        :raises NotFoundError: When the target does not exist.
        """
        with self.rw_uow() as uow:
            target = getattr(uow, relation.target_repo).get(target_id)
            if target is None:
                raise NotFoundError(relation.entity, target_id)
            owner_id, post_id, comment_id = relation.describe(target)

            edges = getattr(uow, relation.edge_repo)
            edge = edges.find_edge(actor_id, target_id)
            if edge is not None:
                edges.delete(edge)
                active, inserted = False, False
            else:
                inserted = self._insert_edge(uow.session, edges.new_edge(actor_id, target_id))
                active = True
            count = relation.counter(uow, target_id)

        logger.debug(
            "engagement.toggled",
            extra={"relation": relation.name, "target_id": target_id, "active": active},
        )
        if inserted and owner_id != actor_id:
            self.notifications.emit(
                NotificationIn(
                    recipient_id=owner_id,
                    from_user_id=actor_id,
                    type=relation.kind,
                    post_id=post_id,
                    comment_id=comment_id,
                )
            )
        return ToggleOut(target_id=target_id, active=active, count=count)

    @staticmethod
    def _insert_edge(session, edge) -> bool:
        """
        Insert ``edge`` inside a SAVEPOINT.

        :returns: ``False`` when a concurrent request inserted the same edge
            first; the relation is on either way.
        """
        try:
            with session.begin_nested():
                session.add(edge)
        except IntegrityError:
            logger.info("engagement.duplicate_insert", extra={"edge": type(edge).__name__})
            return False
        return True
