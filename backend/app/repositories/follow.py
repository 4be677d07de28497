"""Follow edge repository."""

from __future__ import annotations

from sqlalchemy import func, select

from app.models.follow import Follow
from app.models.user import User
from app.repositories.base import BaseRepository


class FollowRepository(BaseRepository[Follow]):
    """Persistence for :class:`Follow` edges (``actor`` follows ``target``)."""

    model = Follow

    def _filterable_fields(self):
        return {"follower_id": Follow.follower_id, "following_id": Follow.following_id}

    def find_edge(self, actor_id: int, target_id: int) -> Follow | None:
        """Return the edge ``actor_id -> target_id`` when present."""
        return self.find_one(follower_id=actor_id, following_id=target_id)

    def new_edge(self, actor_id: int, target_id: int) -> Follow:
        return Follow(follower_id=actor_id, following_id=target_id)

    def followers_of(self, user_id: int) -> list[User]:
        """Users following ``user_id``, most recent first."""
        stmt = (
            select(User)
            .join(Follow, Follow.follower_id == User.id)
            .where(Follow.following_id == user_id)
            .order_by(Follow.created_at.desc(), Follow.id.desc())
        )
        return list(self.session.execute(stmt).scalars().all())

    def following_of(self, user_id: int) -> list[User]:
        """Users that ``user_id`` follows, most recent first."""
        stmt = (
            select(User)
            .join(Follow, Follow.following_id == User.id)
            .where(Follow.follower_id == user_id)
            .order_by(Follow.created_at.desc(), Follow.id.desc())
        )
        return list(self.session.execute(stmt).scalars().all())

    def counts(self, user_id: int) -> tuple[int, int]:
        """Return ``(followers_count, following_count)`` for ``user_id``."""
        followers = select(func.count(Follow.id)).where(Follow.following_id == user_id)
        following = select(func.count(Follow.id)).where(Follow.follower_id == user_id)
        return (
            int(self.session.execute(followers).scalar_one()),
            int(self.session.execute(following).scalar_one()),
        )
