"""
UserService
===========

Profile management for the authenticated user and read-only follow graph
queries. Following/unfollowing itself lives in
:class:`app.services.engagement.service.EngagementService`.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from app.repositories.follow import FollowRepository
from app.repositories.user import UserRepository
from app.services._shared.base import BaseService
from app.services._shared.dto import user_summary
from app.services._shared.errors import ConflictError, NotFoundError, ServiceError, violates
from app.services.users.dto import (
    FollowCountsOut,
    IsFollowingOut,
    ProfileUpdateIn,
    UserListOut,
    UserOut,
    to_user_out,
)

logger = logging.getLogger(__name__)

PASSWORD_FIELDS = frozenset({"password", "password_hash", "confirm_password"})


class UserService(BaseService):
    """Profile and follow-graph use cases."""

    # ------------------------------------------------------------------ #
    # Profile
    # ------------------------------------------------------------------ #

    def get_profile(self, user_id: int) -> UserOut:
        """
        :raises NotFoundError: When the user does not exist.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return to_user_out(user)

    def update_profile(self, dto: ProfileUpdateIn) -> UserOut:
        """
        Apply a partial profile update.

        :raises ServiceError: When a password field is present or a field
            is not editable.
        :raises ConflictError: When the new handle belongs to someone else.
        :raises NotFoundError: When the user does not exist.
        """
        if PASSWORD_FIELDS & dto.fields.keys():
            raise ServiceError(
                "To update your password, please use the change password endpoint."
            )

        try:
            with self.rw_uow() as uow:
                repo: UserRepository = uow.users
                user = repo.get(dto.user_id)
                if user is None:
                    raise NotFoundError("User", dto.user_id)

                new_handle = dto.fields.get("user_name")
                if new_handle and repo.user_name_taken(new_handle, exclude_id=user.id):
                    raise ConflictError("User", "Username is already taken")

                try:
                    repo.update(user, **dto.fields)
                except ValueError as exc:
                    raise ServiceError(str(exc)) from exc
                return to_user_out(user)
        except IntegrityError as exc:
            if violates(exc, "users.user_name") or violates(exc, "uq_users_user_name"):
                raise ConflictError("User", "Username is already taken") from exc
            raise

    def delete_profile(self, user_id: int) -> None:
        """
        Delete the account and everything it owns.

        :raises NotFoundError: When the user does not exist.
        """
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            repo.delete(user)
        logger.info("users.deleted", extra={"user_id": user_id})

    # ------------------------------------------------------------------ #
    # Follow graph
    # ------------------------------------------------------------------ #

    def is_following(self, actor_id: int, target_id: int) -> IsFollowingOut:
        with self.ro_uow() as uow:
            repo: FollowRepository = uow.follows
            return IsFollowingOut(is_following=repo.find_edge(actor_id, target_id) is not None)

    def list_followers(self, user_id: int) -> UserListOut:
        """Users following ``user_id``, most recent first."""
        with self.ro_uow() as uow:
            self._require_user(uow, user_id)
            repo: FollowRepository = uow.follows
            return UserListOut(users=[user_summary(u) for u in repo.followers_of(user_id)])

    def list_following(self, user_id: int) -> UserListOut:
        """Users ``user_id`` follows, most recent first."""
        with self.ro_uow() as uow:
            self._require_user(uow, user_id)
            repo: FollowRepository = uow.follows
            return UserListOut(users=[user_summary(u) for u in repo.following_of(user_id)])

    def follow_counts(self, user_id: int) -> FollowCountsOut:
        with self.ro_uow() as uow:
            self._require_user(uow, user_id)
            followers, following = uow.follows.counts(user_id)
        return FollowCountsOut(followers_count=followers, following_count=following)

    @staticmethod
    def _require_user(uow, user_id: int) -> None:
        if uow.users.get(user_id) is None:
            raise NotFoundError("User", user_id)
