"""
DTOs for UserService.

The full profile (:class:`UserOut`) never carries the password hash or the
pending verification code.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from app.services._shared.dto import UserSummaryOut

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class ProfileUpdateIn:
    """
    Partial profile update.

    :param user_id: Account being edited (the authenticated user).
    :type user_id: int
    :param fields: Mapping of profile field name to new value.
    :type fields: dict[str, Any]
    """

    user_id: int
    fields: dict[str, Any]


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserOut:
    """
    Sanitized user profile.

    :param id: User id.
    :param email: Login email.
    :param user_name: Public handle, when set.
    :param first_name: First name.
    :param last_name: Last name.
    :param picture: Avatar URL.
    :param bio: Free-text biography.
    :param location: Free-text location.
    :param created_at: Account creation timestamp.
    :param updated_at: Last profile change timestamp.
    """

    id: int
    email: str
    user_name: str | None
    first_name: str
    last_name: str
    picture: str | None
    bio: str | None
    location: str | None
    created_at: datetime | None
    updated_at: datetime | None


@dataclass(frozen=True, slots=True)
class FollowCountsOut:
    followers_count: int
    following_count: int


@dataclass(frozen=True, slots=True)
class IsFollowingOut:
    is_following: bool


@dataclass(frozen=True, slots=True)
class UserListOut:
    users: list[UserSummaryOut]


def to_user_out(user) -> UserOut:
    """Map an ORM ``User`` to :class:`UserOut`."""
    return UserOut(
        id=user.id,
        email=user.email,
        user_name=user.user_name,
        first_name=user.first_name,
        last_name=user.last_name,
        picture=user.picture,
        bio=user.bio,
        location=user.location,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )
