"""DTOs shared by several services."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UserSummaryOut:
    """
    Author / sender summary embedded in posts, comments and notifications.

    :param id: User id.
    :param user_name: Public handle, when set.
    :param first_name: First name.
    :param last_name: Last name.
    :param picture: Avatar URL, when set.
    """

    id: int
    user_name: str | None
    first_name: str
    last_name: str
    picture: str | None


@dataclass(frozen=True, slots=True)
class MessageOut:
    """Plain acknowledgement carrying a human-readable message."""

    message: str


def user_summary(user) -> UserSummaryOut:
    """Map an ORM ``User`` to :class:`UserSummaryOut`."""
    return UserSummaryOut(
        id=user.id,
        user_name=user.user_name,
        first_name=user.first_name,
        last_name=user.last_name,
        picture=user.picture,
    )
