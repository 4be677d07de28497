from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ToggleOut:
    """
    State of a relation after a toggle.

    :param target_id: Post, comment or user the relation points at.
    :type target_id: int
    :param active: ``True`` when the relation now exists.
    :type active: bool
    :param count: Likes on the target (likes) or followers of the target
        (follows) after the toggle.
    :type count: int
    """

    target_id: int
    active: bool
    count: int
