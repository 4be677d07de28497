"""Factory Boy definition for follow edges."""

from __future__ import annotations

from app.models.follow import Follow

import factory
from tests.factories import BaseFactory
from tests.factories.user import UserFactory


class FollowFactory(BaseFactory):
    """``follower`` follows ``following``."""

    class Meta:
        model = Follow

    follower = factory.SubFactory(UserFactory)
    following = factory.SubFactory(UserFactory)
