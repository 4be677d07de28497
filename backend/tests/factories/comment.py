"""Factory Boy definitions for comments and comment likes."""

from __future__ import annotations

from app.models.comment import Comment, CommentLike

import factory
from tests.factories import BaseFactory
from tests.factories.post import PostFactory
from tests.factories.user import UserFactory


class CommentFactory(BaseFactory):
    class Meta:
        model = Comment

    post = factory.SubFactory(PostFactory)
    author = factory.SubFactory(UserFactory)
    content = factory.Faker("sentence", nb_words=6)


class CommentLikeFactory(BaseFactory):
    class Meta:
        model = CommentLike

    comment = factory.SubFactory(CommentFactory)
    user = factory.SubFactory(UserFactory)
