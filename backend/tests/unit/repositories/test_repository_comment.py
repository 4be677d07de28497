"""Unit tests for CommentRepository and CommentLikeRepository."""

from app.repositories.comment import CommentLikeRepository, CommentRepository
from tests.factories.comment import CommentFactory, CommentLikeFactory
from tests.factories.post import PostFactory
from tests.factories.user import UserFactory


def test_for_post_newest_first_with_metrics(session):
    repo = CommentRepository(session=session)
    viewer = UserFactory()
    post = PostFactory()
    first = CommentFactory(post=post)
    second = CommentFactory(post=post)
    CommentFactory()  # other post
    CommentLikeFactory(comment=first, user=viewer)

    rows = repo.for_post(post.id, requester_id=viewer.id)

    assert [r.comment.id for r in rows] == [second.id, first.id]
    assert rows[1].likes_count == 1
    assert rows[1].is_liked is True
    assert rows[0].is_liked is False


def test_comment_like_edges(session):
    likes = CommentLikeRepository(session=session)
    like = CommentLikeFactory()

    assert likes.find_edge(like.user_id, like.comment_id) is not None
    assert likes.count(comment_id=like.comment_id) == 1
