"""Unit tests for PostRepository feed queries and LikeRepository edges."""

import pytest
from app.repositories.post import LikeRepository, PostRepository
from tests.factories.comment import CommentFactory
from tests.factories.post import LikeFactory, PostFactory
from tests.factories.user import UserFactory


@pytest.fixture()
def repo(session):
    return PostRepository(session=session)


class TestFeedWindow:
    def test_newest_first_with_metrics(self, repo):
        viewer = UserFactory()
        older = PostFactory()
        newer = PostFactory()
        LikeFactory(post=older, user=viewer)
        LikeFactory(post=older)
        CommentFactory(post=older)

        rows = repo.feed_window(limit=10, requester_id=viewer.id)

        assert [r.post.id for r in rows] == [newer.id, older.id]
        assert rows[1].likes_count == 2
        assert rows[1].comments_count == 1
        assert rows[1].is_liked is True
        assert rows[0].is_liked is False

    def test_anonymous_viewer_never_liked(self, repo):
        post = PostFactory()
        LikeFactory(post=post)

        (row,) = repo.feed_window(limit=10)
        assert row.is_liked is False
        assert row.likes_count == 1

    def test_cursor_and_author_filter(self, repo):
        author = UserFactory()
        mine = [PostFactory(author=author) for _ in range(3)]
        PostFactory()

        rows = repo.feed_window(limit=10, cursor=mine[2].id, user_id=author.id)

        assert [r.post.id for r in rows] == [mine[1].id, mine[0].id]
        assert repo.count(user_id=author.id) == 3

    def test_offset_window(self, repo):
        posts = [PostFactory() for _ in range(5)]

        rows = repo.feed_window(limit=2, offset=2)

        assert [r.post.id for r in rows] == [posts[2].id, posts[1].id]

    def test_get_with_metrics_missing(self, repo):
        assert repo.get_with_metrics(999_999) is None


class TestLikeRepository:
    def test_find_and_new_edge(self, session):
        likes = LikeRepository(session=session)
        like = LikeFactory()

        assert likes.find_edge(like.user_id, like.post_id).id == like.id
        assert likes.find_edge(like.user_id + 1000, like.post_id) is None

        edge = likes.new_edge(7, 9)
        assert (edge.user_id, edge.post_id) == (7, 9)

    def test_count_by_post(self, session):
        likes = LikeRepository(session=session)
        post = PostFactory()
        LikeFactory(post=post)
        LikeFactory(post=post)
        LikeFactory()

        assert likes.count(post_id=post.id) == 2
