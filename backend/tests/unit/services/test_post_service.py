# tests/unit/services/test_post_service.py
from __future__ import annotations

import pytest
from app.services._shared.errors import AuthorizationError, NotFoundError, ServiceError
from app.services.posts.dto import CreatePostIn, PostListIn
from app.services.posts.service import PostService
from tests.factories.comment import CommentFactory
from tests.factories.post import LikeFactory, PostFactory
from tests.factories.user import UserFactory


@pytest.fixture()
def service() -> PostService:
    return PostService()


# ------------------------------- Listing ---------------------------------- #
class TestListPosts:
    def test_offset_pages(self, service):
        posts = [PostFactory() for _ in range(15)]
        newest_first = [p.id for p in reversed(posts)]

        first = service.list_posts(PostListIn(page=1, limit=10))
        assert [p.id for p in first.posts] == newest_first[:10]
        assert first.has_next_page is True
        assert first.next_cursor == newest_first[9]
        assert (first.total_count, first.total_pages, first.current_page) == (15, 2, 1)

        second = service.list_posts(PostListIn(page=2, limit=10))
        assert [p.id for p in second.posts] == newest_first[10:]
        assert second.has_next_page is False
        assert second.next_cursor is None

    def test_cursor_continues_after_last_post(self, service):
        posts = [PostFactory() for _ in range(15)]
        newest_first = [p.id for p in reversed(posts)]
        first = service.list_posts(PostListIn(limit=10))

        after = service.list_posts(PostListIn(limit=10, cursor=first.next_cursor))

        assert [p.id for p in after.posts] == newest_first[10:]
        assert after.has_next_page is False
        # Totals ignore the cursor
        assert after.total_count == 15

    def test_author_filter_and_viewer_flags(self, service):
        author, viewer = UserFactory(), UserFactory()
        liked = PostFactory(author=author)
        PostFactory(author=author)
        PostFactory()
        LikeFactory(post=liked, user=viewer)
        CommentFactory(post=liked)

        page = service.list_posts(PostListIn(user_id=author.id), requester_id=viewer.id)

        assert page.total_count == 2
        by_id = {p.id: p for p in page.posts}
        assert by_id[liked.id].is_liked is True
        assert by_id[liked.id].likes_count == 1
        assert by_id[liked.id].comments_count == 1
        assert by_id[liked.id].has_comments is True
        assert by_id[liked.id].user.id == author.id

    def test_empty_feed(self, service):
        page = service.list_posts(PostListIn())
        assert page.posts == []
        assert (page.total_count, page.total_pages, page.has_next_page) == (0, 0, False)


# ------------------------------- Detail ----------------------------------- #
def test_get_post_nests_comments_newest_first(service):
    post = PostFactory()
    older = CommentFactory(post=post)
    newer = CommentFactory(post=post)

    detail = service.get_post(post.id)

    assert detail.id == post.id
    assert [c.id for c in detail.comments] == [newer.id, older.id]
    assert detail.comments_count == 2


def test_get_post_missing(service):
    with pytest.raises(NotFoundError, match="Post not found"):
        service.get_post(999_999)


# ------------------------------- Create ----------------------------------- #
def test_create_post(service):
    user = UserFactory()

    out = service.create_post(CreatePostIn(user_id=user.id, content="  First!  "))

    assert out.content == "First!"
    assert out.image == ""
    assert (out.likes_count, out.comments_count, out.is_liked) == (0, 0, False)
    assert out.user.id == user.id


def test_create_image_only_post(service):
    user = UserFactory()
    out = service.create_post(CreatePostIn(user_id=user.id, image="https://img.example/a.png"))
    assert out.content == ""


def test_create_post_requires_content_or_image(service):
    user = UserFactory()
    with pytest.raises(ServiceError, match="Post content is required"):
        service.create_post(CreatePostIn(user_id=user.id, content="   "))


def test_create_post_length_limit(service):
    user = UserFactory()
    assert service.create_post(CreatePostIn(user_id=user.id, content="x" * 280)).id
    with pytest.raises(ServiceError, match="280"):
        service.create_post(CreatePostIn(user_id=user.id, content="x" * 281))


# ------------------------------- Delete ----------------------------------- #
def test_delete_post_owner_only(service):
    post = PostFactory()
    intruder = UserFactory()
    post_id, owner_id = post.id, post.user_id

    with pytest.raises(AuthorizationError, match="You are not allowed to delete this post"):
        service.delete_post(post_id, intruder.id)

    out = service.delete_post(post_id, owner_id)
    assert out.message == "Post deleted successfully"

    with pytest.raises(NotFoundError, match="Post not found"):
        service.delete_post(post_id, owner_id)
