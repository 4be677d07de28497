# tests/unit/services/test_engagement_service.py
from __future__ import annotations

import logging

import pytest
from app.models import CommentLike, Follow, Like, Notification, NotificationType
from app.repositories.follow import FollowRepository
from app.repositories.post import LikeRepository
from app.services._shared.errors import NotFoundError, ServiceError
from app.services.engagement.service import EngagementService
from tests.factories.comment import CommentFactory
from tests.factories.follow import FollowFactory
from tests.factories.post import LikeFactory, PostFactory
from tests.factories.user import UserFactory


@pytest.fixture()
def service() -> EngagementService:
    return EngagementService()


def _notifications(session, **filters):
    return session.query(Notification).filter_by(**filters).all()


# ------------------------------ Post likes -------------------------------- #
def test_like_then_unlike_is_an_involution(service, session):
    post = PostFactory()
    fan = UserFactory()

    on = service.toggle_post_like(fan.id, post.id)
    assert (on.active, on.count) == (True, 1)

    off = service.toggle_post_like(fan.id, post.id)
    assert (off.active, off.count) == (False, 0)

    assert session.query(Like).filter_by(post_id=post.id).count() == 0
    # Only the "on" half notified the author
    (note,) = _notifications(session, user_id=post.user_id)
    assert note.type == NotificationType.LIKE
    assert note.from_user_id == fan.id
    assert note.post_id == post.id
    assert note.content.endswith("liked your post")


def test_relike_notifies_again(service, session):
    post = PostFactory()
    fan = UserFactory()

    for _ in range(3):
        service.toggle_post_like(fan.id, post.id)

    assert len(_notifications(session, user_id=post.user_id)) == 2


def test_liking_own_post_does_not_notify(service, session):
    post = PostFactory()

    out = service.toggle_post_like(post.user_id, post.id)

    assert out.active is True
    assert _notifications(session, user_id=post.user_id) == []


def test_like_missing_post(service):
    user = UserFactory()
    with pytest.raises(NotFoundError, match="Post not found"):
        service.toggle_post_like(user.id, 999_999)


# ----------------------------- Comment likes ------------------------------ #
def test_comment_like_notifies_comment_author(service, session):
    comment = CommentFactory()
    fan = UserFactory()

    out = service.toggle_comment_like(fan.id, comment.id)

    assert (out.active, out.count) == (True, 1)
    assert session.query(CommentLike).filter_by(comment_id=comment.id).count() == 1
    (note,) = _notifications(session, user_id=comment.user_id)
    assert note.type == NotificationType.COMMENT_LIKE
    assert note.comment_id == comment.id
    assert note.post_id == comment.post_id


def test_comment_like_missing_comment(service):
    user = UserFactory()
    with pytest.raises(NotFoundError, match="Comment not found"):
        service.toggle_comment_like(user.id, 999_999)


# -------------------------------- Follows --------------------------------- #
def test_follow_toggle(service, session):
    alice, bob = UserFactory(user_name="alice"), UserFactory()

    on = service.toggle_follow(alice.id, bob.id)
    assert (on.active, on.count) == (True, 1)
    (note,) = _notifications(session, user_id=bob.id)
    assert note.type == NotificationType.FOLLOW
    assert note.content == "alice started following you"
    assert note.post_id is None and note.comment_id is None

    off = service.toggle_follow(alice.id, bob.id)
    assert (off.active, off.count) == (False, 0)
    assert session.query(Follow).count() == 0


def test_self_follow_rejected_before_lookup(service):
    with pytest.raises(ServiceError, match="You cannot follow or unfollow yourself"):
        service.toggle_follow(5, 5)


def test_follow_missing_user(service):
    user = UserFactory()
    with pytest.raises(NotFoundError, match="User not found"):
        service.toggle_follow(user.id, 999_999)


def test_notification_failure_does_not_undo_toggle(service, session, monkeypatch):
    post = PostFactory()
    fan = UserFactory()

    def boom(dto):
        raise RuntimeError("notification store down")

    monkeypatch.setattr(service.notifications, "_create", boom)

    out = service.toggle_post_like(fan.id, post.id)

    assert out.active is True
    assert session.query(Like).filter_by(post_id=post.id, user_id=fan.id).count() == 1


# ------------------------- Concurrent duplicates -------------------------- #
def test_concurrent_duplicate_like_is_a_noop(service, session, monkeypatch, caplog):
    caplog.set_level(logging.INFO)
    post = PostFactory()
    fan = UserFactory()
    # Another request inserted the like after this one looked for it
    LikeFactory(post=post, user=fan)
    monkeypatch.setattr(LikeRepository, "find_edge", lambda self, actor_id, target_id: None)

    out = service.toggle_post_like(fan.id, post.id)

    assert (out.active, out.count) == (True, 1)
    assert session.query(Like).filter_by(post_id=post.id).count() == 1
    assert _notifications(session, user_id=post.user_id) == []
    assert any(r.getMessage() == "engagement.duplicate_insert" for r in caplog.records)


def test_concurrent_duplicate_follow_is_a_noop(service, session, monkeypatch):
    alice, bob = UserFactory(), UserFactory()
    FollowFactory(follower=bob, following=alice)
    monkeypatch.setattr(FollowRepository, "find_edge", lambda self, actor_id, target_id: None)

    out = service.toggle_follow(bob.id, alice.id)

    assert (out.active, out.count) == (True, 1)
    assert session.query(Follow).filter_by(following_id=alice.id).count() == 1
    assert _notifications(session, user_id=alice.id) == []
