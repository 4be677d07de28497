# tests/unit/services/test_user_service.py
from __future__ import annotations

import pytest
from app.models import Follow, Post, User
from app.services._shared.errors import ConflictError, NotFoundError, ServiceError
from app.services.users.dto import ProfileUpdateIn
from app.services.users.service import UserService
from tests.factories.follow import FollowFactory
from tests.factories.post import PostFactory
from tests.factories.user import UserFactory


@pytest.fixture()
def service() -> UserService:
    return UserService()


# ------------------------------- Profile ---------------------------------- #
def test_get_profile(service):
    user = UserFactory(bio="hi")

    out = service.get_profile(user.id)

    assert out.id == user.id
    assert out.bio == "hi"
    assert not hasattr(out, "password_hash")
    assert not hasattr(out, "verification_code")


def test_get_profile_missing(service):
    with pytest.raises(NotFoundError, match="User not found"):
        service.get_profile(999_999)


def test_update_profile_partial(service):
    user = UserFactory(first_name="Old", location="Paris")

    out = service.update_profile(
        ProfileUpdateIn(user_id=user.id, fields={"first_name": "New", "bio": "Books"})
    )

    assert out.first_name == "New"
    assert out.bio == "Books"
    assert out.location == "Paris"


@pytest.mark.parametrize("field", ["password", "password_hash", "confirm_password"])
def test_update_profile_rejects_password(service, field):
    user = UserFactory()

    with pytest.raises(ServiceError, match="change password endpoint"):
        service.update_profile(ProfileUpdateIn(user_id=user.id, fields={field: "x"}))


def test_update_profile_rejects_non_editable_field(service):
    user = UserFactory()

    with pytest.raises(ServiceError):
        service.update_profile(ProfileUpdateIn(user_id=user.id, fields={"email": "x@example.com"}))


def test_update_profile_handle_conflict(service):
    UserFactory(user_name="taken")
    user = UserFactory(user_name="mine")

    with pytest.raises(ConflictError, match="Username is already taken"):
        service.update_profile(ProfileUpdateIn(user_id=user.id, fields={"user_name": "taken"}))

    # Keeping one's own handle is fine
    out = service.update_profile(ProfileUpdateIn(user_id=user.id, fields={"user_name": "mine"}))
    assert out.user_name == "mine"


def test_delete_profile_cascades(service, session):
    user, other = UserFactory(), UserFactory()
    PostFactory(author=user)
    FollowFactory(follower=other, following=user)
    user_id = user.id

    service.delete_profile(user_id)

    assert session.get(User, user_id) is None
    assert session.query(Post).filter_by(user_id=user_id).count() == 0
    assert session.query(Follow).filter_by(following_id=user_id).count() == 0

    with pytest.raises(NotFoundError):
        service.delete_profile(user_id)


# ----------------------------- Follow graph ------------------------------- #
def test_follow_graph_queries(service):
    alice, bob, carol = UserFactory(), UserFactory(), UserFactory()
    FollowFactory(follower=bob, following=alice)
    FollowFactory(follower=carol, following=alice)
    FollowFactory(follower=alice, following=carol)

    assert [u.id for u in service.list_followers(alice.id).users] == [carol.id, bob.id]
    assert [u.id for u in service.list_following(alice.id).users] == [carol.id]
    counts = service.follow_counts(alice.id)
    assert (counts.followers_count, counts.following_count) == (2, 1)
    assert service.is_following(bob.id, alice.id).is_following is True
    assert service.is_following(alice.id, bob.id).is_following is False


def test_follow_graph_missing_user(service):
    with pytest.raises(NotFoundError):
        service.list_followers(999_999)
    with pytest.raises(NotFoundError):
        service.follow_counts(999_999)
