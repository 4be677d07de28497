"""User endpoints: own profile and the follow graph."""

from __future__ import annotations

from flask import Blueprint, Response, request

from app.api.deps import current_auth, json_response, timing
from app.schemas import (
    FollowCountsSchema,
    FollowersSchema,
    FollowingSchema,
    FollowToggleSchema,
    IsFollowingSchema,
    ProfileUpdateSchema,
    UserSchema,
)
from app.services.engagement.service import EngagementService
from app.services.users.dto import ProfileUpdateIn
from app.services.users.service import UserService

bp = Blueprint("users", __name__, url_prefix="/users")

user_schema = UserSchema()
profile_update_schema = ProfileUpdateSchema()
followers_schema = FollowersSchema()
following_schema = FollowingSchema()
follow_counts_schema = FollowCountsSchema()
is_following_schema = IsFollowingSchema()
follow_toggle_schema = FollowToggleSchema()


@bp.get("/profile")
@timing
def get_profile():
    auth = current_auth()
    return json_response(user_schema.dump(UserService().get_profile(auth.user_id)))


@bp.patch("/update_profile")
@timing
def update_profile():
    """Apply a partial update to the caller's profile."""

    auth = current_auth()
    fields = profile_update_schema.load(request.get_json(silent=True) or {})
    result = UserService().update_profile(ProfileUpdateIn(user_id=auth.user_id, fields=fields))
    return json_response(user_schema.dump(result))


@bp.delete("/delete_profile")
@timing
def delete_profile():
    auth = current_auth()
    UserService().delete_profile(auth.user_id)
    return Response(status=204)


@bp.post("/toggle-follow/<int:user_id>")
@timing
def toggle_follow(user_id: int):
    auth = current_auth()
    result = EngagementService().toggle_follow(auth.user_id, user_id)
    return json_response(follow_toggle_schema.dump(result))


@bp.get("/is-following/<int:user_id>")
@timing
def is_following(user_id: int):
    auth = current_auth()
    return json_response(is_following_schema.dump(UserService().is_following(auth.user_id, user_id)))


@bp.get("/followers/<int:user_id>")
@timing
def followers(user_id: int):
    current_auth()
    return json_response(followers_schema.dump(UserService().list_followers(user_id)))


@bp.get("/following/<int:user_id>")
@timing
def following(user_id: int):
    current_auth()
    return json_response(following_schema.dump(UserService().list_following(user_id)))


@bp.get("/follow-counts/<int:user_id>")
@timing
def follow_counts(user_id: int):
    current_auth()
    return json_response(follow_counts_schema.dump(UserService().follow_counts(user_id)))
