"""Post endpoints: feed, detail, create, like toggle and delete."""

from __future__ import annotations

from flask import Blueprint, request

from app.api.deps import current_auth, json_body, json_response, optional_auth, timing
from app.schemas import (
    LikeToggleSchema,
    MessageSchema,
    PostCreateSchema,
    PostDetailSchema,
    PostListQuerySchema,
    PostPageSchema,
    PostSchema,
)
from app.services.engagement.service import EngagementService
from app.services.posts.dto import CreatePostIn, PostListIn
from app.services.posts.service import PostService

bp = Blueprint("posts", __name__, url_prefix="/posts")

list_query_schema = PostListQuerySchema()
create_schema = PostCreateSchema()
post_schema = PostSchema()
post_detail_schema = PostDetailSchema()
post_page_schema = PostPageSchema()
like_toggle_schema = LikeToggleSchema()
message_schema = MessageSchema()


@bp.get("/all")
@timing
def list_posts():
    """Return a feed window; ``cursor`` takes precedence over ``page``."""

    auth = optional_auth()
    query = list_query_schema.load(request.args)
    result = PostService().list_posts(
        PostListIn(**query), requester_id=auth.user_id if auth else None
    )
    return json_response(post_page_schema.dump(result))


@bp.get("/<int:post_id>")
@timing
def get_post(post_id: int):
    auth = optional_auth()
    result = PostService().get_post(post_id, requester_id=auth.user_id if auth else None)
    return json_response(post_detail_schema.dump(result))


@bp.post("/create")
@timing
def create_post():
    """Create a post from JSON or form fields (``content``, ``image``)."""

    auth = current_auth()
    data = create_schema.load(json_body())
    result = PostService().create_post(CreatePostIn(user_id=auth.user_id, **data))
    return json_response(post_schema.dump(result), status=201)


@bp.post("/<int:post_id>/toggle-like")
@timing
def toggle_like(post_id: int):
    auth = current_auth()
    result = EngagementService().toggle_post_like(auth.user_id, post_id)
    return json_response(like_toggle_schema.dump(result))


@bp.delete("/delete/<int:post_id>")
@timing
def delete_post(post_id: int):
    auth = current_auth()
    result = PostService().delete_post(post_id, auth.user_id)
    return json_response(message_schema.dump(result))
