"""Comment endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from app.api.deps import current_auth, json_response, optional_auth, timing
from app.schemas import CommentCreateSchema, CommentSchema, LikeToggleSchema, MessageSchema
from app.services.comments.dto import CreateCommentIn
from app.services.comments.service import CommentService
from app.services.engagement.service import EngagementService

bp = Blueprint("comment", __name__, url_prefix="/comment")

comment_schema = CommentSchema()
comment_list_schema = CommentSchema(many=True)
create_schema = CommentCreateSchema()
like_toggle_schema = LikeToggleSchema()
message_schema = MessageSchema()


@bp.get("/post/<int:post_id>")
@timing
def list_comments(post_id: int):
    auth = optional_auth()
    items = CommentService().list_comments(post_id, requester_id=auth.user_id if auth else None)
    return json_response(comment_list_schema.dump(items))


@bp.post("/post/<int:post_id>")
@timing
def create_comment(post_id: int):
    auth = current_auth()
    data = create_schema.load(request.get_json(silent=True) or {})
    result = CommentService().create_comment(
        CreateCommentIn(post_id=post_id, user_id=auth.user_id, content=data["content"])
    )
    return json_response(comment_schema.dump(result), status=201)


@bp.delete("/<int:comment_id>")
@timing
def delete_comment(comment_id: int):
    auth = current_auth()
    return json_response(message_schema.dump(CommentService().delete_comment(comment_id, auth.user_id)))


@bp.post("/<int:comment_id>/toggleLike")
@timing
def toggle_like(comment_id: int):
    auth = current_auth()
    result = EngagementService().toggle_comment_like(auth.user_id, comment_id)
    return json_response(like_toggle_schema.dump(result))
