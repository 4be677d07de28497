from app.models.comment import Comment, CommentLike
from app.models.follow import Follow
from app.models.notification import Notification, NotificationType
from app.models.post import Like, Post
from app.models.user import User

__all__ = [
    "Comment",
    "CommentLike",
    "Follow",
    "Like",
    "Notification",
    "NotificationType",
    "Post",
    "User",
]
