"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    AuthResponseSchema,
    ChangePasswordSchema,
    LoggedInPasswordChangeSchema,
    OAuthResponseSchema,
    RefreshResponseSchema,
    ResetPasswordSchema,
    SigninSchema,
    SignupSchema,
    VerifyCodeSchema,
)
from .common import (
    CamelCaseSchema,
    MessageSchema,
    PaginationQuerySchema,
    UserSummarySchema,
)
from .notification import (
    NotificationIdsSchema,
    NotificationPageSchema,
    NotificationSchema,
    SuccessSchema,
)
from .post import (
    CommentCreateSchema,
    CommentSchema,
    LikeToggleSchema,
    PostCreateSchema,
    PostDetailSchema,
    PostListQuerySchema,
    PostPageSchema,
    PostSchema,
)
from .user import (
    FollowCountsSchema,
    FollowersSchema,
    FollowingSchema,
    FollowToggleSchema,
    IsFollowingSchema,
    ProfileUpdateSchema,
    UserSchema,
)

__all__ = [
    "AuthResponseSchema",
    "CamelCaseSchema",
    "ChangePasswordSchema",
    "CommentCreateSchema",
    "CommentSchema",
    "FollowCountsSchema",
    "FollowToggleSchema",
    "FollowersSchema",
    "FollowingSchema",
    "IsFollowingSchema",
    "LikeToggleSchema",
    "LoggedInPasswordChangeSchema",
    "MessageSchema",
    "NotificationIdsSchema",
    "NotificationPageSchema",
    "NotificationSchema",
    "OAuthResponseSchema",
    "PaginationQuerySchema",
    "PostCreateSchema",
    "PostDetailSchema",
    "PostListQuerySchema",
    "PostPageSchema",
    "PostSchema",
    "ProfileUpdateSchema",
    "RefreshResponseSchema",
    "ResetPasswordSchema",
    "SigninSchema",
    "SignupSchema",
    "SuccessSchema",
    "UserSchema",
    "UserSummarySchema",
    "VerifyCodeSchema",
]
