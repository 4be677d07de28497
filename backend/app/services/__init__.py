"""Service layer public API.

This package exposes the essential building blocks for the service layer so that
callers can import from :mod:`app.services` without knowing internal structure.

Re-exports
----------
- Base primitive (from ``app.services._shared.base``)
    * :class:`BaseService`

- Account services
    * :class:`AuthService` (sign-up, sign-in, password reset)
    * :class:`TokenService` (access/refresh issuing and rotation)
    * :class:`OAuthService` (Google sign-in)
    * :class:`UserService` (profiles and follow lists)

- Social services
    * :class:`PostService`, :class:`CommentService`
    * :class:`EngagementService` (likes and follows)
    * :class:`NotificationService`
"""

from __future__ import annotations

# Base primitives
from ._shared.base import BaseService

# Shared DTOs
from ._shared.dto import MessageOut, UserSummaryOut

# Account services
from .auth.service import AuthService
from .oauth.service import OAuthService
from .tokens.service import TokenService
from .users.service import UserService

# Social services
from .comments.service import CommentService
from .engagement.service import EngagementService
from .notifications.service import NotificationService
from .posts.service import PostService

__all__ = [
    # Base
    "BaseService",
    # Shared DTOs
    "MessageOut",
    "UserSummaryOut",
    # Accounts
    "AuthService",
    "OAuthService",
    "TokenService",
    "UserService",
    # Social
    "CommentService",
    "EngagementService",
    "NotificationService",
    "PostService",
]
