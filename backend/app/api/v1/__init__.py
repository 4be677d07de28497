"""API v1 blueprint package bundling the public routes."""

from __future__ import annotations

from flask import Blueprint

# Import blueprints *only here* to keep imports localized and avoid cycles.
from .auth import bp as auth_bp  # noqa: E402
from .comment import bp as comment_bp  # noqa: E402
from .health import bp as health_bp  # noqa: E402
from .notification import bp as notification_bp  # noqa: E402
from .oauth import bp as oauth_bp  # noqa: E402
from .posts import bp as posts_bp  # noqa: E402
from .users import bp as users_bp  # noqa: E402

# Each tuple: (blueprint, url_prefix_relative_to_api_base)
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),  # -> /health
    (auth_bp, "/auth"),
    (oauth_bp, "/oauth"),
    (posts_bp, "/posts"),
    (comment_bp, "/comment"),
    (users_bp, "/users"),
    (notification_bp, "/notification"),
]
