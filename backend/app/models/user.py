"""User account model."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from app.core.extensions import bcrypt, db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .comment import Comment, CommentLike
    from .follow import Follow
    from .notification import Notification
    from .post import Like, Post


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Account holding credentials and public profile data.

    Fields
    ------
    email : str
        Login email. Stored normalized (lowercase, trimmed). Unique.
    user_name : str | None
        Optional public handle. Unique when present.
    first_name, last_name : str
        Display name parts.
    password_hash : str
        bcrypt hash (write-only setter via ``password``).
    picture, bio, location : str | None
        Optional profile fields.
    verification_code : str | None
        Pending 6-digit password reset code; ``None`` when no reset is open.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(254), nullable=False, unique=True)
    user_name: Mapped[str | None] = mapped_column(String(50), nullable=True, unique=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    picture: Mapped[str | None] = mapped_column(Text, nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str | None] = mapped_column(String(120), nullable=True)
    verification_code: Mapped[str | None] = mapped_column(String(6), nullable=True)

    # Owned rows go away with the account
    posts: Mapped[list[Post]] = relationship(
        "Post", back_populates="author", cascade="all, delete-orphan"
    )
    comments: Mapped[list[Comment]] = relationship(
        "Comment", back_populates="author", cascade="all, delete-orphan"
    )
    likes: Mapped[list[Like]] = relationship(
        "Like", back_populates="user", cascade="all, delete-orphan"
    )
    comment_likes: Mapped[list[CommentLike]] = relationship(
        "CommentLike", back_populates="user", cascade="all, delete-orphan"
    )
    following: Mapped[list[Follow]] = relationship(
        "Follow",
        foreign_keys="Follow.follower_id",
        back_populates="follower",
        cascade="all, delete-orphan",
    )
    followers: Mapped[list[Follow]] = relationship(
        "Follow",
        foreign_keys="Follow.following_id",
        back_populates="following",
        cascade="all, delete-orphan",
    )
    notifications: Mapped[list[Notification]] = relationship(
        "Notification",
        foreign_keys="Notification.user_id",
        back_populates="recipient",
        cascade="all, delete-orphan",
    )
    sent_notifications: Mapped[list[Notification]] = relationship(
        "Notification",
        foreign_keys="Notification.from_user_id",
        back_populates="from_user",
        cascade="all, delete-orphan",
    )

    # -------------------- Password API --------------------
    @property
    def password(self) -> Any:  # pragma: no cover - explicit write-only contract
        """
        Disallow reading passwords.

        :raises AttributeError: Always, to ensure password is write-only.
        """
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        """
        Hash and set the password with bcrypt.

        :param raw: Plain text password to hash.
        :type raw: str
        """
        if not isinstance(raw, str) or not raw:
            raise ValueError("Password must be a non-empty string.")
        self.password_hash = bcrypt.generate_password_hash(raw).decode("utf-8")

    def verify_password(self, raw: str) -> bool:
        """
        Verify a password against the stored hash.

        :param raw: Plain text password candidate.
        :type raw: str
        :returns: ``True`` if it matches; otherwise ``False``.
        :rtype: bool
        """
        if not self.password_hash or not raw:
            return False
        return bool(bcrypt.check_password_hash(self.password_hash, raw))

    @property
    def display_name(self) -> str:
        """Handle when set, otherwise ``"First Last"``."""
        if self.user_name:
            return self.user_name
        return f"{self.first_name} {self.last_name}".strip()

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and validate email.

        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip().lower()
        # Minimal sanity check; full validation happens at API layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("user_name")
    def _normalize_user_name(self, key: str, value: str | None) -> str | None:
        """Trim the handle; blank handles are stored as ``None``."""
        if value is None:
            return None
        v = value.strip()
        return v or None
