"""User repository for persistence and authentication utilities."""

from __future__ import annotations

from typing import cast

from sqlalchemy import or_, select

from app.models.user import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    This repository focuses on safe lookup and password operations.
    It NEVER handles JWT creation; only DB-level user management.
    """

    model = User

    def _filterable_fields(self):
        return {
            "id": User.id,
            "email": User.email,
            "user_name": User.user_name,
        }

    def _updatable_fields(self):
        """Profile fields a user may edit themselves (password excluded)."""
        return {"user_name", "first_name", "last_name", "picture", "bio", "location"}

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.email == email.lower().strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def find_by_email_or_user_name(self, email: str, user_name: str | None) -> User | None:
        """Return the first user whose email or handle matches.

        One round trip answers both uniqueness questions at signup; the caller
        inspects the returned row to tell which field collided.
        """
        clauses = [User.email == email.lower().strip()]
        if user_name:
            clauses.append(User.user_name == user_name.strip())
        stmt = select(User).where(or_(*clauses)).order_by(User.id)
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def user_name_taken(self, user_name: str, *, exclude_id: int | None = None) -> bool:
        """Return ``True`` when another account already owns ``user_name``."""
        stmt = select(User.id).where(User.user_name == user_name.strip())
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        return self.session.execute(stmt.limit(1)).first() is not None

    # ---------------------------- Password ops ----------------------------

    def update_password(self, user: User, new_password: str) -> None:
        """Re-hash and store ``new_password`` for ``user``.

        :param user: Loaded user row.
        :param new_password: Raw password; the model setter hashes it.
        """
        user.password = new_password
        self.flush()

    def authenticate(self, email: str, password: str) -> User | None:
        """Return the user when ``email``/``password`` match, else ``None``."""
        user = self.get_by_email(email)
        if not user or not user.verify_password(password):
            return None
        return user
