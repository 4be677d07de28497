# app/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass

from app.services.users.dto import UserOut

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class SignupIn:
    """
    Input DTO for signup.

    :param email: Login email (normalized by the model).
    :type email: str
    :param first_name: First name.
    :type first_name: str
    :param last_name: Last name.
    :type last_name: str
    :param password: Raw password.
    :type password: str
    :param confirm_password: Must equal ``password``.
    :type confirm_password: str
    :param user_name: Optional public handle.
    :type user_name: str | None
    """

    email: str
    first_name: str
    last_name: str
    password: str
    confirm_password: str
    user_name: str | None = None


@dataclass(frozen=True, slots=True)
class SigninIn:
    """
    Input DTO for signin.

    :param email: User email.
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class VerifyCodeIn:
    email: str
    code: str


@dataclass(frozen=True, slots=True)
class ChangePasswordIn:
    """Logged-out password change, used right after code verification."""

    email: str
    new_password: str


@dataclass(frozen=True, slots=True)
class LoggedInPasswordChangeIn:
    """
    Password change for an authenticated user.

    :param user_id: Authenticated user id (from the bearer token).
    :type user_id: int
    :param current_password: Password currently on file.
    :type current_password: str
    :param new_password: Replacement password.
    :type new_password: str
    :param confirm_password: Must equal ``new_password``.
    :type confirm_password: str
    """

    user_id: int
    current_password: str
    new_password: str
    confirm_password: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthOut:
    """
    Result of signup/signin: sanitized user plus a token pair.

    :param user: Profile without credentials.
    :type user: UserOut
    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    user: UserOut
    access_token: str
    refresh_token: str
