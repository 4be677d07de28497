from __future__ import annotations

from dataclasses import dataclass

from app.services.users.dto import UserOut


@dataclass(frozen=True, slots=True)
class OAuthProfileIn:
    """
    Identity asserted by a verified third-party provider.

    :param email: Verified email address; the only account linkage key.
    :type email: str
    :param first_name: Given name.
    :type first_name: str
    :param last_name: Family name.
    :type last_name: str
    :param picture: Avatar URL, if the provider shared one.
    :type picture: str | None
    """

    email: str
    first_name: str
    last_name: str
    picture: str | None = None


@dataclass(frozen=True, slots=True)
class OAuthOut:
    """
    Result of an OAuth sign-in.

    :param message: ``"User created successfully"`` or ``"User signed in successfully"``.
    :param created: Whether a local account was provisioned.
    :param user: Sanitized profile.
    :param access_token: Encoded access JWT.
    :param refresh_token: Encoded refresh JWT.
    """

    message: str
    created: bool
    user: UserOut
    access_token: str
    refresh_token: str
