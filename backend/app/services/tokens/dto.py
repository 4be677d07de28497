from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TokenPayload:
    """
    Identity carried inside both tokens.

    :param id: User id (also the JWT ``sub``).
    :type id: int
    :param email: User email at issuance time.
    :type email: str
    """

    id: int
    email: str


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class RefreshOut:
    """
    Output DTO of a refresh-token rotation.

    :param access_token: Newly signed access JWT.
    :param refresh_token: Replacement refresh JWT with one fewer rotation.
    :param message: Acknowledgement for the client.
    """

    access_token: str
    refresh_token: str
    message: str = "Tokens refreshed successfully"
