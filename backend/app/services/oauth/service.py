"""
OAuthService
============

Turns a verified provider identity into a local account and a token pair.

Accounts are matched by email only: a Google sign-in for an email that
already has a password account signs into that account.
"""

from __future__ import annotations

import logging
import secrets

from sqlalchemy.exc import IntegrityError

from app.repositories.user import UserRepository
from app.services._shared.base import BaseService
from app.services.oauth.dto import OAuthOut, OAuthProfileIn
from app.services.tokens.dto import TokenPayload
from app.services.tokens.service import TokenService
from app.services.users.dto import UserOut, to_user_out

logger = logging.getLogger(__name__)

MSG_CREATED = "User created successfully"
MSG_SIGNED_IN = "User signed in successfully"


class OAuthService(BaseService):
    """Provision-or-sign-in for third-party identities."""

    def __init__(self, *, tokens: TokenService) -> None:
        super().__init__()
        self.tokens = tokens

    def validate_user(self, profile: OAuthProfileIn) -> OAuthOut:
        """
        Sign in the account owning ``profile.email``, creating it if absent.

        Existing accounts are left untouched. New accounts get a random
        password nobody knows; the owner can set one through the reset flow.

        :param profile: Identity from the provider.
        :returns: Message, sanitized user and a fresh token pair.
        """
        try:
            user_out, created = self._find_or_create(profile)
        except IntegrityError:
            # Lost a race against a concurrent first sign-in
            user_out, created = self._find_or_create(profile)

        if created:
            logger.info("oauth.user_created", extra={"user_id": user_out.id})
        pair = self.tokens.issue(TokenPayload(id=user_out.id, email=user_out.email))
        return OAuthOut(
            message=MSG_CREATED if created else MSG_SIGNED_IN,
            created=created,
            user=user_out,
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
        )

    def _find_or_create(self, profile: OAuthProfileIn) -> tuple[UserOut, bool]:
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_by_email(profile.email)
            if user is not None:
                return to_user_out(user), False

            user = repo.model(
                email=profile.email,
                first_name=profile.first_name,
                last_name=profile.last_name,
                picture=profile.picture,
            )
            user.password = secrets.token_urlsafe(32)
            repo.add(user)
            return to_user_out(user), True
