# app/services/auth/service.py
"""
AuthService
===========

Credential lifecycle of a user account:

- signup / signin returning a fresh token pair,
- stateless signout and refresh (delegated to :class:`TokenService`),
- code-based password reset (reset → verify → change),
- password change for an authenticated user.
"""

from __future__ import annotations

import logging
import secrets

from sqlalchemy.exc import IntegrityError

from app.repositories.user import UserRepository
from app.services._shared.base import BaseService
from app.services._shared.dto import MessageOut
from app.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ServiceError,
    violates,
)
from app.services._shared.ports.mailer import Mailer, OutgoingEmail
from app.services.auth.dto import (
    AuthOut,
    ChangePasswordIn,
    LoggedInPasswordChangeIn,
    SigninIn,
    SignupIn,
    VerifyCodeIn,
)
from app.services.tokens.dto import RefreshOut, TokenPayload
from app.services.tokens.service import TokenService
from app.services.users.dto import to_user_out

logger = logging.getLogger(__name__)

RESET_SUBJECT = "Password Reset Code"

RESET_EMAIL_TEMPLATE = """\
<!DOCTYPE html>
<html>
  <body style="font-family: Arial, sans-serif; background-color: #f4f4f4;">
    <div style="max-width: 600px; margin: 20px auto; background: #ffffff; padding: 20px;">
      <h2 style="text-align: center;">Password Reset Request</h2>
      <p>Hello there,</p>
      <p>You requested a password reset. Please use the following verification
      code to reset your password:</p>
      <div style="font-size: 24px; font-weight: bold; text-align: center;">{code}</div>
      <p>If you did not request a password reset, you can safely ignore this email.</p>
      <p style="font-size: 12px; color: #777777;">Thank you for using our application!</p>
    </div>
  </body>
</html>
"""


def generate_reset_code() -> str:
    """Return a 6-digit numeric code in ``100000..999999``."""
    return str(100000 + secrets.randbelow(900000))


class AuthService(BaseService):
    """
    Authentication use cases over the user store.

    :param tokens: Token service used to sign and rotate token pairs.
    :param mailer: Delivery port for the password reset email.
    """

    def __init__(self, *, tokens: TokenService, mailer: Mailer) -> None:
        super().__init__()
        self.tokens = tokens
        self.mailer = mailer

    # ------------------------------------------------------------------ #
    # Signup / signin / signout
    # ------------------------------------------------------------------ #

    def signup(self, dto: SignupIn) -> AuthOut:
        """
        Register a password account and sign it in.

        :param dto: Signup input.
        :returns: Sanitized user and a fresh token pair.
        :raises ServiceError: If the passwords differ.
        :raises ConflictError: If the handle or the email is already used.
        """
        if dto.password != dto.confirm_password:
            raise ServiceError("Passwords do not match")

        user_name = (dto.user_name or "").strip() or None
        email = dto.email.lower().strip()

        try:
            with self.rw_uow() as uow:
                repo: UserRepository = uow.users

                existing = repo.find_by_email_or_user_name(email, user_name)
                if existing is not None:
                    if user_name and existing.user_name == user_name:
                        raise ConflictError("User", "Username is already taken")
                    raise ConflictError("User", "Email is already registered")

                user = repo.model(
                    email=email,
                    user_name=user_name,
                    first_name=dto.first_name,
                    last_name=dto.last_name,
                )
                user.password = dto.password  # model setter hashes
                repo.add(user)
                user_out = to_user_out(user)
        except IntegrityError as exc:
            # Concurrent signup slipped past the lookup
            if violates(exc, "users.user_name") or violates(exc, "uq_users_user_name"):
                raise ConflictError("User", "Username is already taken") from exc
            if violates(exc, "users.email") or violates(exc, "uq_users_email"):
                raise ConflictError("User", "Email is already registered") from exc
            raise

        logger.info("auth.signup", extra={"user_id": user_out.id})
        pair = self.tokens.issue(TokenPayload(id=user_out.id, email=user_out.email))
        return AuthOut(
            user=user_out,
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
        )

    def signin(self, dto: SigninIn) -> AuthOut:
        """
        Verify credentials and issue a token pair.

        Unknown email and wrong password raise the same error.

        :raises ServiceError: ``"Invalid credentials"``.
        """
        with self.ro_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.authenticate(dto.email, dto.password)
            if user is None:
                raise ServiceError("Invalid credentials")
            user_out = to_user_out(user)

        pair = self.tokens.issue(TokenPayload(id=user_out.id, email=user_out.email))
        return AuthOut(
            user=user_out,
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
        )

    def signout(self, user_id: int) -> MessageOut:
        """Acknowledge a signout. Tokens stay valid until they expire."""
        logger.info("auth.signout", extra={"user_id": user_id})
        return MessageOut(message=f"User with ID {user_id} signed out successfully")

    def refresh_token(self, token: str | None) -> RefreshOut:
        """Rotate ``token``; see :meth:`TokenService.rotate`."""
        return self.tokens.rotate(token)

    # ------------------------------------------------------------------ #
    # Password reset
    # ------------------------------------------------------------------ #

    def reset_password(self, email: str) -> MessageOut:
        """
        Store a fresh one-time code and email it to the user.

        The code is committed before delivery is attempted; a mail failure
        is logged and never undoes the stored code.

        :raises ServiceError: ``"User not found"``.
        """
        code = generate_reset_code()
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_by_email(email)
            if user is None:
                raise ServiceError("User not found")
            user.verification_code = code
            repo.flush()
            recipient = user.email

        message = OutgoingEmail(
            to=recipient,
            subject=RESET_SUBJECT,
            html=RESET_EMAIL_TEMPLATE.format(code=code),
        )
        self.after_commit("reset_password.email", lambda: self.mailer.send(message))
        return MessageOut(message=f"code sent successfully to your email {recipient}")

    def verify_code(self, dto: VerifyCodeIn) -> MessageOut:
        """
        Check and consume the pending reset code.

        :raises NotFoundError: No user with that email.
        :raises AuthenticationError: Code differs (or was already used).
        """
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_by_email(dto.email)
            if user is None:
                raise NotFoundError("User", dto.email)
            if user.verification_code is None or user.verification_code != dto.code:
                raise AuthenticationError("Invalid code")
            user.verification_code = None
            repo.flush()

        return MessageOut(message="Code verified successfully, you can now change your password")

    def change_password(self, dto: ChangePasswordIn) -> MessageOut:
        """
        Overwrite the password of the account owning ``dto.email``.

        :raises ServiceError: ``"User not found"``.
        """
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_by_email(dto.email)
            if user is None:
                raise ServiceError("User not found")
            repo.update_password(user, dto.new_password)

        return MessageOut(message="Password changed successfully, please login again")

    def change_password_for_logged_in_user(self, dto: LoggedInPasswordChangeIn) -> MessageOut:
        """
        Replace the password after checking the current one.

        :raises ServiceError: Passwords differ, or the user is gone.
        :raises AuthenticationError: ``current_password`` is wrong.
        """
        if dto.new_password != dto.confirm_password:
            raise ServiceError("Passwords do not match")

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(dto.user_id)
            if user is None:
                raise ServiceError("User not found")
            if not user.verify_password(dto.current_password):
                raise AuthenticationError("Current password is incorrect")
            repo.update_password(user, dto.new_password)

        return MessageOut(message="Password changed successfully")
