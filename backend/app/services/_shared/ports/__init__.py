"""
app.services._shared.ports
==========================

Collection of *ports* (hexagonal interfaces) that decouple services from
infrastructure.

Modules
-------
- :mod:`token_provider`:
    :class:`~.TokenProvider`, abstraction for signing and verifying JWTs, plus
    the provider-neutral :class:`~.ExpiredTokenError` /
    :class:`~.InvalidTokenError`.

- :mod:`mailer`:
    :class:`~.Mailer`, abstraction for transactional email delivery.

Concrete adapters live under ``app.infra``.
"""

from __future__ import annotations

from .mailer import FailingMailer, InMemoryMailer, Mailer, OutgoingEmail
from .token_provider import (
    ExpiredTokenError,
    InvalidTokenError,
    StubTokenProvider,
    TokenError,
    TokenProvider,
)

__all__ = [
    "ExpiredTokenError",
    "FailingMailer",
    "InMemoryMailer",
    "InvalidTokenError",
    "Mailer",
    "OutgoingEmail",
    "StubTokenProvider",
    "TokenError",
    "TokenProvider",
]
