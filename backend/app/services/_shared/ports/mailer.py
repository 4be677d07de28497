from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True, slots=True)
class OutgoingEmail:
    """A rendered email ready for delivery."""

    to: str
    subject: str
    html: str


class Mailer(Protocol):
    """Port for delivering transactional email.

    Implementations may deliver asynchronously; ``send`` must not block the
    request on network I/O for long.
    """

    def send(self, message: OutgoingEmail) -> None: ...


@dataclass
class InMemoryMailer(Mailer):
    """Collects messages instead of sending them."""

    outbox: list[OutgoingEmail] = field(default_factory=list)

    def send(self, message: OutgoingEmail) -> None:
        self.outbox.append(message)


class FailingMailer(Mailer):
    """Always raises; used to check that delivery failures stay contained."""

    def send(self, message: OutgoingEmail) -> None:
        raise ConnectionError("SMTP server unavailable")
