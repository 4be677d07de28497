"""
SQLAlchemy implementation of UnitOfWork for Flask.
"""

from __future__ import annotations

import logging
from contextlib import suppress

from sqlalchemy import event, text
from sqlalchemy.exc import InvalidRequestError, SQLAlchemyError
from sqlalchemy.orm import Session, SessionTransaction, scoped_session

from app.core.extensions import db
from app.repositories import (
    CommentLikeRepository,
    CommentRepository,
    FollowRepository,
    LikeRepository,
    NotificationRepository,
    PostRepository,
    UserRepository,
)
from app.uow.base import UnitOfWork

logger = logging.getLogger(__name__)


class SQLAlchemyRepositoryContainer:
    """Provide repository instances that share a SQLAlchemy session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session=self.session)
        self.follows = FollowRepository(session=self.session)
        self.posts = PostRepository(session=self.session)
        self.likes = LikeRepository(session=self.session)
        self.comments = CommentRepository(session=self.session)
        self.comment_likes = CommentLikeRepository(session=self.session)
        self.notifications = NotificationRepository(session=self.session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    SQLAlchemy-backed UoW using the Flask-scoped session.

    The same session is shared across all repositories for a consistent
    transaction. Leaving the block without an exception commits; any
    exception rolls back and propagates.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        # The session begins lazily on first use.
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            try:
                self.commit()
            except Exception:
                self.rollback()
                raise
        else:
            self.rollback()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only Unit of Work backed by the Flask-scoped SQLAlchemy session.

    This UoW:
    - Owns a fresh transaction when none is running and rolls it back on exit.
    - Attaches to an already running transaction otherwise, leaving it intact.
    - On PostgreSQL/MySQL, issues ``SET TRANSACTION READ ONLY`` when owning.
    - Blocks ORM flushes carrying new, dirty or deleted objects.
    - Disallows ``commit()``.
    """

    _READ_ONLY_DIALECTS = ("postgresql", "mysql", "mariadb")

    def __init__(self, *, isolation_level: str | None = None) -> None:
        super().__init__(session=db.session)
        self.isolation_level = isolation_level
        self._txn_ctx: SessionTransaction | None = None
        self._guard_installed = False

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        self._txn_ctx = None
        try:
            txn_ctx = self.session.begin()
            txn_ctx.__enter__()
            self._txn_ctx = txn_ctx
        except InvalidRequestError:
            # A transaction is already begun on this Session (autobegin or an
            # outer fixture); attach to it.
            pass

        self._install_guard()

        if self._txn_ctx is not None:
            dialect = self.session.connection().dialect.name
            if dialect in self._READ_ONLY_DIALECTS:
                try:
                    if self.isolation_level:
                        iso = self.isolation_level.upper().strip()
                        self.session.execute(text(f"SET TRANSACTION ISOLATION LEVEL {iso}"))
                    self.session.execute(text("SET TRANSACTION READ ONLY"))
                except SQLAlchemyError as exc:
                    logger.warning("SET TRANSACTION directives failed (%s); guards only.", exc)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        """Always remove the guard. Roll back only if we own the transaction."""
        try:
            if self._txn_ctx is not None:
                with suppress(SQLAlchemyError):
                    self.session.rollback()
                try:
                    self._txn_ctx.__exit__(exc_type, exc, tb)
                finally:
                    self._txn_ctx = None
        finally:
            self._remove_guard()

    def commit(self) -> None:
        """
        Disallow commit in read-only Unit of Work.

        :raises RuntimeError: always, to prevent accidental writes.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()

    # ----------------------------- Guard --------------------------------------

    def _install_guard(self) -> None:
        if self._guard_installed:
            return

        def _before_flush(session, flush_context, instances):
            if session.new or session.dirty or session.deleted:
                raise RuntimeError(
                    "Read-only UnitOfWork: ORM flush blocked (new/dirty/deleted objects present)."
                )

        # Listen on the concrete Session so other scopes keep flushing.
        target = self.session() if isinstance(self.session, scoped_session) else self.session
        event.listen(target, "before_flush", _before_flush)
        self._ro_target = target
        self._ro_before_flush = _before_flush
        self._guard_installed = True

    def _remove_guard(self) -> None:
        if not self._guard_installed:
            return
        with suppress(InvalidRequestError):
            event.remove(self._ro_target, "before_flush", self._ro_before_flush)
        self._guard_installed = False
