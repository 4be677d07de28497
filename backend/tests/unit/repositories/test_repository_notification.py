"""Unit tests for NotificationRepository."""

import pytest
from app.models.notification import Notification
from app.repositories.notification import NotificationRepository
from tests.factories.notification import NotificationFactory
from tests.factories.user import UserFactory


@pytest.fixture()
def repo(session):
    return NotificationRepository(session=session)


def test_inbox_is_scoped_and_paginated(repo):
    me, other = UserFactory(), UserFactory()
    mine = [NotificationFactory(recipient=me) for _ in range(3)]
    NotificationFactory(recipient=other)

    page = repo.inbox(me.id, page=1, limit=2)

    assert page.total == 3
    assert [n.id for n in page.items] == [mine[2].id, mine[1].id]
    assert repo.inbox(me.id, page=2, limit=2).items[0].id == mine[0].id


def test_mark_read_ignores_foreign_ids(repo, session):
    me, other = UserFactory(), UserFactory()
    mine = NotificationFactory(recipient=me)
    theirs = NotificationFactory(recipient=other)

    assert repo.mark_read(me.id, [mine.id, theirs.id]) == 1
    session.expire_all()
    assert session.get(Notification, mine.id).is_read is True
    assert session.get(Notification, theirs.id).is_read is False


def test_mark_read_without_ids_marks_all_unread(repo):
    me = UserFactory()
    NotificationFactory(recipient=me)
    NotificationFactory(recipient=me)
    NotificationFactory(recipient=me, is_read=True)

    assert repo.mark_read(me.id) == 2


def test_delete_for_with_and_without_ids(repo):
    me, other = UserFactory(), UserFactory()
    NotificationFactory(recipient=me)
    drop = NotificationFactory(recipient=me)
    theirs = NotificationFactory(recipient=other)

    assert repo.delete_for(me.id, [drop.id, theirs.id]) == 1
    assert repo.count(user_id=me.id) == 1
    assert repo.delete_for(me.id) == 1
    assert repo.count(user_id=me.id) == 0
    assert repo.count(user_id=other.id) == 1
