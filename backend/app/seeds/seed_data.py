"""Idempotent database seed helpers for local development environments."""

from __future__ import annotations

import logging
from typing import Any, TypeVar, cast

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.comment import Comment
from app.models.follow import Follow
from app.models.post import Like, Post
from app.models.user import User

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

USER_FIXTURES: list[dict[str, str | None]] = [
    {
        "email": "alex.martinez@example.com",
        "user_name": "alexm",
        "first_name": "Alex",
        "last_name": "Martinez",
        "password": "devPass123!",
        "bio": "Reads two books a week, reviews one.",
        "location": "Madrid",
    },
    {
        "email": "jamie.lee@example.com",
        "user_name": "jamielee",
        "first_name": "Jamie",
        "last_name": "Lee",
        "password": "strongPass123",
        "bio": None,
        "location": "Seoul",
    },
    {
        "email": "sara.kim@example.com",
        "user_name": None,
        "first_name": "Sara",
        "last_name": "Kim",
        "password": "readMore2024",
        "bio": "Sci-fi and poetry.",
        "location": None,
    },
]

# (follower, following) by email
FOLLOW_FIXTURES: list[tuple[str, str]] = [
    ("alex.martinez@example.com", "jamie.lee@example.com"),
    ("jamie.lee@example.com", "alex.martinez@example.com"),
    ("sara.kim@example.com", "alex.martinez@example.com"),
]

POST_FIXTURES: list[dict[str, str]] = [
    {"author": "alex.martinez@example.com", "content": "Just finished Dune. What a ride."},
    {"author": "alex.martinez@example.com", "content": "Book club picks for next month?"},
    {"author": "jamie.lee@example.com", "content": "Rereading The Left Hand of Darkness."},
    {
        "author": "sara.kim@example.com",
        "content": "",
        "image": "https://images.example.com/bookshelf.jpg",
    },
]

# (post content, commenter email, text)
COMMENT_FIXTURES: list[tuple[str, str, str]] = [
    ("Just finished Dune. What a ride.", "jamie.lee@example.com", "The sequels are worth it too."),
    ("Book club picks for next month?", "sara.kim@example.com", "Piranesi!"),
]

# (post content, liker email)
LIKE_FIXTURES: list[tuple[str, str]] = [
    ("Just finished Dune. What a ride.", "jamie.lee@example.com"),
    ("Just finished Dune. What a ride.", "sara.kim@example.com"),
    ("Rereading The Left Hand of Darkness.", "alex.martinez@example.com"),
]


def _session(database: SQLAlchemy) -> Session:
    """Return the current SQLAlchemy session."""
    return cast(Session, database.session)


def _touch(summary: dict[str, dict[str, int]], table: str, created: bool) -> None:
    """Update summary counters for the given table."""
    entry = summary.setdefault(table, {"created": 0, "existing": 0})
    if created:
        entry["created"] += 1
    else:
        entry["existing"] += 1


def _get_or_create(
    session: Session,
    model: type[T],
    *,
    defaults: dict[str, Any] | None = None,
    **filters: Any,
) -> tuple[T, bool]:
    """Fetch ``model`` by ``filters`` or create it using ``defaults``."""
    instance = session.execute(select(model).filter_by(**filters)).scalars().first()
    if instance is not None:
        return instance, False
    params = dict(defaults or {})
    params.update(filters)
    instance = cast(T, model(**params))
    session.add(instance)
    return instance, True


def seed_users(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Create demo accounts (existing ones keep their password)."""
    if verbose:
        LOGGER.info("Seeding users...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}

    for fixture in USER_FIXTURES:
        email = str(fixture["email"]).strip().lower()
        user = session.execute(select(User).filter_by(email=email)).scalar_one_or_none()
        created = user is None
        if user is None:
            user = User(email=email)
            user.password = str(fixture["password"])
            session.add(user)
        user.user_name = fixture.get("user_name")
        user.first_name = str(fixture["first_name"])
        user.last_name = str(fixture["last_name"])
        user.bio = fixture.get("bio")
        user.location = fixture.get("location")
        _touch(summary, "users", created)

    session.commit()
    return summary


def seed_social_graph(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Create follows, posts, comments and likes between the demo accounts."""
    if verbose:
        LOGGER.info("Seeding follows, posts, comments and likes...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}
    users = {u.email: u for u in session.execute(select(User)).scalars()}

    def user(email: str) -> User:
        found = users.get(email)
        if found is None:
            raise RuntimeError(f"Seed user {email!r} is missing; run seed_users first")
        return found

    for follower, following in FOLLOW_FIXTURES:
        _, created = _get_or_create(
            session, Follow, follower_id=user(follower).id, following_id=user(following).id
        )
        _touch(summary, "follows", created)

    posts: dict[str, Post] = {}
    for fixture in POST_FIXTURES:
        post, created = _get_or_create(
            session,
            Post,
            user_id=user(fixture["author"]).id,
            content=fixture["content"],
            defaults={"image": fixture.get("image", "")},
        )
        session.flush()
        posts[fixture["content"]] = post
        _touch(summary, "posts", created)

    for content, commenter, text in COMMENT_FIXTURES:
        _, created = _get_or_create(
            session, Comment, post_id=posts[content].id, user_id=user(commenter).id, content=text
        )
        _touch(summary, "comments", created)

    for content, liker in LIKE_FIXTURES:
        _, created = _get_or_create(session, Like, post_id=posts[content].id, user_id=user(liker).id)
        _touch(summary, "likes", created)

    session.commit()
    return summary


def run_all(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Run all seeders in the correct foreign-key order."""
    if verbose:
        LOGGER.info("Running full seed pipeline...")
    combined: dict[str, dict[str, int]] = {}
    for func in (seed_users, seed_social_graph):
        result = func(database, verbose=verbose)
        for table, counters in result.items():
            entry = combined.setdefault(table, {"created": 0, "existing": 0})
            entry["created"] += counters.get("created", 0)
            entry["existing"] += counters.get("existing", 0)
    return combined


__all__ = ["seed_social_graph", "seed_users", "run_all"]
