"""``flask seed``: demo readers and their social graph for local development.

``run`` is idempotent: accounts are matched by email and edges, posts and
comments by their natural keys, so running it twice only reports rows as
existing. ``fresh`` rebuilds the schema first and refuses to touch a
production database.
"""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext

from app.core.extensions import db
from app.seeds import seed_data

LOGGER = logging.getLogger(__name__)

# Foreign-key order; also the order rows are reported in.
TABLES = ("users", "follows", "posts", "comments", "likes")

STAGES = {
    "users": seed_data.seed_users,
    "social": seed_data.seed_social_graph,
}


def _echo_summary(summary: dict[str, dict[str, int]]) -> None:
    click.echo("Demo data:")
    if not summary:
        click.echo("  nothing to do")
        return
    ordered = [t for t in TABLES if t in summary] + sorted(set(summary) - set(TABLES))
    width = max(len(name) for name in ordered)
    for table in ordered:
        counters = summary[table]
        click.echo(
            f"  {table.ljust(width)}  created={counters.get('created', 0):>2}"
            f"  existing={counters.get('existing', 0):>2}"
        )


def _refuse_in_production() -> None:
    config = current_app.config
    app_env = str(config.get("APP_ENV", "")).lower()
    env = str(config.get("ENV", "production")).lower()
    if app_env == "production" or (
        env == "production" and not config.get("DEBUG") and not config.get("TESTING")
    ):
        raise click.UsageError("'flask seed fresh' drops every table; it is disabled in production.")


def _seed(stage: str | None, verbose: bool) -> dict[str, dict[str, int]]:
    if stage is None:
        return seed_data.run_all(db, verbose=verbose)
    return STAGES[stage](db, verbose=verbose)


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Log each seeding step.")
@click.pass_context
def seed_cli(ctx: click.Context, verbose: bool) -> None:
    """Load demo readers, follows, posts, comments and likes."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    level = logging.DEBUG if verbose else logging.INFO
    for name in ("app.seeds", seed_data.__name__, __name__):
        logging.getLogger(name).setLevel(level)


@seed_cli.command("run")
@click.option(
    "--only",
    type=click.Choice(sorted(STAGES)),
    default=None,
    help="Seed just the accounts or just the social graph (which needs the accounts).",
)
@click.pass_context
@with_appcontext
def run_command(ctx: click.Context, only: str | None) -> None:
    """Add the demo data that is missing; existing rows are left alone."""
    try:
        summary = _seed(only, bool(ctx.obj.get("verbose", False)))
    except Exception as exc:  # pragma: no cover - CLI safeguard
        db.session.rollback()
        raise click.ClickException(f"Seeding failed: {exc}") from exc
    _echo_summary(summary)


@seed_cli.command("fresh")
@click.option("--yes", is_flag=True, help="Do not ask before dropping the tables.")
@click.pass_context
@with_appcontext
def fresh_command(ctx: click.Context, yes: bool) -> None:
    """Rebuild the schema from the models, then load all demo data."""
    _refuse_in_production()
    if not yes:
        click.confirm("Drop every table (users, posts, notifications...) and reseed?", abort=True)
    LOGGER.info("seed.fresh.rebuilding_schema")
    db.session.remove()
    db.drop_all()
    db.create_all()
    try:
        summary = _seed(None, bool(ctx.obj.get("verbose", False)))
    except Exception as exc:  # pragma: no cover - CLI safeguard
        db.session.rollback()
        raise click.ClickException(f"Fresh seed failed: {exc}") from exc
    _echo_summary(summary)
