"""walkwage log / off / delete — write-side commands."""

from __future__ import annotations

from datetime import datetime

import click

_DAY = click.DateTime(formats=["%Y-%m-%d"])


@click.command()
@click.argument("day", type=_DAY)
@click.argument("minutes", type=click.IntRange(min=0))
@click.option("--owner", default=None, help="User id (defaults to the current user).")
@click.pass_obj
def log(config, day: datetime, minutes: int, owner: str | None) -> None:
    """Log a walk of MINUTES on DAY (YYYY-MM-DD), replacing any earlier entry."""
    from .common import create_service, domain_errors, resolve_owner

    service = create_service(config)
    with domain_errors():
        owner_id = resolve_owner(config, service, owner, must_exist=True)
        record = service.log_walk(owner_id, day.date(), minutes)
    kind = record.explicit_kind.value if record.explicit_kind else "SHORT"
    click.echo(f"Logged {minutes} min on {day.date()} ({kind}).")


@click.command()
@click.argument("day", type=_DAY)
@click.option("--owner", default=None, help="User id (defaults to the current user).")
@click.option("--today", type=_DAY, default=None, help="Reference date (defaults to today).")
@click.pass_obj
def off(config, day: datetime, owner: str | None, today: datetime | None) -> None:
    """Mark DAY as an OFF day (at most two per week)."""
    from .common import create_service, domain_errors, resolve_owner

    service = create_service(config)
    with domain_errors():
        owner_id = resolve_owner(config, service, owner, must_exist=True)
        service.log_off_day(owner_id, day.date(), today.date() if today else None)
    click.echo(f"{day.date()} marked as OFF.")


@click.command()
@click.argument("day", type=_DAY)
@click.option("--owner", default=None, help="User id (defaults to the current user).")
@click.pass_obj
def delete(config, day: datetime, owner: str | None) -> None:
    """Remove whatever was logged on DAY."""
    from .common import create_service, domain_errors, resolve_owner

    service = create_service(config)
    with domain_errors():
        owner_id = resolve_owner(config, service, owner, must_exist=True)
        deleted = service.delete_walk(owner_id, day.date())
    if deleted:
        click.echo(f"Deleted entry on {day.date()}.")
    else:
        click.echo(f"Nothing logged on {day.date()}.")
