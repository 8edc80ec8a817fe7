"""walkwage stats — show a month's ledger."""

from __future__ import annotations

import json
from datetime import date, datetime

import click


@click.command()
@click.option("--year", type=int, default=None, help="Defaults to the current year.")
@click.option("--month", type=click.IntRange(1, 12), default=None, help="1-12, defaults to the current month.")
@click.option("--today", type=click.DateTime(formats=["%Y-%m-%d"]), default=None, help="Reference date.")
@click.option("--owner", default=None, help="User id (defaults to the current user).")
@click.option("--json", "as_json", is_flag=True, help="Print the ledger as JSON.")
@click.pass_obj
def stats(
    config, year: int | None, month: int | None, today: datetime | None, owner: str | None, as_json: bool
) -> None:
    """Show earnings and penalties for a month, week by week."""
    from walkwage.activity.report import format_month, to_dict

    from .common import create_service, domain_errors, resolve_owner

    reference = today.date() if today else date.today()
    year = year or reference.year
    month = month or reference.month

    service = create_service(config)
    with domain_errors():
        owner_id = resolve_owner(config, service, owner)
        result = service.month_stats(owner_id, year, month, reference)
        balance = service.balance(owner_id, result)

    if as_json:
        payload = to_dict(result)
        payload["balance"] = balance
        click.echo(json.dumps(payload, indent=2))
    else:
        click.echo(format_month(result, year, month, balance=balance))
