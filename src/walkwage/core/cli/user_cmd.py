"""walkwage user — show the current user."""

from __future__ import annotations

import click


@click.command()
@click.option("--owner", default=None, help="User id (defaults to the current user).")
@click.pass_obj
def user(config, owner: str | None) -> None:
    """Show the current user, creating one on first use."""
    from .common import create_service, domain_errors

    service = create_service(config)
    with domain_errors():
        profile = service.current_user(owner or config.get("user.owner_id", "") or "")
    click.echo(f"{profile.name} ({profile.id}) - opening balance {profile.balance:+,}")
