"""Shared setup logic for CLI commands."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import click

from walkwage.core.config import Config
from walkwage.core.exceptions import WalkwageError

WALKWAGE_DIR = Path.home() / ".walkwage"
CONFIG_PATH = WALKWAGE_DIR / "config.yaml"


@contextmanager
def domain_errors() -> Iterator[None]:
    """Turn WalkwageError into a one-line click error (exit code 1)."""
    try:
        yield
    except WalkwageError as e:
        raise click.ClickException(str(e)) from e


def load_config(config_file: str | None = None, data_dir: str | None = None) -> Config:
    """Load config from ``config_file`` or ~/.walkwage/config.yaml; ``data_dir`` wins over both."""
    return Config(config_file=config_file or str(CONFIG_PATH), data_dir=data_dir)


def setup_cli_logging(config: Config, level: str | None = None) -> None:
    from walkwage.core.utils.logging import setup_logging

    setup_logging(level=level or config.validated().logging.level, log_file=config.log_file)


def create_service(config: Config):
    """Build a WalkService over the YAML stores in the configured data dir."""
    from walkwage.activity.models import RuleSet
    from walkwage.activity.service import WalkService
    from walkwage.activity.store import YamlUserStore, YamlWalkLogStore

    with domain_errors():
        settings = config.validated()

    return WalkService(
        walk_store=YamlWalkLogStore(config.data_dir),
        user_store=YamlUserStore(config.data_dir),
        rules=RuleSet.from_config(settings.rules),
    )


def resolve_owner(config: Config, service, owner: str | None, *, must_exist: bool = False) -> str:
    """Owner id from --owner, then config ``user.owner_id``, then the default user.

    With ``must_exist`` an unknown id raises StoreError instead of creating that user.
    """
    owner_id = owner or config.get("user.owner_id", "") or ""
    if must_exist:
        return service.require_user(owner_id).id
    return service.current_user(owner_id).id
