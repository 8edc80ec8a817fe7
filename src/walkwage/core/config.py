"""
Layered settings for walkwage.

Sources, lowest precedence first:
    1. Built-in defaults (the standard earning rules, ~/.walkwage-data)
    2. A YAML or JSON config file
    3. WALKWAGE_SECTION__KEY environment variables
    4. An explicit ``data_dir`` argument (the CLI's --data-dir)

Usage:
    config = Config(config_file="~/.walkwage/config.yaml")
    config.get("rules.penalty")     # dot-notation, raw value
    config.validated().rules        # typed RulesConfig
    config.log_file                 # None unless logging.to_file is set
"""

from __future__ import annotations

import json
import os
from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import ValidationError

from .exceptions import ConfigurationError

if TYPE_CHECKING:
    from .config_schema import WalkwageConfig

ENV_PREFIX = "WALKWAGE_"
DEFAULT_DATA_DIR = os.path.join("~", ".walkwage-data")
LOG_FILENAME = "walkwage.log"


def default_settings() -> dict[str, Any]:
    """Settings used when nothing else is configured."""
    return {
        "paths": {"data_dir": DEFAULT_DATA_DIR, "log_dir": ""},
        "logging": {"level": "WARNING", "to_file": False, "file": ""},
        "rules": {
            "super_minutes": 60,
            "standard_minutes": 45,
            "super_earnings": 150,
            "standard_earnings": 100,
            "penalty": -200,
            "max_off_days_per_week": 2,
        },
        "user": {"owner_id": ""},
    }


def _merge(base: dict[str, Any], overlay: Mapping[str, Any]) -> None:
    for key, value in overlay.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value


def _read_file(path: str) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f) if path.lower().endswith(".json") else yaml.safe_load(f)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot parse config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must hold a mapping, got {type(data).__name__}")
    return data


def _env_overrides(environ: Mapping[str, str], prefix: str) -> Iterator[tuple[list[str], str]]:
    """Yield (key path, value) for every PREFIX_A__B variable."""
    for name, value in sorted(environ.items()):
        if prefix and name.startswith(prefix) and len(name) > len(prefix):
            yield name[len(prefix) :].lower().split("__"), value


class Config:
    """Merged walkwage settings with dot-notation access."""

    def __init__(
        self,
        config_file: str | None = None,
        data_dir: str | None = None,
        env_prefix: str = ENV_PREFIX,
        environ: Mapping[str, str] | None = None,
    ):
        """
        Args:
            config_file: YAML or JSON file; a missing file is skipped.
            data_dir: Overrides ``paths.data_dir`` from every other source.
            env_prefix: Prefix for environment overrides ("" disables them).
            environ: Environment to read (defaults to ``os.environ``).
        """
        self.config_file = os.path.expanduser(config_file) if config_file else None
        self.config_data = default_settings()

        if self.config_file and os.path.exists(self.config_file):
            _merge(self.config_data, _read_file(self.config_file))

        for parts, value in _env_overrides(os.environ if environ is None else environ, env_prefix):
            node = self.config_data
            for part in parts[:-1]:
                if not isinstance(node.get(part), dict):
                    node[part] = {}
                node = node[part]
            node[parts[-1]] = value

        if data_dir:
            self.config_data["paths"]["data_dir"] = data_dir

    def get(self, key_path: str, default: Any = None) -> Any:
        """Value at a dot-notation path such as ``rules.penalty``, or ``default``."""
        node: Any = self.config_data
        for part in key_path.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    @property
    def data_dir(self) -> str:
        return os.path.expanduser(str(self.get("paths.data_dir") or DEFAULT_DATA_DIR))

    @property
    def log_dir(self) -> str:
        configured = self.get("paths.log_dir")
        return os.path.expanduser(str(configured)) if configured else os.path.join(self.data_dir, "logs")

    @property
    def log_file(self) -> str | None:
        """Explicit ``logging.file``, else ``<log_dir>/walkwage.log``; None when file logging is off."""
        if not self.validated().logging.to_file:
            return None
        explicit = self.get("logging.file")
        return os.path.expanduser(str(explicit)) if explicit else os.path.join(self.log_dir, LOG_FILENAME)

    def validated(self) -> WalkwageConfig:
        """Typed view of the settings; bad values raise ConfigurationError."""
        from .config_schema import WalkwageConfig

        try:
            return WalkwageConfig.model_validate(self.config_data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
