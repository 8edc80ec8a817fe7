"""Pydantic models for config validation.

Opt-in schema validation for ``Config.config_data``.  Call
``Config.validated()`` to obtain a typed, validated ``WalkwageConfig``
instance.  Dict-based access keeps working unchanged.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from .exceptions import ConfigurationError
from .utils.logging import normalize_level


class PathsConfig(BaseModel):
    """File-system paths used by the application."""

    data_dir: Path
    log_dir: Path | None = None

    @field_validator("data_dir", "log_dir", mode="before")
    @classmethod
    def _expand_user(cls, v: Any) -> Any:
        if v == "":
            return None
        if isinstance(v, str):
            return Path(v).expanduser()
        if isinstance(v, Path):
            return v.expanduser()
        return v


class LoggingConfig(BaseModel):
    """Log level; ``to_file`` adds a file sink (``file``, else ``<log_dir>/walkwage.log``)."""

    level: str = "WARNING"
    to_file: bool = False
    file: str = ""

    @field_validator("level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        try:
            return normalize_level(v)
        except ConfigurationError as e:
            raise ValueError(str(e)) from e


class RulesConfig(BaseModel):
    """Earnings and penalty rules applied per day."""

    super_minutes: int = 60
    standard_minutes: int = 45
    super_earnings: int = 150
    standard_earnings: int = 100
    penalty: int = -200
    max_off_days_per_week: int = 2

    @model_validator(mode="after")
    def _consistent_thresholds(self) -> RulesConfig:
        if self.standard_minutes < 0 or self.super_minutes < self.standard_minutes:
            raise ValueError(
                f"thresholds must satisfy 0 <= standard_minutes ({self.standard_minutes}) "
                f"<= super_minutes ({self.super_minutes})"
            )
        if self.penalty > 0:
            raise ValueError(f"penalty must not be positive, got {self.penalty}")
        if not 0 <= self.max_off_days_per_week <= 7:
            raise ValueError(f"max_off_days_per_week must be between 0 and 7, got {self.max_off_days_per_week}")
        return self


class UserConfig(BaseModel):
    """Which stored user the CLI acts for; empty means the first user."""

    owner_id: str = ""


class WalkwageConfig(BaseModel):
    """Root configuration model.

    Uses ``extra="allow"`` so consumers can bolt on custom sections
    without touching this schema.
    """

    model_config = ConfigDict(extra="allow")

    paths: PathsConfig = PathsConfig(data_dir=Path("~/.walkwage-data"))
    logging: LoggingConfig = LoggingConfig()
    rules: RulesConfig = RulesConfig()
    user: UserConfig = UserConfig()
