"""Process-wide settings for RXT, read from ``RXT_*`` environment variables.

Per-extraction settings (driver, url, query ...) live in ExtractorConfig;
this module only covers how RXT itself behaves.

Environment Variables:
    RXT_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL (default INFO)
    RXT_LOG_FORMAT: text or json (default text)
    RXT_STREAM_RESULTS: Ask the driver for a server-side, forward-only
        cursor so rows are fetched while iterating (default true)
    RXT_ECHO_SQL: Have SQLAlchemy log every statement it sends (default false)
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("text", "json")

_TRUE = frozenset({"1", "true", "yes", "on"})


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    return raw in _TRUE if raw else default


def _env_choice(name: str, default: str, choices: tuple[str, ...], upper: bool = False) -> str:
    raw = os.environ.get(name, default).strip()
    value = raw.upper() if upper else raw.lower()
    if value not in choices:
        raise ValueError(f"Invalid {name}: {raw!r} (expected one of {', '.join(choices)})")
    return value


@dataclass
class RXTConfig:
    """Settings snapshot taken from the environment when created.

    Usage:
        from rxt.core.config import config

        engine = create_engine(url, echo=config.echo_sql)
    """

    log_level: str = field(
        default_factory=lambda: _env_choice("RXT_LOG_LEVEL", "INFO", LOG_LEVELS, upper=True)
    )
    log_format: str = field(
        default_factory=lambda: _env_choice("RXT_LOG_FORMAT", "text", LOG_FORMATS)
    )
    stream_results: bool = field(default_factory=lambda: _env_flag("RXT_STREAM_RESULTS", True))
    echo_sql: bool = field(default_factory=lambda: _env_flag("RXT_ECHO_SQL", False))

    def __post_init__(self):
        # Explicit constructor arguments bypass the environment checks
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Invalid RXT_LOG_LEVEL: {self.log_level!r}")
        if self.log_format not in LOG_FORMATS:
            raise ValueError(f"Invalid RXT_LOG_FORMAT: {self.log_format!r}")

    def as_dict(self) -> dict:
        return asdict(self)


def load_config() -> RXTConfig:
    """Take a fresh snapshot of the environment."""
    return RXTConfig()


# Read once at import; call load_config() after changing the environment
config = load_config()
