"""Runtime configuration for the layout engine."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _bool_from_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    return default


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class LayoutConfig:
    """Configuration for layout computation.

    Attributes:
        padding_days: Days added on both sides of the events when deriving
            a visible window.
        validate_output: If True, the engine validates every layout it
            produces and raises on invariant violations.
        count_weekend_start: If True, a weekend start day consumes one unit
            of a business-day length.
        log_level: Default logging level for the CLI.
    """

    padding_days: int = 7
    validate_output: bool = False
    count_weekend_start: bool = False
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "LayoutConfig":
        """Build a config from ``CALGRID_*`` environment variables.

        A ``.env`` file is loaded first if present. Values that cannot be
        parsed fall back to the defaults.
        """
        load_dotenv(dotenv_path)
        defaults = cls()
        return cls(
            padding_days=max(0, _int_from_env("CALGRID_PADDING_DAYS", defaults.padding_days)),
            validate_output=_bool_from_env(
                "CALGRID_VALIDATE_OUTPUT", defaults.validate_output
            ),
            count_weekend_start=_bool_from_env(
                "CALGRID_COUNT_WEEKEND_START", defaults.count_weekend_start
            ),
            log_level=os.getenv("CALGRID_LOG_LEVEL", defaults.log_level),
        )
