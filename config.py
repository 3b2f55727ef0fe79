from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_DATA_FILE = "regdata.csv"

_LOG_FORMATS = ("plain", "json")


class ConfigError(ValueError):
    """Invalid CHECKREG_* environment setting."""
    pass


@dataclass(frozen=True)
class AppConfig:
    default_path: str = DEFAULT_DATA_FILE
    delimiter: str = ","
    log_level: int = logging.INFO
    log_format: str = "plain"
    tooltip_ms: int = 2000
    title: str = "Devcon Registration Check"
    geometry: str = "800x450"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> AppConfig:
        env = os.environ if environ is None else environ

        delimiter = env.get("CHECKREG_DELIMITER", ",")
        if len(delimiter) != 1:
            raise ConfigError(f"CHECKREG_DELIMITER must be a single character, got {delimiter!r}.")

        level_name = env.get("CHECKREG_LOG_LEVEL", "INFO").upper()
        log_level = logging.getLevelName(level_name)
        if not isinstance(log_level, int):
            raise ConfigError(f"Unknown log level {level_name!r}.")

        log_format = env.get("CHECKREG_LOG_FORMAT", "plain").lower()
        if log_format not in _LOG_FORMATS:
            raise ConfigError(f"CHECKREG_LOG_FORMAT must be one of {', '.join(_LOG_FORMATS)}.")

        raw_tooltip = env.get("CHECKREG_TOOLTIP_MS", "2000")
        try:
            tooltip_ms = int(raw_tooltip)
        except ValueError:
            raise ConfigError(f"CHECKREG_TOOLTIP_MS must be an integer, got {raw_tooltip!r}.") from None

        return cls(
            default_path=env.get("CHECKREG_DATA_FILE", DEFAULT_DATA_FILE),
            delimiter=delimiter,
            log_level=log_level,
            log_format=log_format,
            tooltip_ms=tooltip_ms,
        )
