"""Configuration management for duofin.

This module centralizes the tunable constants of the aggregation engine and
their environment variable overrides.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Mapping, Optional

from duofin.domain.errors import ConfigError
from duofin.domain.keywords import DEFAULT_KEYWORDS, KeywordTable, build_keyword_table

logger = logging.getLogger(__name__)

ENV_PREFIX = "DUOFIN_"
KEYWORDS_PATH_ENV = "DUOFIN_KEYWORDS_PATH"
DATA_PATH_ENV = "DUOFIN_DATA_PATH"


@dataclass(frozen=True)
class EngineSettings:
    """Tunable thresholds shared by the domain services."""

    trailing_months: int = 3
    near_limit_ratio: Decimal = Decimal("0.80")
    excellent_ratio: Decimal = Decimal("0.80")
    max_suggestions: int = 3
    history_sample_size: int = 5
    keyword_step: float = 0.3
    keyword_cap: float = 0.9
    history_step: float = 0.2
    history_cap: float = 0.8
    upcoming_days: int = 15
    budget_history_months: int = 6
    card_near_limit_percent: Decimal = Decimal("80")


DEFAULT_SETTINGS = EngineSettings()


def _convert(name: str, raw: str, target: type):
    try:
        if target is int:
            value = int(raw)
            if value < 0:
                raise ValueError("must not be negative")
            return value
        if target is float:
            return float(raw)
        return Decimal(raw)
    except (ValueError, InvalidOperation) as e:
        raise ConfigError(f"Invalid value for {ENV_PREFIX}{name.upper()}: '{raw}' ({e})") from e


def load_settings(environ: Optional[Mapping[str, str]] = None) -> EngineSettings:
    """Build settings from ``DUOFIN_*`` environment variables.

    Args:
        environ: Mapping to read from (defaults to ``os.environ``)

    Returns:
        EngineSettings with overrides applied

    Raises:
        ConfigError: If an override cannot be converted
    """
    environ = os.environ if environ is None else environ
    overrides = {}
    for setting in fields(EngineSettings):
        raw = environ.get(f"{ENV_PREFIX}{setting.name.upper()}")
        if raw is None or raw == "":
            continue
        default = getattr(DEFAULT_SETTINGS, setting.name)
        overrides[setting.name] = _convert(setting.name, raw, type(default))

    if overrides:
        logger.debug("Engine settings overrides: %s", overrides)
    return EngineSettings(**overrides)


def load_keyword_table(environ: Optional[Mapping[str, str]] = None) -> KeywordTable:
    """Return the keyword table, replaced by a JSON file when configured.

    The file must contain an object mapping canonical category names to lists
    of keywords.

    Raises:
        ConfigError: If the file cannot be read or has the wrong shape
    """
    environ = os.environ if environ is None else environ
    path = environ.get(KEYWORDS_PATH_ENV)
    if not path:
        return DEFAULT_KEYWORDS

    try:
        with Path(path).open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not load keyword table from '{path}': {e}") from e

    if not isinstance(data, dict) or not all(
        isinstance(words, list) and all(isinstance(w, str) for w in words)
        for words in data.values()
    ):
        raise ConfigError(
            f"Keyword table '{path}' must map category names to lists of strings"
        )

    logger.info("Loaded keyword table with %d categories from %s", len(data), path)
    return build_keyword_table(data)
