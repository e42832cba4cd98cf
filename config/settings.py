"""
Runtime settings loaded from config/journal.yaml.

The file is optional: missing keys fall back to the defaults in
config.constants. Set JOURNAL_CONFIG to point at another file.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import yaml

from config.constants import (
    DEFAULT_CURRENCY_SYMBOLS, DEFAULT_LOG_FORMAT, DEFAULT_LOG_LEVEL,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / 'journal.yaml'

# Default for `timezone` parameters: read settings.timezone when called.
# An explicit None selects the system local zone.
FROM_SETTINGS = object()


@dataclass
class Settings:
    timezone: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL
    log_format: str = DEFAULT_LOG_FORMAT
    currency_symbols: Dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_CURRENCY_SYMBOLS))

    def currency_symbol(self, currency: str) -> str:
        return self.currency_symbols.get(currency, currency)


def load_settings(path: Optional[str] = None) -> Settings:
    """Read settings from YAML. Explicit path > JOURNAL_CONFIG > bundled file."""
    config_path = Path(path or os.environ.get('JOURNAL_CONFIG') or DEFAULT_CONFIG_PATH)
    if not config_path.exists():
        if path:
            raise FileNotFoundError(f"Config file not found: {config_path}")
        logger.debug("No config at %s, using defaults", config_path)
        return Settings()

    with open(config_path, encoding='utf-8') as f:
        raw = yaml.safe_load(f) or {}

    symbols = dict(DEFAULT_CURRENCY_SYMBOLS)
    symbols.update(raw.get('currency_symbols') or {})
    return Settings(
        timezone=raw.get('timezone'),
        log_level=str(raw.get('log_level') or DEFAULT_LOG_LEVEL).upper(),
        log_format=raw.get('log_format') or DEFAULT_LOG_FORMAT,
        currency_symbols=symbols,
    )


settings = load_settings()


def resolve_timezone(timezone=FROM_SETTINGS) -> Optional[str]:
    """The zone a `timezone` argument stands for."""
    return settings.timezone if timezone is FROM_SETTINGS else timezone
