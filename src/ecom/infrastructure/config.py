"""Environment-based settings.

Values come from the process environment, with a ``.env`` file in the
working directory loaded first when present.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

# src/ecom/infrastructure/config.py -> repository root
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:

    data_dir: Path
    log_level: str = "WARNING"
    default_currency: str = "USD"


def load_settings() -> Settings:
    """Build Settings from ``ECOM_*`` environment variables."""
    load_dotenv(find_dotenv(usecwd=True))

    log_level = os.getenv("ECOM_LOG_LEVEL", "WARNING").upper()
    if log_level not in _LOG_LEVELS:
        raise ValueError(
            f"ECOM_LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got {log_level!r}"
        )

    currency = os.getenv("ECOM_DEFAULT_CURRENCY", "USD").upper()
    if len(currency) != 3 or not currency.isalpha():
        raise ValueError(f"ECOM_DEFAULT_CURRENCY must be a 3-letter code, got {currency!r}")

    data_dir = os.getenv("ECOM_DATA_DIR")
    return Settings(
        data_dir=Path(data_dir).expanduser() if data_dir else _DEFAULT_DATA_DIR,
        log_level=log_level,
        default_currency=currency,
    )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
