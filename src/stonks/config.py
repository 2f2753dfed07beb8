from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from stonks.errors import ConfigLoadError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config.json"
DEFAULT_TRANSACTIONS_FILE = "transactions.csv"


@dataclass(frozen=True)
class Config:
    """Settings for one run: which transactions export to read."""

    transactions_file: str = DEFAULT_TRANSACTIONS_FILE


def default_config() -> Config:
    return Config()


def load_config(path: str | Path = DEFAULT_CONFIG_FILE) -> Config:
    """Overlay a JSON config file on the defaults.

    Schema:
        {"transactionsFile": "path/to/transactions.csv"}

    Unknown keys are ignored. Raises ConfigLoadError if the file cannot be
    read or is not a JSON object; callers fall back to default_config().
    """
    try:
        with open(path, encoding="utf-8") as fp:
            data = json.load(fp)
    except OSError as e:
        raise ConfigLoadError(f"Cannot read config {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigLoadError(f"Invalid JSON in config {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigLoadError(
            f"Config {path} must contain a JSON object, got {type(data).__name__}"
        )

    transactions_file = data.get("transactionsFile")
    if transactions_file is not None and not isinstance(transactions_file, str):
        raise ConfigLoadError(f"'transactionsFile' in {path} must be a string")
    if not transactions_file or not transactions_file.strip():
        logger.debug("No transactionsFile in %s; using %s", path, DEFAULT_TRANSACTIONS_FILE)
        return default_config()
    return Config(transactions_file=transactions_file.strip())
