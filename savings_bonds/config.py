"""
Configuration loading for the savings bonds toolkit.

The configuration is a YAML file listing the bonds to look up:

    bonds:
      - denomination: 50
        serial: C123456789EE
        issue_date: 01/2000
        series: EE
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Union

import yaml

from .errors import (
    ConfigError,
    ConfigFileNotFound,
    ConfigIncomplete,
    ConfigIsNil,
    ConfigNotInt,
    ConfigNotString,
    NoBondsInConfig,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "./config.yaml"

_STRING_FIELDS = ("serial", "issue_date", "series")


@dataclass(frozen=True)
class BondRequest:
    """Identifies one bond to price."""

    denomination: int
    serial: str
    issue_date: str
    series: str


@dataclass
class Config:
    bonds: List[BondRequest] = field(default_factory=list)


def load_config(path: Union[str, Path] = DEFAULT_CONFIG_PATH) -> Config:
    """
    Read and validate a configuration file.

    Raises:
        ConfigFileNotFound: if the file is missing, unreadable or empty
        ConfigError: if the contents are not a valid bond list
    """
    config_path = Path(path)
    logger.info(f"Reading configuration from configFile={config_path}")

    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigFileNotFound(str(config_path)) from e

    if not text:
        raise ConfigFileNotFound(str(config_path))

    config = parse_config(text)
    logger.info(f"Loaded {len(config.bonds)} bonds")
    return config


def parse_config(text: str) -> Config:
    """Parse and validate YAML configuration text."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in configuration: {e}") from e

    if data is None:
        raise ConfigIsNil()
    if not isinstance(data, dict):
        raise ConfigError("configuration must be a mapping with a 'bonds' list")

    entries = data.get("bonds")
    if not entries:
        raise NoBondsInConfig()
    if not isinstance(entries, list):
        raise ConfigError("'bonds' must be a list")

    return Config(bonds=[_validate_bond(i, entry) for i, entry in enumerate(entries)])


def _validate_bond(index: int, entry) -> BondRequest:
    if not isinstance(entry, dict):
        raise ConfigError(f"bond {index}: expected a mapping, got {type(entry).__name__}")

    denomination = entry.get("denomination")
    if denomination is None:
        raise ConfigIncomplete(index, "denomination")
    # bool is an int subclass; "denomination: yes" is not a denomination
    if isinstance(denomination, bool) or not isinstance(denomination, int):
        raise ConfigNotInt(index)

    for name in _STRING_FIELDS:
        value = entry.get(name)
        if value is None:
            raise ConfigIncomplete(index, name)
        if not isinstance(value, str):
            raise ConfigNotString(index, name)

    if denomination <= 0:
        raise ConfigIncomplete(index, "denomination")
    for name in _STRING_FIELDS:
        if not entry[name]:
            raise ConfigIncomplete(index, name)

    return BondRequest(
        denomination=denomination,
        serial=entry["serial"],
        issue_date=entry["issue_date"],
        series=entry["series"],
    )
