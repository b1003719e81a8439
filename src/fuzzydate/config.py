"""Configuration for the fuzzydate command line.

Settings come from a YAML file:

    format: "%Y-%m-%dT%H:%M:%S%:z"
    input_timezone: America/New_York
    output_timezone: UTC

Lookup order: explicit path, $FUZZYDATE_CONFIG, ~/.config/fuzzydate/config.yaml.
"""

import logging
import os
from datetime import tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from dateutil import tz
from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import ConfigError

logger = logging.getLogger(__name__)

ENV_VAR = "FUZZYDATE_CONFIG"
DEFAULT_PATH = Path.home() / ".config" / "fuzzydate" / "config.yaml"
DEFAULT_FORMAT = "%Y-%m-%dT%H:%M:%S%:z"


class Config(BaseModel):
    model_config = ConfigDict(extra="forbid")

    format: str = DEFAULT_FORMAT
    input_timezone: str | None = None  # None = system zone
    output_timezone: str | None = None  # None = system zone


def find_config(path: str | Path | None = None) -> Path | None:
    """Locate the configuration file, if any."""
    if path is not None:
        return Path(path)
    if env := os.environ.get(ENV_VAR):
        return Path(env)
    if DEFAULT_PATH.exists():
        return DEFAULT_PATH
    return None


def load_config(path: str | Path | None = None) -> Config:
    """Load configuration, falling back to defaults when no file is found."""
    filepath = find_config(path)
    if filepath is None:
        return Config()

    try:
        with open(filepath) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"cannot read config {filepath}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {filepath}: {e}") from e

    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise ConfigError(f"{filepath}: expected a mapping, got {type(data).__name__}")

    try:
        config = Config(**data)
    except ValidationError as e:
        raise ConfigError(f"{filepath}: {e}") from e

    logger.debug("loaded config from %s", filepath)
    return config


def get_zone(name: str | None) -> tzinfo:
    """Look up an IANA zone by name; None means the system zone."""
    if name is None:
        return tz.tzlocal()
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"unknown time zone: {name!r}") from e
