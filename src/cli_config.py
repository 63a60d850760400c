"""User configuration file loading.

Looks up the config path (--config, then CREATE_PACKAGE_CONFIG, then the
default locations), parses YAML or JSON and validates it against a Draft-07
schema. Values here sit between CLI flags and built-in defaults.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

import yaml
from jsonschema import Draft7Validator

from constants import Constants

logger = logging.getLogger(__name__)

CONFIG_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "scope": {"type": "string"},
        "author": {"type": "string"},
        "license": {"type": "string", "minLength": 1},
        "package_manager": {"enum": Constants.SUPPORTED_PACKAGE_MANAGERS},
        "prettier": {"type": "boolean"},
        "eslint": {"type": "boolean"},
        "typescript": {"type": "boolean"},
        "dual": {"type": "boolean"},
    },
    "additionalProperties": False,
}


class ConfigError(ValueError):
    """Raised when a config file cannot be read or fails validation."""


def find_config_path(explicit: Optional[str] = None) -> Optional[str]:
    """Return the config file to load, or None when there is none.

    An explicit path (CLI or environment) must exist; default locations are
    only used when present.
    """
    candidate = explicit or os.environ.get(Constants.ENV_CONFIG)
    if candidate:
        path = os.path.expanduser(candidate)
        if not os.path.isfile(path):
            raise ConfigError(f"Config file not found: {candidate}")
        return path
    for default in Constants.DEFAULT_CONFIG_PATHS:
        path = os.path.expanduser(default)
        if os.path.isfile(path):
            return path
    return None


def validate_config(data: Dict[str, Any]) -> None:
    """Validate config strictly and raise on the first error."""
    validator = Draft7Validator(CONFIG_SCHEMA)
    errs = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errs:
        first = errs[0]
        path = "/".join([str(p) for p in first.path])
        raise ConfigError(f"Invalid config at '{path}': {first.message}")


def load_config(path: Optional[str]) -> Dict[str, Any]:
    """Parse and validate the config file at ``path``.

    Returns:
        dict: The config mapping; empty when ``path`` is None or the file is empty.

    Raises:
        ConfigError: On unreadable, unparsable or invalid content.
    """
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as fh:
            if path.lower().endswith(".json"):
                data = json.load(fh)
            else:
                data = yaml.safe_load(fh)
    except OSError as exc:
        raise ConfigError(f"Cannot read config {path}: {exc}") from exc
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot parse config {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain a mapping")
    validate_config(data)
    logger.info("Loaded config from %s", path)
    return data
