"""YAML configuration loading.

The file holds two top-level lists, ``registries`` and ``hostRules``. Host
rule ``username``/``password`` values of the form ``${VAR}`` are read from
the environment so secrets need not live in the file.
"""

from __future__ import annotations

import logging
import os
import re
from typing import Any, Dict

import yaml

from config_schema import SchemaError, validate_config

logger = logging.getLogger(__name__)

_ENV_REF_RE = re.compile(r"^\$\{(?P<var>[A-Za-z_][A-Za-z0-9_]*)\}$")
_SECRET_FIELDS = ("username", "password")


class ConfigError(Exception):
    """Raised when the configuration cannot be loaded or is invalid."""


def _expand_env(value: Any, field: str) -> Any:
    if not isinstance(value, str):
        return value
    match = _ENV_REF_RE.match(value)
    if not match:
        return value
    var = match.group("var")
    if var not in os.environ:
        raise ConfigError(f"Environment variable {var} referenced by host rule {field} is not set")
    return os.environ[var]


def parse_config(data: Any) -> Dict[str, Any]:
    """Validate an already-parsed configuration document and expand secrets.

    Raises:
        ConfigError: If the document is not a mapping or fails validation.
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")
    try:
        validate_config(data)
    except SchemaError as e:
        raise ConfigError(str(e)) from e

    host_rules = []
    for rule in data.get("hostRules") or []:
        rule = dict(rule)
        for field in _SECRET_FIELDS:
            if field in rule:
                rule[field] = _expand_env(rule[field], field)
        host_rules.append(rule)

    return {
        "registries": list(data.get("registries") or []),
        "hostRules": host_rules,
    }


def load_config(path: str) -> Dict[str, Any]:
    """Load and validate the YAML configuration at ``path``.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    if not os.path.isfile(path):
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read config {path}: {e}") from e

    config = parse_config(data)
    logger.info(
        "Loaded config %s (%d registries, %d host rules).",
        path, len(config["registries"]), len(config["hostRules"]),
    )
    return config
