"""JSON Schema validation for the nugetcfg YAML configuration.

Wraps jsonschema Draft7 validation and reports the first error with the
path of the offending value.
"""

from __future__ import annotations

from typing import Any, Dict

from jsonschema import Draft7Validator


class SchemaError(ValueError):
    """Raised when data fails to validate against a provided schema."""


_NON_EMPTY_STRING = {"type": "string", "minLength": 1}
_OPTIONAL_STRING = {"type": ["string", "null"]}

CONFIG_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "registries": {
            "type": ["array", "null"],
            "items": {
                "type": "object",
                "properties": {
                    "name": _NON_EMPTY_STRING,
                    "url": _NON_EMPTY_STRING,
                    "sourceMappedPackagePatterns": {
                        "type": ["array", "null"],
                        "items": _NON_EMPTY_STRING,
                    },
                },
                "required": ["name", "url"],
                "additionalProperties": False,
            },
        },
        "hostRules": {
            "type": ["array", "null"],
            "items": {
                "type": "object",
                "properties": {
                    "hostType": _OPTIONAL_STRING,
                    "matchHost": _OPTIONAL_STRING,
                    "username": _OPTIONAL_STRING,
                    "password": _OPTIONAL_STRING,
                },
                "additionalProperties": False,
            },
        },
    },
    "additionalProperties": False,
}


def validate_config(data: Dict[str, Any], schema: Dict[str, Any] = CONFIG_SCHEMA) -> None:
    """Validate a configuration mapping strictly and raise on the first error.

    Args:
        data:   Parsed configuration.
        schema: Draft-07 JSON Schema dict.
    """
    validator = Draft7Validator(schema)
    errs = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    if errs:
        first = errs[0]
        path = "/".join([str(p) for p in first.path])
        msg = f"Invalid config at '{path}': {first.message}"
        raise SchemaError(msg)
