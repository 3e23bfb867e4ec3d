"""Configured NuGet registries and the nuget.org default."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from constants import Constants
from config import ConfigError

from .config_formatter import escape_name
from .types import Registry

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY = Registry(
    name=Constants.DEFAULT_REGISTRY_NAME,
    url=Constants.DEFAULT_REGISTRY_URL,
)


def get_default_registries() -> List[Registry]:
    """Registries used when nothing is configured."""
    return [DEFAULT_REGISTRY]


def registries_from_config(entries: Optional[Iterable[Dict[str, Any]]]) -> List[Registry]:
    """Convert configured registry mappings, keeping their order.

    Falls back to the default registries when ``entries`` is empty or missing.

    Raises:
        ConfigError: If two registries share a name, or their names escape
            to the same credentials element name.
    """
    registries = [Registry.from_dict(entry) for entry in entries or []]
    if not registries:
        logger.info("No registries configured, using %s.", Constants.DEFAULT_REGISTRY_NAME)
        return get_default_registries()

    seen = set()
    escaped: Dict[str, str] = {}
    for registry in registries:
        if registry.name in seen:
            raise ConfigError(f"Duplicate registry name: {registry.name}")
        seen.add(registry.name)

        element_name = escape_name(registry.name)
        if element_name in escaped:
            raise ConfigError(
                f"Registry names {escaped[element_name]!r} and {registry.name!r} "
                f"both escape to {element_name}"
            )
        escaped[element_name] = registry.name
    return registries
