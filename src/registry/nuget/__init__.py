"""NuGet registry package.

This package renders NuGet package-manager configuration:
- types.py: Registry, Credential and the CredentialResolver interface
- config_formatter.py: nuget.config XML generation (sources, credentials, source mapping)
- registries.py: configured registries and the nuget.org default
"""

# Public API re-exports
from .types import Credential, CredentialResolver, ParsedRegistryUrl, Registry  # noqa: F401
from .config_formatter import create_config_xml, escape_name, parse_registry_url  # noqa: F401
from .registries import DEFAULT_REGISTRY, get_default_registries, registries_from_config  # noqa: F401

__all__ = [
    # Types
    "Credential",
    "CredentialResolver",
    "ParsedRegistryUrl",
    "Registry",
    # Formatting
    "create_config_xml",
    "escape_name",
    "parse_registry_url",
    # Registries
    "DEFAULT_REGISTRY",
    "get_default_registries",
    "registries_from_config",
]
