"""Value types shared by the NuGet config formatter and its collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, NamedTuple, Optional, Protocol, Tuple


@dataclass(frozen=True)
class Registry:
    """A named package feed used as a NuGet package source."""

    name: str
    url: str
    source_mapped_package_patterns: Optional[Tuple[str, ...]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Registry":
        """Build a Registry from a configuration mapping (camelCase keys)."""
        patterns = data.get("sourceMappedPackagePatterns")
        return cls(
            name=str(data["name"]),
            url=str(data["url"]),
            source_mapped_package_patterns=tuple(str(p) for p in patterns) if patterns else None,
        )


@dataclass(frozen=True)
class Credential:
    """Username/password pair resolved for a registry; either may be missing."""

    username: Optional[str] = None
    password: Optional[str] = None

    def is_empty(self) -> bool:
        return not self.username and not self.password


class ParsedRegistryUrl(NamedTuple):
    feed_url: str
    protocol_version: str


class CredentialResolver(Protocol):
    """Lookup used by the formatter to find credentials for a registry URL."""

    def find(self, host_type: str, url: str) -> Credential:
        ...
