"""Host rules: credentials matched by host type and registry URL.

A rule applies to a lookup when its host type is unset or equal to the
requested one, and its match host is unset, a URL prefix of the requested
URL, or the URL's hostname (or a parent domain of it). Matching rules are
merged from least to most specific so a URL-prefix rule overrides a domain
rule, which overrides a host-type-only rule. Within each kind, the longer
match host wins.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple
from urllib.parse import urlsplit

from common.logging_utils import extra_context, is_debug_enabled, safe_url
from registry.nuget.types import Credential

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HostRule:
    """A single credential rule."""

    host_type: Optional[str] = None
    match_host: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HostRule":
        """Build a rule from a configuration mapping (camelCase keys)."""
        return cls(
            host_type=data.get("hostType"),
            match_host=data.get("matchHost"),
            username=data.get("username"),
            password=data.get("password"),
        )

    def is_url_prefix(self) -> bool:
        return bool(self.match_host) and "://" in self.match_host

    def specificity(self) -> Tuple[int, int]:
        """Merge rank: 0 = no match host, 1 = hostname, 2 = URL prefix.

        Within a rank, longer match hosts are more specific.
        """
        if not self.match_host:
            return (0, 0)
        return (2 if self.is_url_prefix() else 1, len(self.match_host))

    def matches(self, host_type: str, url: str) -> bool:
        if self.host_type and self.host_type != host_type:
            return False
        if not self.match_host:
            return True
        if self.is_url_prefix():
            return url.startswith(self.match_host)
        hostname = _hostname(url)
        if not hostname:
            return False
        match_host = self.match_host.lower().lstrip(".")
        return hostname == match_host or hostname.endswith("." + match_host)


def _hostname(url: str) -> Optional[str]:
    try:
        return urlsplit(url).hostname
    except ValueError:
        return None


class HostRules:
    """In-memory store of host rules; lookups are pure and synchronous."""

    def __init__(self, rules: Optional[Iterable[HostRule]] = None):
        self._rules: List[HostRule] = list(rules or [])

    def __len__(self) -> int:
        return len(self._rules)

    def add(self, rule: HostRule) -> None:
        self._rules.append(rule)

    def clear(self) -> None:
        self._rules.clear()

    def find(self, host_type: str, url: str) -> Credential:
        """Return the merged credentials of every rule matching ``url``."""
        matching = [rule for rule in self._rules if rule.matches(host_type, url)]
        # stable sort: rules of equal specificity keep insertion order
        matching.sort(key=HostRule.specificity)

        username: Optional[str] = None
        password: Optional[str] = None
        for rule in matching:
            if rule.username is not None:
                username = rule.username
            if rule.password is not None:
                password = rule.password

        if is_debug_enabled(logger):
            logger.debug("Host rules lookup", extra=extra_context(
                event="decision", component="hostrules", action="find",
                target=safe_url(url), host_type=host_type, count=len(matching),
                outcome="hit" if matching else "miss"
            ))

        return Credential(username=username, password=password)


_DEFAULT_RULES = HostRules()


def default_rules() -> HostRules:
    """Return the process-wide host rules store."""
    return _DEFAULT_RULES


def load_host_rules(entries: Optional[Iterable[Dict[str, Any]]], store: Optional[HostRules] = None) -> HostRules:
    """Add configured rules to ``store`` (the default store when omitted)."""
    if store is None:
        store = default_rules()
    for entry in entries or []:
        store.add(HostRule.from_dict(entry))
    logger.info("Loaded %d host rule(s).", len(store))
    return store
