"""NuGet config formatter: render registries as a nuget.config XML document.

The document has up to three sections under ``<configuration>``:
- packageSources: one ``<add>`` per registry, always present
- packageSourceCredentials: only when at least one registry resolves credentials
- packageSourceMapping: only when at least one registry declares patterns
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from typing import Iterable, List, Optional
from urllib.parse import urlsplit, urlunsplit

import hostrules
from constants import Constants, HostTypes
from common.logging_utils import extra_context, is_debug_enabled, safe_url

from .types import CredentialResolver, ParsedRegistryUrl, Registry

logger = logging.getLogger(__name__)

_PROTOCOL_VERSION_RE = re.compile(r"protocolVersion=(?P<version>\d+)")
_NAME_CHAR_RE = re.compile(r"[A-Za-z0-9_-]")
_NAME_START_RE = re.compile(r"[A-Za-z_]")
# Characters outside the XML 1.0 Char production
_XML_ILLEGAL_RE = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def _xml_value(field: str, value: str) -> str:
    """Return ``value`` unchanged, or raise if it cannot be written as XML."""
    if _XML_ILLEGAL_RE.search(value):
        raise ValueError(f"{field} contains characters not allowed in XML")
    return value


def parse_registry_url(url: str) -> ParsedRegistryUrl:
    """Split a configured registry URL into feed URL and protocol version.

    A ``#protocolVersion=N`` fragment is removed from the feed URL and wins
    over the path-based default. An empty path becomes ``/``. Without the
    fragment, feeds whose path ends in ``/`` are protocol 2, anything else
    (e.g. ``.../index.json``) is protocol 3.

    Raises:
        ValueError: If ``url`` cannot be parsed.
    """
    parts = urlsplit(url)
    fragment = parts.fragment
    protocol_version: Optional[str] = None

    match = _PROTOCOL_VERSION_RE.search(fragment)
    if match:
        protocol_version = match.group("version")
        fragment = ""

    path = parts.path or "/"
    feed_url = urlunsplit((parts.scheme, parts.netloc, path, parts.query, fragment))

    if protocol_version is None:
        if path.endswith("/"):
            protocol_version = Constants.PROTOCOL_VERSION_LEGACY
        else:
            protocol_version = Constants.PROTOCOL_VERSION_V3

    return ParsedRegistryUrl(feed_url, protocol_version)


def escape_name(name: str) -> str:
    """Turn a registry name into a valid XML element name.

    Characters outside ``[A-Za-z0-9_-]`` are written as ``__xHHHH__`` with
    the lower-case hex code point. A leading character that may not start
    an XML name (digit or ``-``) is escaped the same way.

    ``_`` is kept verbatim, so a name that already contains an escape
    sequence (``a__x0020__b``) collides with the name it encodes (``a b``);
    ``registries_from_config`` rejects such pairs.

    Raises:
        ValueError: If ``name`` is empty.
    """
    if not name:
        raise ValueError("Registry name must not be empty")
    escaped: List[str] = []
    for index, char in enumerate(name):
        allowed = _NAME_START_RE if index == 0 else _NAME_CHAR_RE
        if allowed.fullmatch(char):
            escaped.append(char)
        else:
            escaped.append(f"__x{ord(char):04x}__")
    return "".join(escaped)


def _package_sources(registries: Iterable[Registry]) -> List[ET.Element]:
    entries: List[ET.Element] = []
    for registry in registries:
        if not registry.name:
            raise ValueError("Registry name must not be empty")
        feed_url, protocol_version = parse_registry_url(registry.url)
        entries.append(ET.Element("add", {
            "key": _xml_value("Registry name", registry.name),
            "value": _xml_value("Registry URL", feed_url),
            "protocolVersion": protocol_version,
        }))
    return entries


def _package_source_credentials(
    registries: Iterable[Registry], resolver: CredentialResolver
) -> List[ET.Element]:
    entries: List[ET.Element] = []
    for registry in registries:
        credential = resolver.find(HostTypes.NUGET.value, registry.url)
        if credential.is_empty():
            continue

        if is_debug_enabled(logger):
            logger.debug("Resolved registry credentials", extra=extra_context(
                event="decision", component="config_formatter", action="resolve_credentials",
                target=safe_url(registry.url), registry=registry.name,
                has_username=bool(credential.username), has_password=bool(credential.password),
            ))

        element = ET.Element(escape_name(registry.name))
        if credential.username:
            ET.SubElement(element, "add", {
                "key": Constants.USERNAME_KEY,
                "value": _xml_value(f"Username for {registry.name}", credential.username),
            })
        if credential.password:
            ET.SubElement(element, "add", {
                "key": Constants.PASSWORD_KEY,
                "value": _xml_value(f"Password for {registry.name}", credential.password),
            })
        entries.append(element)
    return entries


def _package_source_mapping(registries: Iterable[Registry]) -> List[ET.Element]:
    entries: List[ET.Element] = []
    for registry in registries:
        if not registry.source_mapped_package_patterns:
            continue
        element = ET.Element("packageSource", {"key": registry.name})
        for pattern in registry.source_mapped_package_patterns:
            ET.SubElement(element, "package", {"pattern": _xml_value("Package pattern", pattern)})
        entries.append(element)
    return entries


def _section(tag: str, children: List[ET.Element]) -> ET.Element:
    section = ET.Element(tag)
    section.extend(children)
    return section


def create_config_xml(
    registries: Iterable[Registry], resolver: Optional[CredentialResolver] = None
) -> str:
    """Render ``registries`` as a nuget.config document.

    Args:
        registries: Package sources, emitted in the given order.
        resolver: Credential lookup; defaults to the process-wide host rules.

    Returns:
        The XML document, including the XML declaration.

    Raises:
        ValueError: If a registry URL cannot be parsed.
    """
    registries = list(registries)
    if resolver is None:
        resolver = hostrules.default_rules()

    if is_debug_enabled(logger):
        logger.debug("Formatting nuget.config", extra=extra_context(
            event="function_entry", component="config_formatter", action="create_config_xml",
            count=len(registries), package_manager="nuget"
        ))

    root = ET.Element("configuration")
    root.append(_section("packageSources", _package_sources(registries)))

    credentials = _package_source_credentials(registries, resolver)
    if credentials:
        root.append(_section("packageSourceCredentials", credentials))

    mappings = _package_source_mapping(registries)
    if mappings:
        root.append(_section("packageSourceMapping", mappings))

    ET.indent(root, space=Constants.XML_INDENT)
    xml = ET.tostring(root, encoding="unicode")

    if is_debug_enabled(logger):
        logger.debug("Formatted nuget.config", extra=extra_context(
            event="function_exit", component="config_formatter", action="create_config_xml",
            credentials=len(credentials), mappings=len(mappings), package_manager="nuget"
        ))

    return f"{Constants.XML_DECLARATION}\n{xml}\n"
