"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONFIG_ERROR = 2


class HostTypes(Enum):
    """Host types understood by the credential lookup.

    Args:
        Enum (string): Host types understood by the credential lookup.
    """

    NUGET = "nuget"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    DEFAULT_CONFIG_FILE = "nugetcfg.yml"
    ENV_CONFIG_FILE = "NUGETCFG_CONFIG"
    ENV_LOG_LEVEL = "NUGETCFG_LOG_LEVEL"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

    # nuget.config layout
    XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'
    XML_INDENT = "  "
    USERNAME_KEY = "Username"
    PASSWORD_KEY = "ClearTextPassword"

    # Feed defaults
    DEFAULT_REGISTRY_NAME = "nuget.org"
    DEFAULT_REGISTRY_URL = "https://api.nuget.org/v3/index.json#protocolVersion=3"
    PROTOCOL_VERSION_LEGACY = "2"
    PROTOCOL_VERSION_V3 = "3"
