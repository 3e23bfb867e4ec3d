"""CLI configuration resolution.

Extracted from nugetcfg.py to keep the entrypoint slim. CLI arguments take
precedence over environment variables, which take precedence over defaults.
"""

from __future__ import annotations

import logging
import os

from constants import Constants

logger = logging.getLogger(__name__)


def get_config_path(args) -> str:
    """Return the configuration file path.

    Priority:
    1. CLI argument (--config)
    2. Environment variable NUGETCFG_CONFIG
    3. Constants.DEFAULT_CONFIG_FILE in the working directory
    """
    cli_path = getattr(args, "CONFIG", None)
    if cli_path:
        return cli_path

    env_path = os.environ.get(Constants.ENV_CONFIG_FILE)
    if env_path and env_path.strip():
        logger.debug("Using config path from %s", Constants.ENV_CONFIG_FILE)
        return env_path.strip()

    return Constants.DEFAULT_CONFIG_FILE


def apply_logging_overrides(args) -> None:
    """Hand the CLI --loglevel to configure_logging() via the environment."""
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
