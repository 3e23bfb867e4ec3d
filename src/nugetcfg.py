"""nugetcfg - Generate a nuget.config from configured registries and host rules.

    Returns:
        int: Exit code
"""
import logging
import os
import sys

from constants import ExitCodes, Constants
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from args import parse_args
from cli_config import apply_logging_overrides, get_config_path
from config import ConfigError, load_config, parse_config
import hostrules
from registry.nuget import create_config_xml, registries_from_config


def _setup_logging(args):
    """Configure logging based on CLI arguments."""
    apply_logging_overrides(args)
    configure_logging()
    if getattr(args, "QUIET", False):
        logging.getLogger().setLevel(logging.ERROR)

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s"
        ))
        logging.getLogger().addHandler(file_handler)
        logging.info("Logging to file: %s", log_file)


def read_config(config_path):
    """Load the configuration, tolerating a missing default config file.

    Raises:
        ConfigError: If the configuration cannot be loaded or is invalid.
    """
    if config_path == Constants.DEFAULT_CONFIG_FILE and not os.path.isfile(config_path):
        logging.warning("No %s found, generating defaults.", Constants.DEFAULT_CONFIG_FILE)
        return parse_config(None)
    return load_config(config_path)


def build_config_xml(config):
    """Render the nuget.config document for a loaded configuration.

    Host rules replace the contents of the process-wide store.

    Raises:
        ConfigError: On duplicate registry names.
        ValueError: If a registry URL cannot be parsed.
    """
    store = hostrules.default_rules()
    store.clear()
    hostrules.load_host_rules(config.get("hostRules"), store)
    registries = registries_from_config(config.get("registries"))
    return create_config_xml(registries, store)


def write_output(xml, path):
    """Write the document to ``path``, or to stdout when no path is given."""
    if not path:
        sys.stdout.write(xml)
        return
    try:
        with open(path, "w", encoding="utf-8") as file:
            file.write(xml)
        logging.info("nuget.config written to %s", path)
    except OSError as e:
        logging.error("Couldn't write %s: %s", path, e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def main(argv=None):
    """Main function of the program."""
    logger = logging.getLogger(__name__)

    args = parse_args(argv)
    _setup_logging(args)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    config_path = get_config_path(args)
    try:
        config = read_config(config_path)
        xml = build_config_xml(config)
    except ConfigError as e:
        logging.error("Configuration error: %s", e)
        sys.exit(ExitCodes.CONFIG_ERROR.value)
    except ValueError as e:
        logging.error("Invalid registry URL: %s", e)
        sys.exit(ExitCodes.CONFIG_ERROR.value)

    write_output(xml, getattr(args, "OUTPUT", None))

    if is_debug_enabled(logger):
        logger.debug(
            "CLI finished",
            extra=extra_context(event="function_exit", component="cli", action="main", outcome="success")
        )
    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
