"""Logging setup for the server process"""

import logging
import logging.config
from os import environ

from yaml import safe_load

DEFAULT_FORMAT = "%(asctime)s   %(name)-32s %(levelname)-8s %(message)s"
LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _load_yaml(path: str) -> None:
    with open(path, "r") as f:
        logging.config.dictConfig(safe_load(f))


def configure_logging() -> None:
    """
    LOG_CONFIG points to a YAML dictConfig file and wins over everything else.
    Otherwise LOG_LEVEL, LOG_FORMAT and LOG_FILE shape a basic configuration.
    LOG_BROKER_LEVEL tunes the live update broker separately, its per-snapshot
    messages are noisy at DEBUG.
    """
    config_path = environ.get("LOG_CONFIG")
    if config_path:
        _load_yaml(config_path)
        return

    level = environ.get("LOG_LEVEL", "INFO").upper()
    if level not in LEVELS:
        raise ValueError(f"Invalid log level: {level}")
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    log_file = environ.get("LOG_FILE")
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=level,
        format=environ.get("LOG_FORMAT", DEFAULT_FORMAT),
        handlers=handlers,
    )

    broker_level = environ.get("LOG_BROKER_LEVEL", "").upper()
    if broker_level in LEVELS:
        logging.getLogger("cardledger.realtime").setLevel(broker_level)
