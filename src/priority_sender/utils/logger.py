# src/priority_sender/utils/logger.py

import logging
from typing import Dict, Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_loggers: Dict[str, logging.Logger] = {}


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """
    Returns a named logger, creating it on first use.

    Handlers are not attached here; the calling application configures the
    root logger (console via `configure_console_logging`, file via
    `setup_file_logging`).
    """
    if name in _loggers:
        return _loggers[name]

    logger = logging.getLogger(name)
    logger.setLevel(level)
    _loggers[name] = logger
    return logger


def configure_console_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    # Named loggers were created at INFO; follow the requested level.
    for logger in _loggers.values():
        logger.setLevel(level)


def setup_file_logging(filename: str = "priority_sender.log", level: int = logging.INFO) -> Optional[logging.Handler]:
    """Attaches a file handler to the root logger. Returns the handler, or None if one for this file exists."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename.endswith(filename):
            return None

    file_handler = logging.FileHandler(filename)
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    root_logger.addHandler(file_handler)
    return file_handler
