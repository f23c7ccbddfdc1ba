from .logger import configure_console_logging, get_logger, setup_file_logging

__all__ = [
    "configure_console_logging",
    "get_logger",
    "setup_file_logging",
]
