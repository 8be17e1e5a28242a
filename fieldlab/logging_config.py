"""
Logging Configuration
Routes the ``fieldlab`` logger to stderr (and optionally a file) for the CLI.
Stdout is left to the written output paths.
"""
import logging
import sys
from typing import Optional, Union

PACKAGE_LOGGER = "fieldlab"

CONSOLE_FORMAT = "%(levelname)-7s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

# Marks handlers installed here so a second call replaces only those.
_HANDLER_TAG = "_fieldlab_handler"


def resolve_level(level: Union[int, str]) -> int:
    """Accept ``logging.DEBUG`` or a name such as ``"debug"``."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def setup_logging(level: Union[int, str] = logging.WARNING, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Level number or name; applies to the logger and every handler.
        log_file: Optional path; gets timestamped records, truncated per run.

    Returns:
        The ``fieldlab`` logger.
    """
    numeric = resolve_level(level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric)

    for handler in [h for h in logger.handlers if getattr(h, _HANDLER_TAG, False)]:
        logger.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler(sys.stderr)]
    handlers[0].setFormatter(logging.Formatter(CONSOLE_FORMAT))
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(numeric)
        setattr(handler, _HANDLER_TAG, True)
        logger.addHandler(handler)

    logger.debug("logging at %s%s", logging.getLevelName(numeric),
                 f", also to {log_file}" if log_file else "")
    return logger
