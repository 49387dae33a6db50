"""
Logging configuration for tmpl_funcs.

Usage in library modules:
    from tmpl_funcs.fn_logging import get_logger
    logger = get_logger(__name__)

The root logger name is "tmpl_funcs". The library never installs handlers on
import; the embedding application calls configure_logging() if it wants output.

Records carrying a BindError (logged with `extra={"bind_error": err}`) are
suffixed with the error's category and the builtin it came from, so failed
template calls can be grepped by either.
"""

import logging
import sys

_LOGGER_NAME = "tmpl_funcs"


def get_logger(name: str = None) -> logging.Logger:
    """
    Return a child logger under the tmpl_funcs hierarchy.

    Args:
        name: Module __name__, or None for the root tmpl_funcs logger.

    Returns:
        logging.Logger instance
    """
    if name is None or name == _LOGGER_NAME:
        return logging.getLogger(_LOGGER_NAME)
    # "tmpl_funcs.lib.runtime.binding" -> "tmpl_funcs.binding"
    short = name.rsplit(".", 1)[-1]
    return logging.getLogger(f"{_LOGGER_NAME}.{short}")


class BindErrorFormatter(logging.Formatter):
    """`LEVEL name: message`, plus `[category=... function=...]` for bind failures."""

    def format(self, record: logging.LogRecord) -> str:
        line = f"{record.levelname:<5} {record.name}: {record.getMessage()}"

        err = getattr(record, "bind_error", None)
        if err is not None:
            line += f" [category={err.category.value} function={err.function or '-'}]"

        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"
        return line


def configure_logging(level: str = None) -> logging.Logger:
    """
    Configure the tmpl_funcs logger hierarchy.

    Args:
        level: Level name ("DEBUG", "INFO", ...). Defaults to settings.LOG_LEVEL.

    Returns:
        The root tmpl_funcs logger.
    """
    if level is None:
        from tmpl_funcs.config import settings
        level = settings.LOG_LEVEL

    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    root_logger = logging.getLogger(_LOGGER_NAME)
    root_logger.setLevel(numeric_level)

    # Avoid duplicate handlers when called multiple times
    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(BindErrorFormatter())
        root_logger.addHandler(handler)
        root_logger.propagate = False

    for handler in root_logger.handlers:
        handler.setLevel(numeric_level)

    root_logger.debug(f"[CONFIG] Logging initialized: level={level.upper()}")
    return root_logger
