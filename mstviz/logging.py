"""Centralized logging configuration for mstviz.

Every module obtains its logger through `get_logger(__name__)`, which hangs
it under the ``mstviz`` package logger. Only that package logger owns a
handler; module loggers stay at NOTSET and inherit its level. The CLI maps its
``--verbose``/``--quiet`` flags to a level with `level_for_flags`.

What each level shows:
    DEBUG: every edge verdict, ignored commands, playback start/pause.
    INFO: graph loads and CLI progress.
    WARNING and above: failures only.
"""

import logging
import sys
from typing import Optional

PACKAGE_LOGGER_NAME = "mstviz"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# True once the package logger carries its handler
_configured = False


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Attach the one handler the ``mstviz`` package logger uses.

    Calls after the first are ignored; `reset_logging` re-arms it.

    Args:
        level: Initial level for the package logger.
        format_string: Record format (default: ``DEFAULT_FORMAT``).
        handler: Destination handler (default: a stdout ``StreamHandler``).
    """
    global _configured

    if _configured:
        return

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(level)

    # Handlers left behind by an earlier configuration would duplicate output
    package_logger.handlers.clear()

    # CLI output goes to stdout next to the printed tables
    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    package_logger.addHandler(handler)

    # Records still reach the Python root logger, where pytest's caplog listens
    package_logger.propagate = True

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return the logger for an mstviz module.

    Args:
        name: Dotted module name, normally ``__name__``.

    Returns:
        Logger without handlers of its own, so the package level applies.
    """
    setup_root_logger()

    logger = logging.getLogger(name)
    # NOTSET defers to the package logger
    logger.setLevel(logging.NOTSET)
    return logger


def level_for_flags(verbose: bool = False, quiet: bool = False) -> int:
    """Translate CLI verbosity flags into a logging level.

    ``verbose`` wins when both are given.

    Returns:
        ``DEBUG`` for verbose, ``WARNING`` for quiet, otherwise ``INFO``.
    """
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def set_global_log_level(level: int) -> None:
    """Apply ``level`` to the package logger and its handler(s).

    Module loggers follow because they sit at NOTSET.

    Args:
        level: Logging level (e.g., ``logging.DEBUG``).
    """
    setup_root_logger()

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(level)
    # A handler keeps its own threshold; move it too so DEBUG actually prints
    for handler in package_logger.handlers:
        handler.setLevel(level)


def enable_debug_logging() -> None:
    """Show per-edge verdicts and ignored commands."""
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    """Go back to INFO."""
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Remove the package handler and forget that setup ran (for tests)."""
    global _configured
    _configured = False

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)


# Configure on import so module loggers work before any explicit setup
setup_root_logger()
