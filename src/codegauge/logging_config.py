"""
Logging configuration for codegauge.

Log records go to stderr through rich, so they never mix with reports
written to stdout (``codegauge metrics --json`` is meant to be piped).
The terminal level follows ``MetricsConfig.verbosity``:

    quiet    ERROR
    normal   WARNING (parse failures, skipped duplication, fallback records)
    verbose  DEBUG (per-file metric summaries)

A log file, when given, always receives DEBUG records so a quiet CI run
still leaves a full trace behind.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .exceptions import InvalidConfigError

LOGGER_NAME = "codegauge"

VERBOSITY_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

FILE_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def level_for(verbosity: str) -> int:
    """Map a verbosity name to a logging level."""
    try:
        return VERBOSITY_LEVELS[verbosity]
    except KeyError:
        raise InvalidConfigError(
            "verbosity", verbosity, f"must be one of {', '.join(VERBOSITY_LEVELS)}"
        ) from None


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[str] = None,
    verbosity: Optional[str] = None,
) -> logging.Logger:
    """
    Configure logging with rich handler for colored output.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Suppress all but ERROR level logging
        log_file: Optional file path that receives every DEBUG record
        verbosity: "quiet", "normal" or "verbose"; takes precedence over
            the two flags (pass ``MetricsConfig.verbosity``)

    Returns:
        Configured logger instance for codegauge
    """
    if verbosity is None:
        verbosity = "quiet" if quiet else "verbose" if verbose else "normal"
    level = level_for(verbosity)
    show_detail = level <= logging.DEBUG

    # Messages quote source snippets and file names; brackets there are not markup
    console_handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=show_detail,
        markup=False,
        show_time=True,
        show_path=show_detail,
    )
    console_handler.setLevel(level)
    handlers: list[logging.Handler] = [console_handler]

    root_level = level
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        file_handler.setLevel(logging.DEBUG)
        handlers.append(file_handler)
        root_level = logging.DEBUG

    logging.basicConfig(
        level=root_level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(root_level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the ``codegauge`` namespace.

    Args:
        name: Module name (e.g., 'codegauge.metrics' or 'metrics')
              If None, returns the root codegauge logger

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger(LOGGER_NAME)

    if name != LOGGER_NAME and not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"

    return logging.getLogger(name)
