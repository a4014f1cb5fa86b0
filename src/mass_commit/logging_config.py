"""
Logging configuration for Mass Commit.

Diagnostics go to stderr through rich; user-facing progress is printed
separately on the CLI console.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "mass_commit"


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """
    Configure the mass_commit logger with a rich handler.

    Args:
        verbose: Enable DEBUG level logging (git command traces)
        quiet: Suppress all but ERROR level logging

    Returns:
        Configured logger instance for mass_commit
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        markup=False,
        show_time=verbose,
        show_path=verbose,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    logger = logging.getLogger(ROOT_LOGGER)
    # Repeated CLI invocations in one process (tests) must not stack handlers
    for existing in list(logger.handlers):
        if isinstance(existing, RichHandler):
            logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the mass_commit namespace.

    Args:
        name: Module name (e.g., 'mass_commit.core.generator')
              If None, returns the root mass_commit logger
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
