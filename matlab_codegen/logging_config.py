"""Logging setup for the transformation package.

Modules obtain their logger through :func:`get_logger`. Nothing is
configured on import; hosts call :func:`setup_logging` once to get
rich console output for naming and type diagnostics.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "matlab_codegen"

_handler: Optional[logging.Handler] = None


def get_logger(name: str) -> logging.Logger:
    """Return a logger for a module of this package."""
    return logging.getLogger(name)


def setup_logging(
    level: int | str = logging.WARNING,
    rich_output: bool = True,
    console: Optional[Console] = None,
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Log level name or number
        rich_output: Use a RichHandler instead of a plain stream handler
        console: Console for the RichHandler (defaults to stderr)

    Returns:
        The configured package logger
    """
    global _handler

    logger = logging.getLogger(PACKAGE_LOGGER)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")
    logger.setLevel(level)

    # Replace a handler installed by an earlier call
    if _handler is not None:
        logger.removeHandler(_handler)

    if rich_output:
        handler: logging.Handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    logger.addHandler(handler)
    _handler = handler
    logger.debug("Logging configured at level %s", logging.getLevelName(level))
    return logger
