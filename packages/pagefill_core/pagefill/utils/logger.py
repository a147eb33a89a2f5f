"""
Logging setup for pagefill command line runs.

Library modules only create module loggers; handlers are installed here,
by the host application or by the CLI.
"""

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def setup_logging(level: str = "INFO", use_rich: bool = True) -> logging.Logger:
    """
    Setup logging for the application.

    Args:
        level: Log level
        use_rich: Whether to use rich logging

    Returns:
        The configured root logger
    """
    if level.upper() not in _LEVELS:
        raise ValueError(f"Invalid log level: {level}")

    numeric_level = getattr(logging, level.upper())
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    if use_rich:
        # stderr keeps stdout free for JSON dumps
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            show_time=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))

    handler.setLevel(numeric_level)
    root_logger.addHandler(handler)
    return root_logger
