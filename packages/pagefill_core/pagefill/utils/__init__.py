"""
Utils module: exception hierarchy and logging setup.
"""

from .exceptions import (
    DocumentError,
    ConfigurationError,
    MalformedBlockError,
    ParsingError,
    RenderError,
    AssemblyError,
    handle_exception,
)
from .logger import setup_logging

__all__ = [
    "DocumentError",
    "ConfigurationError",
    "MalformedBlockError",
    "ParsingError",
    "RenderError",
    "AssemblyError",
    "handle_exception",
    "setup_logging",
]
