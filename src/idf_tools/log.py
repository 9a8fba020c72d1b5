"""
Logging configuration for idf-tools.

Every module logs through ``logging.getLogger(__name__)`` under the
``idf_tools`` logger, which is silent until a handler is attached.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .config import Config

_logger = logging.getLogger("idf_tools")
_logger.addHandler(logging.NullHandler())  # Default: no output

DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def enable_verbose(level: str = "INFO", format: Optional[str] = None) -> None:
    """Send idf-tools log records to stderr.

    Args:
        level: Logging level - "DEBUG", "INFO", "WARNING", "ERROR"
        format: Optional custom format string

    Example:
        enable_verbose("DEBUG")
        doc = decode(text)  # logs each decoded section
        disable_verbose()
    """
    _logger.setLevel(getattr(logging, level.upper()))

    for handler in _logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            _logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(getattr(logging, level.upper()))
    handler.setFormatter(logging.Formatter(format or DEFAULT_FORMAT))
    _logger.addHandler(handler)


def disable_verbose() -> None:
    """Remove console output and go back to warnings only."""
    _logger.setLevel(logging.WARNING)
    for handler in _logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            _logger.removeHandler(handler)


def configure_from(config: Config) -> None:
    """Apply the ``[defaults]`` verbose/quiet settings."""
    if config.defaults.quiet:
        enable_verbose("ERROR")
    elif config.defaults.verbose:
        enable_verbose("DEBUG")
    else:
        disable_verbose()
