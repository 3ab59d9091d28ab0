"""Click integration and the declick developer CLI."""

from .app import ConsoleApplication
from .builder import CommandBuilder
from .logging import setup_logging

__all__ = ["CommandBuilder", "ConsoleApplication", "setup_logging"]
