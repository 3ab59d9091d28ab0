"""Logging setup for the declick CLI."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    verbose: int = 0,
    debug: bool = False,
    log_file: Optional[Path] = None,
    log_level: str = "INFO",
) -> None:
    """
    Configure logging for the CLI.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, enable debug mode with file logging
        log_file: Custom log file path (optional)
        log_level: Log level for file logging (DEBUG/INFO/WARNING/ERROR)
    """
    # Determine console log level based on flags
    if debug or verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    file_level = logging.DEBUG if debug else getattr(logging, log_level.upper())

    if debug and not log_file:
        # Debug mode: log to current directory
        log_file = Path.cwd() / "declick-debug.log"

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(min(level, file_level) if log_file else level)

    # Command output goes to stdout, so log records go to stderr
    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    if log_file:
        # Create rotating file handler (keeps last 5 files, max 10MB each)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logger.info(
        f"Logging configured: level={logging.getLevelName(level)}, file={log_file or 'none'}"
    )
