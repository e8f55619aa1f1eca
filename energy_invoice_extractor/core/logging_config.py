"""
Centralized logging configuration.

All records go to stderr so that JSON printed by the CLI on stdout stays
machine-readable; a UTF-8 log file can be added on top.
"""

import logging
import sys
from typing import List, Optional
from pathlib import Path

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def resolve_level(level: Optional[str]) -> int:
    """
    Map a level name such as "debug" or "WARNING" to its logging constant.

    Unknown names fall back to INFO.
    """
    resolved = logging.getLevelName((level or '').upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def build_handlers(log_file: Optional[str] = None) -> List[logging.Handler]:
    """
    Create the stderr handler and, if requested, a file handler.

    Args:
        log_file: Optional log file path; missing parent directories are created

    Returns:
        Handlers for the root logger
    """
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    return handlers


def setup_logging(
    level: str = 'INFO',
    format_string: Optional[str] = None,
    log_file: Optional[str] = None
) -> None:
    """
    Configure the root logger, replacing any earlier configuration.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Record format (DEFAULT_FORMAT if None)
        log_file: Optional log file path
    """
    log_level = resolve_level(level)

    logging.basicConfig(
        level=log_level,
        format=format_string or DEFAULT_FORMAT,
        handlers=build_handlers(log_file),
        force=True
    )

    if log_level == logging.INFO and (level or '').upper() != 'INFO':
        get_logger(__name__).warning(f"Unknown log level {level!r}, using INFO")


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def configure_from_settings(settings, log_file: Optional[str] = None) -> None:
    """
    Configure logging from LOG_LEVEL, LOG_FORMAT and LOG_FILE.

    Args:
        settings: Settings object
        log_file: Log file path overriding LOG_FILE
    """
    setup_logging(
        level=settings.log_level,
        format_string=settings.log_format,
        log_file=log_file or settings.log_file
    )
