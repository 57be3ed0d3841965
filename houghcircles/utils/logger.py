"""Logging utilities."""

import logging
import sys
from pathlib import Path
from datetime import datetime
from typing import Any, Dict, Optional, Union

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
DATE_FORMAT = '%H:%M:%S'


def _parse_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def setup_logger(name: str = 'houghcircles', log_level: Union[int, str] = logging.INFO,
                 log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure a logger writing to stdout and, optionally, a file.

    Calling it again for the same name replaces the handlers, so setup can
    be repeated per batch without duplicating lines. Detection modules log
    under 'houghcircles.*' and propagate to the logger configured here.

    Args:
        name: Logger name
        log_level: Level as a number or a case-insensitive name ("debug")
        log_file: Optional path; parent directories are created

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(_parse_level(log_level))
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def setup_from_config(config: Dict[str, Any], name: str = 'houghcircles',
                      session_dir: Optional[str] = None) -> logging.Logger:
    """Configure logging from the 'logging' section of a detector config.

    When the config names no log file and session_dir is given, a
    timestamped file in session_dir is used.
    """
    section = config.get('logging', {})
    log_file = section.get('log_file')
    if not log_file and session_dir:
        log_file = create_session_log_file(session_dir)
    return setup_logger(name, section.get('level', logging.INFO), log_file)


def create_session_log_file(log_dir: str = 'logs') -> str:
    """Return a timestamped log path in log_dir, creating the directory."""
    Path(log_dir).mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    return str(Path(log_dir) / f"houghcircles_{timestamp}.log")
