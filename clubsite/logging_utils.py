"""Logging utilities for the club site."""
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'


def setup_logging(
    name: str = "clubsite",
    log_level: str = "INFO",
    log_dir: Optional[str] = None,
    log_format: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the package logger with a console handler and, when `log_dir`
    is given, a date-specific log file.
    Args:
        name: Logger name (child modules log through `logging.getLogger(__name__)`)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory to store log files; console only when None
        log_format: Custom log format string
    Returns:
        Configured logger instance
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    logger.handlers = []
    formatter = logging.Formatter(log_format or DEFAULT_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime('%Y%m%d')
        log_file = Path(log_dir) / f"{name}_{timestamp}.log"
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        logger.addHandler(file_handler)
        logger.info(f"Logging initialized. Log file: {log_file}")
    return logger
