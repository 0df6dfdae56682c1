### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Custom Logger Setup -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

# Standard Imports
import logging
from datetime import datetime
from pathlib import Path


class CustomFormatter(logging.Formatter):
    """Formatter producing: HH:MM:SS AM/PM - name - LEVEL: message"""

    def format(self, record):
        timestamp = datetime.fromtimestamp(record.created).strftime("%I:%M:%S %p")
        formatted_msg = f"{timestamp} - {record.name} - {record.levelname}: {record.getMessage()}"

        if record.exc_info:
            formatted_msg += "\n" + self.formatException(record.exc_info)

        return formatted_msg


def _default_options() -> tuple[int, bool]:
    """Level and file toggle from application settings"""
    from casedesk.config import get_api_settings

    settings = get_api_settings()
    return getattr(logging, settings.log_level.upper(), logging.INFO), settings.log_to_file


def setup_logger(
    name: str,
    level: int | None = None,
    log_to_file: bool | None = None,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Set up a custom logger for CaseDesk

    Args:
        name: Logger name (typically __name__)
        level: Logging level (default: CASEDESK_LOG_LEVEL)
        log_to_file: Whether to log to file (default: CASEDESK_LOG_TO_FILE)
        log_to_console: Whether to log to console (default: True)

    Returns:
        Configured logger instance

    Example:
        logger = setup_logger(__name__)
        logger.info("Complaint 12 submitted")
    """
    logger = logging.getLogger(name)

    # Prevent duplicate handlers if logger already exists
    if logger.handlers:
        return logger

    if level is None or log_to_file is None:
        default_level, default_to_file = _default_options()
        level = default_level if level is None else level
        log_to_file = default_to_file if log_to_file is None else log_to_file

    logger.setLevel(level)
    formatter = CustomFormatter()

    if log_to_file:
        logs_dir = Path("logs")
        logs_dir.mkdir(exist_ok=True)

        log_filename = f"casedesk_{datetime.now().strftime('%Y-%m-%d')}.log"
        file_handler = logging.FileHandler(logs_dir / log_filename, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get an existing logger or create a new one with default settings

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return setup_logger(name)
