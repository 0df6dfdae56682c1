"""
Utility module for CaseDesk API
"""

from .custom_logger import get_logger, setup_logger
from .dates import naive_utc

__all__ = [
    "get_logger",
    "naive_utc",
    "setup_logger",
]
