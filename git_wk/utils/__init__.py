"""Utility functions for git-wk.

This package provides utility modules:
- logging: Logging configuration and logger creation
"""

from .logging import setup_logging, get_logger, log_file_path

__all__ = [
    "setup_logging",
    "get_logger",
    "log_file_path",
]
