"""Logging configuration for git-wk

Log records go to stderr through Rich, next to the CLI's own error console.
With --debug they are also written to ~/.wk/wk.log.
"""
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from git_wk.constants import LOG_DIR_NAME, LOG_FILE_NAME

FILE_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
FILE_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def log_file_path() -> Path:
    """Location of the debug log file."""
    return Path.home() / LOG_DIR_NAME / LOG_FILE_NAME


def setup_logging(
    verbose: bool = False,
    debug: bool = False,
    console: Optional[Console] = None,
) -> None:
    """
    Configure logging for the application.

    Args:
        verbose: If True, show INFO level messages
        debug: If True, show DEBUG level messages and also write them to ~/.wk/wk.log
        console: Rich console for log output (defaults to a stderr console)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    if debug:
        log_file = log_file_path()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='w')  # Overwrite each run
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(fmt=FILE_LOG_FORMAT, datefmt=FILE_DATE_FORMAT))
        root_logger.addHandler(file_handler)

    # git output and paths may contain square brackets, so no markup
    console_handler = RichHandler(
        console=console or Console(stderr=True),
        level=level,
        show_time=debug,
        show_path=debug,
        markup=False,
        rich_tracebacks=debug,
    )
    console_handler.setFormatter(logging.Formatter('[%(name)s] %(message)s'))
    root_logger.addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified module.

    Args:
        name: Name of the module (typically __name__)

    Returns:
        Logger instance
    """
    # Strip the package prefix for cleaner log names
    if name.startswith('git_wk.'):
        name = name.replace('git_wk.', '', 1)
    if name.startswith('services.'):
        name = name.replace('services.', '', 1)

    return logging.getLogger(name)
