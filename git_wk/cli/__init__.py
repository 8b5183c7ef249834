"""Command-line interface for git-wk.

This package provides the CLI entry point, the command table and argument parsing.
"""

from .main import main
from .args import build_parser, parse_args
from .commands import build_command_table

__all__ = ["main", "build_parser", "parse_args", "build_command_table"]
