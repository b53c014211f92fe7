"""Utility functions for the application."""

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def log(message: str, indent: int = 0, top: int = 0, bottom: int = 0, err: bool = False) -> None:
    """
    Custom print function that supports indentation and padding.

    Args:
        message: The message to print.
        indent: Number of indentation units (2 spaces each).
        top: Number of empty lines to print before the message.
        bottom: Number of empty lines to print after the message.
        err: If True, writes to stderr instead of stdout.
    """
    stream: TextIO = sys.stderr if err else sys.stdout

    if top > 0:
        print("\n" * (top - 1), file=stream)

    prefix = "  " * indent
    output_message = f"{prefix}{message}"

    try:
        print(output_message, file=stream)
    except UnicodeEncodeError:
        # Fallback to ASCII representation if Unicode fails
        print(output_message.encode("ascii", errors="replace").decode("ascii"), file=stream)

    if bottom > 0:
        print("\n" * (bottom - 1), file=stream)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name."""
    return logging.getLogger(name)


def setup_logging(verbose: bool = False) -> None:
    """Send log records to stderr, at DEBUG level when verbose."""
    logging.basicConfig(format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger("opensub").setLevel(logging.DEBUG if verbose else logging.WARNING)
