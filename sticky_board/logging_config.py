"""
Logging configuration for the sticky board tools
"""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(debug=False):
    """Send log records to stderr through Rich"""
    level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                rich_tracebacks=True,
                show_path=debug,
            )
        ],
        force=True,
    )

    # pytesseract logs every subprocess call at DEBUG
    logging.getLogger("pytesseract").setLevel(logging.WARNING)

    return logging.getLogger("sticky_board")
