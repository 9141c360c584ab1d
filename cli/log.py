"""
Logging setup for the CLI.

Library modules only create loggers; handlers are installed here.
"""

import logging

from rich.logging import RichHandler


def setup_logging(verbose: bool = False) -> None:
    """Route library log records through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=verbose)],
        force=True,
    )
