"""Logging setup for command-line use.

The library itself only creates loggers; handlers are installed by the
application. The CLI calls :func:`configure_logging` once at startup.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str | int = "WARNING", console: Console | None = None) -> None:
    """Route the ``nixsearch`` logger hierarchy to a rich handler on stderr.

    Calling it again replaces the previously installed handler.

    Args:
        level: Logging level name or number.
        console: Console to write to (defaults to a stderr console).
    """
    logger = logging.getLogger("nixsearch")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    logger.propagate = False
