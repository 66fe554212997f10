"""Application-wide logging helpers.

Modules call ``get_logger(__name__)``, which never touches handlers. Entry
points (the CLI commands and the API factory) call ``configure_logging`` once
settings are loaded; it installs a rich console handler on the root logger and
replaces any earlier one so handlers are never duplicated.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_INITIALISED = False


def configure_logging(level: int | str = logging.WARNING, force: bool = False) -> None:
    """Configure the root logger with a rich console handler.

    Args:
        level: Logging level (name or number).
        force: Replace an existing configuration, e.g. once config is loaded.
    """
    global _LOGGER_INITIALISED
    if _LOGGER_INITIALISED and not force:
        return

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if isinstance(handler, RichHandler):
            root_logger.removeHandler(handler)

    handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=False)
    handler.setFormatter(logging.Formatter("%(name)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"))
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    _LOGGER_INITIALISED = True


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module logger. Output depends on how the entry point configured logging."""
    return logging.getLogger(name)
