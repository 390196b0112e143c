"""Logging configuration for schema_emitter.

All modules obtain their logger through :func:`get_logger` so the package
shares one namespace and one handler setup.
"""

import logging
import os
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAMESPACE = "schema_emitter"
DEFAULT_LOG_LEVEL = os.getenv("SCHEMA_EMITTER_LOG_LEVEL", "WARNING")


def setup_logging(
    level: str | int | None = None,
    log_file: str | Path | None = None,
) -> logging.Logger:
    """Configure the package logger.

    Args:
        level: Log level name or number. Defaults to SCHEMA_EMITTER_LOG_LEVEL.
        log_file: Optional file to receive plain-text log records as well.

    Returns:
        The configured package logger.
    """
    if level is None:
        level = DEFAULT_LOG_LEVEL
    if isinstance(level, str):
        level_name = level.upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level_name}")

    root = logging.getLogger(LOGGER_NAMESPACE)
    root.setLevel(level)

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    console_handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-8s %(name)s | %(message)s")
        )
        root.addHandler(file_handler)

    root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    """Return a logger inside the package namespace."""
    if not name.startswith(LOGGER_NAMESPACE):
        name = f"{LOGGER_NAMESPACE}.{name}"
    return logging.getLogger(name)
