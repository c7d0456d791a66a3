"""Logging setup for the whole application."""

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> None:
    """Configure the root logger once, from the application entry point."""

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        # Replace the handlers uvicorn installs before the app starts.
        force=True,
    )
    logging.getLogger("sendgrid").setLevel(logging.WARNING)
    logging.getLogger(__name__).info("Logging inicializado con nivel %s", logging.getLevelName(level))


__all__ = ["LOG_FORMAT", "configure_logging"]
