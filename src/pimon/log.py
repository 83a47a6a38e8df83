"""Logging setup for pimon."""

import logging

from textual.logging import TextualHandler

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure the root logger.

    Records go to the Textual devtools console instead of stdout so they
    never draw over the running UI.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    handler = TextualHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.basicConfig(level=level, handlers=[handler], force=True)
