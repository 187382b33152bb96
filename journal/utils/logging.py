"""Logging setup shared by the API process and the CLI."""

import logging

from journal.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(level: str | None = None):
    """Configure the root logger once from settings.log_level."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
    )
    # uvicorn access lines are noise next to journal logs
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
