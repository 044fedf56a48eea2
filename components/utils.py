"""Utility functions for the command-line tools."""

import logging
from datetime import date

from components.interfaces import Config


def setup_logging(cfg: Config) -> None:
    """Configure root logging from the config's logging section."""
    logging.basicConfig(
        level=cfg.logging.level,
        format=cfg.logging.format,
        datefmt=cfg.logging.datefmt,
    )


def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD argument.

    Raises:
        ValueError: The value is not an ISO date
    """
    try:
        return date.fromisoformat(value.strip())
    except ValueError as e:
        raise ValueError(f"Invalid date {value!r}, expected YYYY-MM-DD") from e
