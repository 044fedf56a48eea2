"""Configuration interface for the NM Legislature history tools."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any

from yaml import safe_load  # type: ignore

DEFAULT_SESSION_START = date(2026, 1, 21)


class Config:
    """Provides an interface and safe defaults for config.yaml values."""

    def __init__(self, config_path: str):
        with open(config_path, "r", encoding="utf-8") as f:
            self.config: dict[str, Any] = safe_load(f) or {}

    class Session:
        """Legislative session configuration."""

        def __init__(self, config: dict[str, Any]) -> None:
            self.session = config.get("session") or {}

        @property
        def name(self) -> str:
            """Display name of the session."""
            return str(self.session.get("name", "2026 Regular Session"))

        @property
        def start_date(self) -> date:
            """Legislative day 1 of the session."""
            value = self.session.get("start_date", DEFAULT_SESSION_START)
            if isinstance(value, datetime):
                return value.date()
            if isinstance(value, date):
                return value
            return date.fromisoformat(str(value))

        @property
        def default_chamber(self) -> str:
            """Origin chamber assumed when a bill name doesn't give one."""
            chamber = str(self.session.get("default_chamber", "H")).upper()
            return chamber if chamber in ("H", "S") else "H"

    @property
    def session(self) -> Config.Session:
        """Session configuration."""
        return Config.Session(self.config)

    class Parser:
        """Action-string parser configuration."""

        def __init__(self, config: dict[str, Any]) -> None:
            self.parser = config.get("parser") or {}

        @property
        def warn_on_unknown_tokens(self) -> bool:
            """Whether unrecognized tokens are logged at WARNING."""
            return bool(self.parser.get("warn_on_unknown_tokens", False))

    @property
    def parser(self) -> Config.Parser:
        """Parser configuration."""
        return Config.Parser(self.config)

    class Logging:
        """Logging configuration."""

        def __init__(self, config: dict[str, Any]) -> None:
            self.logging = config.get("logging") or {}

        @property
        def level(self) -> int:
            """The root log level."""
            name = str(self.logging.get("level", "INFO")).upper()
            level = logging.getLevelName(name)
            return level if isinstance(level, int) else logging.INFO

        @property
        def format(self) -> str:
            """The log record format."""
            return str(self.logging.get(
                "format",
                "%(asctime)s [%(threadName)-12s] %(levelname)-8s %(message)s",
            ))

        @property
        def datefmt(self) -> str:
            """The timestamp format."""
            return str(self.logging.get("datefmt", "%H:%M:%S"))

    @property
    def logging(self) -> Config.Logging:
        """Logging configuration."""
        return Config.Logging(self.config)
