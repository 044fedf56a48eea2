"""Pytest configuration and shared fixtures."""

import pytest
import yaml
from pathlib import Path

from nmlegis.parser import ActionStringParser
from unit.fixtures.action_factory import ActionStringFactory, HistoryFactory
from unit.fixtures.date_helpers import SessionDates


@pytest.fixture
def action_factory():
    """Provide ActionStringFactory instance."""
    return ActionStringFactory()


@pytest.fixture
def history_factory():
    """Provide HistoryFactory instance."""
    return HistoryFactory()


@pytest.fixture
def session_dates():
    """Provide SessionDates instance."""
    return SessionDates()


@pytest.fixture
def parser():
    """Parser with the default rules."""
    return ActionStringParser()


@pytest.fixture
def real_bills():
    """Load real bill action strings from YAML."""
    yaml_path = Path(__file__).parent / "fixtures" / "real_bills.yaml"
    if yaml_path.exists():
        with open(yaml_path) as f:
            return yaml.safe_load(f)
    return {}


@pytest.fixture
def write_config(tmp_path):
    """Write a config.yaml into a temp dir and return its path."""
    def _write_config(text: str) -> str:
        path = tmp_path / "config.yaml"
        path.write_text(text, encoding="utf-8")
        return str(path)
    return _write_config
