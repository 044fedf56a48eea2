"""Test fixtures and enums for unit testing."""

from enum import Enum


class Chamber(str, Enum):
    """Chamber letters used in action strings."""

    HOUSE = "H"
    SENATE = "S"


class Committee(str, Enum):
    """Common committee codes for testing."""

    HOUSE_APPROPRIATIONS = "HAFC"
    HOUSE_JUDICIARY = "HJC"
    SENATE_RULES = "SRC"
    SENATE_FINANCE = "SFC"
