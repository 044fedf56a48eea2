"""Date utilities for creating test scenarios."""

from datetime import date


class SessionDates:
    """Pre-configured session start dates for testing."""

    @staticmethod
    def session_2026() -> date:
        """2026 regular session, which opened on a Wednesday."""
        return date(2026, 1, 21)

    @staticmethod
    def monday_start() -> date:
        """A session opening on a Monday."""
        return date(2026, 1, 19)

    @staticmethod
    def friday_start() -> date:
        """A session opening on a Friday, so day 2 is the next Monday."""
        return date(2026, 1, 23)
