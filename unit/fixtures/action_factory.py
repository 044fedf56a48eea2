"""Factories for creating test action strings and history items."""

from typing import Optional

from unit.fixtures import Chamber, Committee


class ActionStringFactory:
    """Builds NM Legislature action strings."""

    @staticmethod
    def day(number: int, *tokens: str) -> str:
        """One ``[N]`` segment, e.g. ``[3] HAFC-DP``."""
        return f"[{number}] " + "-".join(tokens)

    @staticmethod
    def passed(chamber: Chamber = Chamber.HOUSE, yeas: int = 54, nays: int = 2) -> str:
        return f"PASSED/{chamber.value} ({yeas}-{nays})"

    @staticmethod
    def failed(chamber: Chamber = Chamber.HOUSE, yeas: int = 20, nays: int = 45) -> str:
        return f"FAILED/{chamber.value} ({yeas}-{nays})"

    @staticmethod
    def signed(date: Optional[str] = "Mar.4", chapter: Optional[str] = "9") -> str:
        token = "SGND"
        if date:
            token += f"({date})"
        if chapter:
            token += f"Ch.{chapter}"
        return token

    @staticmethod
    def house_passage(
        committee: Committee = Committee.HOUSE_APPROPRIATIONS,
    ) -> str:
        """Prefiled, referred, reported and passed in the House."""
        return ActionStringFactory.day(
            1, "HPREF", committee.value, "DP", ActionStringFactory.passed()
        )

    @staticmethod
    def full_passage() -> str:
        """Passed both chambers over three legislative days."""
        return " ".join([
            ActionStringFactory.day(1, "HPREF", "HAFC"),
            ActionStringFactory.day(3, "HAFC", "DP", ActionStringFactory.passed()),
            ActionStringFactory.day(
                5, "SFC", "DP", ActionStringFactory.passed(Chamber.SENATE, 35, 3)
            ),
        ])


class HistoryFactory:
    """Builds LegiScan-shaped history items."""

    @staticmethod
    def create_item(
        action_date: str,
        action: str,
        chamber: str = "H",
        importance: int = 0,
        sequence: Optional[int] = None,
    ) -> dict:
        item = {
            "date": action_date,
            "action": action,
            "chamber": chamber,
            "chamber_id": 1 if chamber == "H" else 2,
            "importance": importance,
        }
        if sequence is not None:
            item["sequence"] = sequence
        return item

    @staticmethod
    def create_history(*actions: tuple[str, str, str]) -> list[dict]:
        """Items from (date, action, chamber) tuples, numbered in order."""
        return [
            HistoryFactory.create_item(d, a, c, sequence=i)
            for i, (d, a, c) in enumerate(actions, start=1)
        ]
