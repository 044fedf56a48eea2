"""Bill status classification.

Two entry points live here:

- ``StatusTracker`` is the left-to-right state machine the parser drives
  while it walks an action string.
- ``get_current_bill_location`` and friends read a stored history array
  (either source format, already normalized) and describe where the bill
  is now.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable, Optional, Union

from nmlegis.codes import STATUS_CODES
from nmlegis.models import (
    ActionType,
    BillLocation,
    BillStatus,
    HistoryDisplayItem,
    ParsedBillActions,
    TERMINAL_STATUSES,
)

logger = logging.getLogger(__name__)

HistoryLike = Union[HistoryDisplayItem, dict]

# LegiScan progress codes: 1=Introduced, 2=Engrossed, 3=Enrolled,
# 4=Passed, 5=Vetoed, 6=Failed
_LEGISCAN_STATUS = {
    BillStatus.PREFILED: 1,
    BillStatus.IN_COMMITTEE: 1,
    BillStatus.PASSED_ONE: 2,
    BillStatus.PASSED_BOTH: 3,
    BillStatus.SIGNED: 4,
    BillStatus.VETOED: 5,
    BillStatus.FAILED: 6,
    BillStatus.TABLED: 6,
}

_COMMITTEE_ASSIGNMENT = re.compile(r"(?:sent to|referred to:?)\s+(.+)", re.I)


class StatusTracker:
    """State machine over ``BillStatus``.

    Starts at PREFILED. Terminal states (signed, vetoed, failed, tabled)
    are sticky: once reached, further transitions are ignored. Any other
    transition is allowed in any order, including going back to
    IN_COMMITTEE after passing one chamber.
    """

    def __init__(self) -> None:
        self.status = BillStatus.PREFILED
        self.passed_chambers: set[str] = set()

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def transition(self, new_status: BillStatus) -> bool:
        """Move to a new status unless already terminal.

        Returns:
            True if the status changed
        """
        if self.is_terminal:
            if new_status != self.status:
                logger.debug(
                    "Ignoring %s after terminal status %s",
                    new_status.value, self.status.value,
                )
            return False
        self.status = new_status
        return True

    def record_passage(self, chamber: Optional[str]) -> None:
        """Record that a chamber passed the bill.

        PASSED_BOTH needs passage in both the House and the Senate;
        repeated passage in one chamber stays PASSED_ONE.
        """
        if chamber:
            self.passed_chambers.add(chamber.upper())
        if {"H", "S"} <= self.passed_chambers:
            self.transition(BillStatus.PASSED_BOTH)
        else:
            self.transition(BillStatus.PASSED_ONE)


def legiscan_status_code(status: BillStatus) -> int:
    """Map a parsed status onto LegiScan's numeric progress code."""
    return _LEGISCAN_STATUS[status]


def legiscan_status_label(status: BillStatus) -> str:
    """Human label for a status, using LegiScan's wording."""
    return STATUS_CODES[legiscan_status_code(status)]["label"]


def summarize(parsed: ParsedBillActions) -> str:
    """Build a one-line summary of a parse result."""
    if not parsed.actions:
        return "No action recorded"
    parts: list[str] = []
    if parsed.legislative_day:
        parts.append(f"Day {parsed.legislative_day}")

    status = parsed.status
    if status == BillStatus.SIGNED:
        signed = _last_of(parsed, ActionType.SIGNED)
        parts.append(signed.description if signed else "Signed into law")
    elif status == BillStatus.VETOED:
        parts.append("Vetoed by Governor")
    elif status == BillStatus.FAILED:
        failed = _last_of(parsed, ActionType.FAILED)
        parts.append(failed.description if failed else "Failed")
    elif status == BillStatus.TABLED:
        parts.append("Tabled")
    elif status == BillStatus.PASSED_BOTH:
        parts.append("Passed both chambers - awaiting Governor")
    elif status == BillStatus.PASSED_ONE:
        passed = _last_of(parsed, ActionType.PASSED)
        parts.append(passed.description if passed else "Passed one chamber")
    elif parsed.current_committee and parsed.current_committee_name:
        parts.append(f"In {parsed.current_committee_name}")
    else:
        parts.append(parsed.actions[-1].description)

    if len(parsed.referrals) > 1:
        parts.append(f"Referrals: {', '.join(parsed.referral_names)}")
    return ". ".join(parts)


def _last_of(parsed: ParsedBillActions, action_type: ActionType):
    matches = parsed.get_actions_by_type(action_type)
    return matches[-1] if matches else None


def _field(item: HistoryLike, name: str, default: Any = None) -> Any:
    if isinstance(item, dict):
        return item.get(name, default)
    return getattr(item, name, default)


def _chronological(history: Iterable[HistoryLike]) -> list[HistoryLike]:
    """Sort by date ascending, then by sequence within a date."""
    return sorted(
        history,
        key=lambda item: (
            str(_field(item, "date", "") or ""),
            int(_field(item, "sequence", 0) or 0),
        ),
    )


def get_most_recent_action(
    history: Optional[list[HistoryLike]],
) -> Optional[HistoryLike]:
    """Get the latest history item by date, then sequence.

    Args:
        history: Stored history items (objects or dicts)

    Returns:
        The most recent item, or None for an empty history
    """
    if not history:
        return None
    return _chronological(history)[-1]


def get_current_committee_from_history(
    history: Optional[list[HistoryLike]],
) -> Optional[str]:
    """Get the last committee assigned before any passage or terminal action.

    Args:
        history: Stored history items (objects or dicts)

    Returns:
        Committee name as written in the history, or None
    """
    if not history:
        return None
    current: Optional[str] = None
    for item in _chronological(history):
        text = str(_field(item, "action", ""))
        lowered = text.lower()
        match = _COMMITTEE_ASSIGNMENT.match(text)
        if match:
            current = match.group(1).strip()
        if any(word in lowered for word in ("passed", "signed", "vetoed", "failed")):
            current = None
    return current


def get_current_bill_location(
    history: Optional[list[HistoryLike]], chamber: str
) -> BillLocation:
    """Describe where a bill is now, from its stored history.

    Args:
        history: Stored history items (objects or dicts)
        chamber: Originating chamber of the bill ("H" or "S")

    Returns:
        BillLocation with a human-readable location and a coarse status
    """
    if not history:
        return BillLocation(
            location="Waiting for first committee assignment",
            status="unknown",
        )

    ordered = _chronological(history)
    last = ordered[-1]
    last_action = _field(last, "action")
    last_date = _field(last, "date")

    current: Optional[str] = None
    passed_house = passed_senate = False
    signed = vetoed = failed = False

    for item in ordered:
        text = str(_field(item, "action", ""))
        lowered = text.lower()
        item_chamber = _field(item, "chamber") or chamber

        match = _COMMITTEE_ASSIGNMENT.match(text)
        if match:
            current = match.group(1).strip()

        if "passed house" in lowered or ("passed" in lowered and item_chamber == "H"):
            passed_house = True
            current = None
        if "passed senate" in lowered or ("passed" in lowered and item_chamber == "S"):
            passed_senate = True
            current = None

        if "signed" in lowered:
            signed = True
        if "veto" in lowered:
            vetoed = True
        if any(phrase in lowered for phrase in (
            "failed", "did not pass", "do not pass",
            "tabled indefinitely", "postponed indefinitely",
        )):
            failed = True

    def location(text: str, status: str, committee: Optional[str] = None) -> BillLocation:
        return BillLocation(
            location=text,
            status=status,
            committee=committee,
            last_action=last_action,
            last_date=last_date,
        )

    if signed:
        return location("Signed into law by the Governor", "signed")
    if vetoed:
        return location("Vetoed by the Governor", "vetoed")
    if failed:
        return location("Did not pass", "failed")
    if passed_house and passed_senate:
        return location("Passed both chambers, waiting for Governor", "passed_both")
    if passed_house:
        if current:
            return location(f"Passed the House, now in {current}", "passed_house", current)
        return location("Passed the House, heading to Senate", "passed_house")
    if passed_senate:
        if current:
            return location(f"Passed the Senate, now in {current}", "passed_senate", current)
        return location("Passed the Senate, heading to House", "passed_senate")
    if current:
        return location(f"Currently in {current}", "in_committee", current)
    return location("Waiting for committee assignment", "unknown")
