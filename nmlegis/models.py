"""Core data models for the action-code engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional


class ActionType(str, Enum):
    """Enumeration of all parsed action types."""

    PREFILED = "prefiled"
    REFERRED = "referred"
    COMMITTEE_ACTION = "committee_action"
    FLOOR_ACTION = "floor_action"
    PASSED = "passed"
    FAILED = "failed"
    SIGNED = "signed"
    VETOED = "vetoed"
    TABLED = "tabled"
    OTHER = "other"


class BillStatus(str, Enum):
    """Bill status derived from the parsed action sequence."""

    PREFILED = "prefiled"
    IN_COMMITTEE = "in_committee"
    PASSED_ONE = "passed_one"
    PASSED_BOTH = "passed_both"
    SIGNED = "signed"
    VETOED = "vetoed"
    FAILED = "failed"
    TABLED = "tabled"


TERMINAL_STATUSES = {
    BillStatus.SIGNED,
    BillStatus.VETOED,
    BillStatus.FAILED,
    BillStatus.TABLED,
}

IMPORTANT_ACTION_TYPES = {
    ActionType.PASSED,
    ActionType.SIGNED,
    ActionType.VETOED,
    ActionType.FAILED,
}

CHAMBER_NAMES = {"H": "House", "S": "Senate"}
CHAMBER_IDS = {"H": 1, "S": 2}


class SegmentType(str, Enum):
    """Kinds of display segment."""

    ACTION = "action"
    COMMITTEE = "committee"
    VOTE = "vote"
    DAY = "day"
    TEXT = "text"
    REFERRAL = "referral"


class HistoryFormat(str, Enum):
    """Source format of a stored bill history."""

    LEGISCAN = "legiscan"
    NMLEGIS = "nmlegis"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ActionToken:
    """A single hyphen-delimited unit of an action string."""

    raw: str

    @property
    def upper(self) -> str:
        return self.raw.upper()

    def __str__(self) -> str:
        return self.raw


@dataclass
class ParsedAction:
    """One classified step in a bill's life.

    Created from exactly one action token. Unrecognized tokens are kept
    as ``OTHER`` with the raw text as their description.
    """

    type: ActionType
    code: str  # Original raw token
    description: str  # Human text
    committee: Optional[str] = None
    committee_name: Optional[str] = None
    vote: Optional[str] = None  # "yea-nay"
    date: Optional[str] = None  # Best-effort text, e.g. "Mar.4"
    chapter: Optional[str] = None
    chamber: Optional[str] = None  # "H" or "S" when the token names one

    def __str__(self) -> str:
        return f"[{self.type.value}] {self.description}"

    def to_dict(self) -> dict[str, Any]:
        """Serialize, dropping unset optional fields."""
        data: dict[str, Any] = {
            "type": self.type.value,
            "code": self.code,
            "description": self.description,
        }
        for key in ("committee", "committee_name", "vote", "date", "chapter", "chamber"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


@dataclass
class ParsedBillActions:
    """Full parse result for one action string."""

    raw: str
    legislative_day: Optional[int] = None
    current_committee: Optional[str] = None
    current_committee_name: Optional[str] = None
    referrals: list[str] = field(default_factory=list)
    referral_names: list[str] = field(default_factory=list)
    actions: list[ParsedAction] = field(default_factory=list)
    summary: str = ""
    status: BillStatus = BillStatus.PREFILED

    def __len__(self) -> int:
        return len(self.actions)

    def __iter__(self):
        return iter(self.actions)

    def get_actions_by_type(self, *action_type: ActionType) -> list[ParsedAction]:
        """Get all actions of the given types, in parse order."""
        return [a for a in self.actions if a.type in action_type]

    def get_unknown_actions(self) -> list[ParsedAction]:
        """Get ``OTHER`` actions whose description is just the raw token."""
        return [
            a for a in self.actions
            if a.type == ActionType.OTHER and a.description == a.code
        ]

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def to_dict(self) -> dict[str, Any]:
        return {
            "raw": self.raw,
            "legislative_day": self.legislative_day,
            "current_committee": self.current_committee,
            "current_committee_name": self.current_committee_name,
            "referrals": list(self.referrals),
            "referral_names": list(self.referral_names),
            "actions": [a.to_dict() for a in self.actions],
            "summary": self.summary,
            "status": self.status.value,
        }


@dataclass
class HistoryDisplayItem:
    """One unit of bill history, the persisted form.

    Field names match the LegiScan history shape and must stay stable;
    the UI and chat-context builders key off them.
    """

    date: str  # ISO calendar date
    action: str  # Human-readable description
    chamber: str  # "H" or "S"
    importance: int = 0  # 1 for passage/signing/veto/failure milestones
    sequence: int = 1  # 1-based order within the history

    @property
    def chamber_id(self) -> int:
        return CHAMBER_IDS.get(self.chamber, 1)

    @property
    def is_important(self) -> bool:
        return self.importance == 1

    def sort_key(self) -> tuple[str, int]:
        return (self.date, self.sequence)

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "action": self.action,
            "chamber": self.chamber,
            "chamber_id": self.chamber_id,
            "importance": self.importance,
            "sequence": self.sequence,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HistoryDisplayItem:
        return cls(
            date=str(data["date"]),
            action=str(data["action"]),
            chamber=str(data["chamber"]),
            importance=int(data.get("importance", 0)),
            sequence=int(data.get("sequence", 1)),
        )

    def __str__(self) -> str:
        return f"{self.date} #{self.sequence} [{self.chamber}] {self.action}"


@dataclass
class ExpandedSegment:
    """One annotated piece of an action string, for presentation only."""

    original: str
    expanded: str
    type: SegmentType
    tooltip: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "original": self.original,
            "expanded": self.expanded,
            "type": self.type.value,
        }
        if self.tooltip is not None:
            data["tooltip"] = self.tooltip
        return data


@dataclass
class ExpandedAction:
    """Result of expanding one action text into segments."""

    original: str
    segments: list[ExpandedSegment] = field(default_factory=list)

    @property
    def expanded(self) -> str:
        return " → ".join(s.expanded for s in self.segments)

    def to_dict(self) -> dict[str, Any]:
        return {
            "original": self.original,
            "segments": [s.to_dict() for s in self.segments],
            "expanded": self.expanded,
        }


@dataclass
class NormalizedHistory:
    """History in canonical form plus what was detected about its source."""

    format: HistoryFormat
    items: list[HistoryDisplayItem] = field(default_factory=list)
    parsed: Optional[ParsedBillActions] = None
    raw_actions: Optional[str] = None


@dataclass
class BillLocation:
    """Where a bill currently sits, derived from its stored history."""

    location: str
    status: str  # in_committee, passed_house, passed_senate, passed_both, ...
    committee: Optional[str] = None
    last_action: Optional[str] = None
    last_date: Optional[str] = None


@dataclass
class ActionRule:
    """Definition of one token classification rule.

    Each rule recognizes one kind of action token with:
    - Zero or more regex patterns, tried with ``fullmatch``
    - An optional condition on the token (for table lookups)
    - A handler that builds the ParsedAction and updates parse state

    Rules are evaluated in list order and the first match wins.
    """

    name: str
    action_type: ActionType
    handler: Callable[..., ParsedAction]
    patterns: list = field(default_factory=list)  # Compiled regex patterns
    condition: Optional[Callable[[ActionToken], bool]] = None
    segment_type: SegmentType = SegmentType.ACTION

    def match(self, token: ActionToken) -> Optional[dict[str, Optional[str]]]:
        """Try to match a token against this rule.

        Args:
            token: Token to classify

        Returns:
            Dictionary of named groups (empty for condition-only rules)
            if the rule applies, None otherwise
        """
        if self.condition is not None and not self.condition(token):
            return None
        if not self.patterns:
            return {} if self.condition is not None else None
        for pattern in self.patterns:
            match = pattern.fullmatch(token.raw)
            if match:
                return match.groupdict()
        return None
