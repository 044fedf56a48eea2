"""History normalization.

Bill history arrives in one of two shapes:

- nmlegis: one compact action string, with ``[N]`` legislative-day
  markers instead of calendar dates
- LegiScan: a list of dated items ``{date, action, chamber, chamber_id,
  importance, sequence?}``

Both are turned into a list of ``HistoryDisplayItem``, which is the only
form that gets stored.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Any, Optional, Union

from nmlegis.models import (
    CHAMBER_NAMES,
    HistoryDisplayItem,
    HistoryFormat,
    IMPORTANT_ACTION_TYPES,
    NormalizedHistory,
    ParsedAction,
    ActionType,
)
from nmlegis.parser import (
    ActionStringParser,
    DAY_MARKER,
    LEADING_DAY_MARKER,
    clean_action_string,
)

logger = logging.getLogger(__name__)

HistoryInput = Union[str, list, dict, None]

_CHAMBER_BY_ID = {1: "H", 2: "S"}


def _check_arguments(session_start: Any, origin_chamber: Any) -> date:
    """Validate caller-supplied arguments; bad ones are programming errors."""
    if origin_chamber not in CHAMBER_NAMES:
        raise ValueError(
            f"origin_chamber must be 'H' or 'S', got {origin_chamber!r}"
        )
    if isinstance(session_start, datetime):
        return session_start.date()
    if not isinstance(session_start, date):
        raise TypeError(
            f"session_start must be a date, got {type(session_start).__name__}"
        )
    return session_start


def legislative_day_to_date(session_start: date, legislative_day: int) -> date:
    """Calculate the calendar date of a legislative day.

    Day 1 is the session start itself. Each later day is the next weekday;
    Saturdays and Sundays are skipped. Legislative holidays and recesses
    are not known here, so dates late in a session can run early.

    Args:
        session_start: First day of the session
        legislative_day: 1-based legislative day number

    Returns:
        Calendar date of that legislative day

    Raises:
        OverflowError: the date would fall past ``date.max``
    """
    if legislative_day <= 1:
        return session_start
    remaining = legislative_day - 1
    # Any 7 calendar days hold exactly 5 weekdays
    weeks = (remaining - 1) // 5
    remaining -= weeks * 5
    current = session_start + timedelta(weeks=weeks)
    while remaining:
        current += timedelta(days=1)
        if current.weekday() < 5:
            remaining -= 1
    return current


def _importance(action: ParsedAction) -> int:
    return 1 if action.type in IMPORTANT_ACTION_TYPES else 0


def _next_chamber(action: ParsedAction, chamber: str) -> str:
    """Track which chamber the bill is in after an action.

    Passed/failed votes name their chamber. Otherwise a committee's
    leading H or S is taken as its chamber; that is a naming convention,
    not a rule, so codes starting with anything else leave it alone.
    """
    if action.type in (ActionType.PASSED, ActionType.FAILED) and action.chamber:
        return action.chamber
    if action.committee and action.committee[0] in CHAMBER_NAMES:
        return action.committee[0]
    return chamber


def split_day_segments(actions: str) -> list[tuple[Optional[int], str]]:
    """Split an action string at each ``[N]`` marker.

    Args:
        actions: Cleaned action string

    Returns:
        (legislative day or None, segment text) pairs in order; the
        segment text keeps its marker
    """
    starts = [m.start() for m in DAY_MARKER.finditer(actions)]
    bounds = zip([0] + starts, starts + [len(actions)])
    segments = []
    for begin, end in bounds:
        segment = actions[begin:end]
        if not segment.strip():
            continue
        match = LEADING_DAY_MARKER.match(segment)
        day = int(match.group(1)) if match else None
        segments.append((day, segment.strip()))
    return segments


def convert_actions_to_history(
    actions: str,
    session_start: date,
    origin_chamber: str,
    parser: Optional[ActionStringParser] = None,
) -> list[HistoryDisplayItem]:
    """Convert a compact action string into dated history items.

    Args:
        actions: Raw action string, e.g. "[1] HAFC-DP [3] PASSED/H (54-2)"
        session_start: Session start date (legislative day 1)
        origin_chamber: Chamber the bill was introduced in ("H" or "S")
        parser: Parser to use (default rules if None)

    Returns:
        HistoryDisplayItems in event order; ``sequence`` counts across the
        whole string
    """
    session_start = _check_arguments(session_start, origin_chamber)
    parser = parser or ActionStringParser()
    cleaned = clean_action_string(actions)
    if not cleaned:
        return []

    items: list[HistoryDisplayItem] = []
    chamber = origin_chamber
    action_date = session_start.isoformat()
    sequence = 0
    for day, segment in split_day_segments(cleaned):
        if day is not None:
            try:
                action_date = legislative_day_to_date(session_start, day).isoformat()
            except OverflowError:
                logger.debug("Legislative day %d is out of range; keeping %s", day, action_date)
        for action in parser.parse(segment).actions:
            sequence += 1
            chamber = _next_chamber(action, chamber)
            items.append(HistoryDisplayItem(
                date=action_date,
                action=action.description,
                chamber=chamber,
                importance=_importance(action),
                sequence=sequence,
            ))
    return items


def _item_chamber(item: dict, default: str) -> str:
    chamber = item.get("chamber")
    if isinstance(chamber, str) and chamber.upper() in CHAMBER_NAMES:
        return chamber.upper()
    if isinstance(chamber, int) and chamber in _CHAMBER_BY_ID:
        return _CHAMBER_BY_ID[chamber]
    chamber_id = item.get("chamber_id")
    if chamber_id in _CHAMBER_BY_ID:
        return _CHAMBER_BY_ID[chamber_id]
    return default


def adapt_history_items(
    history: list, origin_chamber: str
) -> list[HistoryDisplayItem]:
    """Adapt already-dated history items, keeping their order.

    Items without a usable ``sequence`` get their 1-based position. Numeric
    chambers (1/2) and the scraper's ``calendar_day`` field are accepted.
    Items without any date are skipped.
    """
    items: list[HistoryDisplayItem] = []
    for index, raw in enumerate(history):
        if isinstance(raw, HistoryDisplayItem):
            items.append(raw)
            continue
        if not isinstance(raw, dict):
            logger.debug("Skipping history item of type %s", type(raw).__name__)
            continue
        item_date = raw.get("date") or raw.get("calendar_day")
        if not item_date:
            logger.debug("Skipping undated history item %r", raw)
            continue
        try:
            sequence = int(raw["sequence"])
        except (KeyError, TypeError, ValueError):
            sequence = index + 1
        try:
            importance = int(raw.get("importance") or 0)
        except (TypeError, ValueError):
            importance = 0
        items.append(HistoryDisplayItem(
            date=str(item_date),
            action=str(raw.get("action", "")),
            chamber=_item_chamber(raw, origin_chamber),
            importance=1 if importance == 1 else 0,
            sequence=sequence,
        ))
    return items


def normalize_history(
    history: HistoryInput,
    session_start: date,
    origin_chamber: str,
) -> list[HistoryDisplayItem]:
    """Normalize bill history from either source format.

    Args:
        history: Action string, ``{"actions": str}`` object, or list of
            dated items
        session_start: Session start date (legislative day 1)
        origin_chamber: Chamber the bill was introduced in ("H" or "S")

    Returns:
        HistoryDisplayItems, in the order the input implied (ascending
        date, then sequence); empty for empty or unrecognized input

    Raises:
        ValueError: origin_chamber is not "H" or "S"
        TypeError: session_start is not a date
    """
    return parse_history_data(history, session_start, origin_chamber).items


def parse_history_data(
    history: HistoryInput,
    session_start: date,
    origin_chamber: str,
    parser: Optional[ActionStringParser] = None,
) -> NormalizedHistory:
    """Detect the format of stored history and normalize it.

    Args:
        history: Action string, ``{"actions": str}`` object, or list of
            dated items
        session_start: Session start date (legislative day 1)
        origin_chamber: Chamber the bill was introduced in ("H" or "S")
        parser: Parser to use (default rules if None)

    Returns:
        NormalizedHistory; format UNKNOWN with no items when the input is
        empty or not a recognized shape
    """
    session_start = _check_arguments(session_start, origin_chamber)
    if not history:
        return NormalizedHistory(format=HistoryFormat.UNKNOWN)

    if isinstance(history, list):
        return NormalizedHistory(
            format=HistoryFormat.LEGISCAN,
            items=adapt_history_items(history, origin_chamber),
        )

    actions: Optional[str] = None
    if isinstance(history, str):
        actions = history
    elif isinstance(history, dict) and isinstance(history.get("actions"), str):
        actions = history["actions"]

    if not actions or not clean_action_string(actions):
        return NormalizedHistory(format=HistoryFormat.UNKNOWN)

    parser = parser or ActionStringParser()
    return NormalizedHistory(
        format=HistoryFormat.NMLEGIS,
        items=convert_actions_to_history(actions, session_start, origin_chamber, parser),
        parsed=parser.parse(actions),
        raw_actions=actions,
    )
