"""Display expansion of action text.

Turns raw codes like ``HAFC-DP-PASSED/H (54-2)`` into annotated segments
("raw code → plain English" plus a tooltip) for the UI. Nothing here
changes stored history. Text that is already human readable, such as
the descriptions written by the history normalizer, comes back as a
single unchanged segment.
"""

import logging
import re
from typing import Optional

from nmlegis.codes import ACTION_CODES, lookup_action, lookup_committee
from nmlegis.extractors import chamber_name
from nmlegis.models import (
    ActionToken,
    ActionType,
    ExpandedAction,
    ExpandedSegment,
    SegmentType,
)
from nmlegis.parser import ActionStringParser, DAY_MARKER, is_day_marker, split_tokens
from nmlegis.rules import ParseState

logger = logging.getLogger(__name__)

HUMAN_READABLE_PATTERNS = [
    re.compile(r"^Referred to", re.I),
    re.compile(r"^Sent to", re.I),
    re.compile(r"^Committee voted", re.I),
    re.compile(r"^Committee substitute", re.I),
    re.compile(r"^Pre-filed", re.I),
    re.compile(r"^Passed (House|Senate|both)", re.I),
    re.compile(r"^Failed in", re.I),
    re.compile(r"^Signed", re.I),
    re.compile(r"^(Pocket )?Vetoed", re.I),
    re.compile(r"^(Temporarily )?Tabled", re.I),
    re.compile(r"^Action postponed", re.I),
    re.compile(r"floor amendments? adopted", re.I),
    re.compile(r"^Reported without", re.I),
    re.compile(r"^On Speaker", re.I),
    re.compile(r"concurred", re.I),
    re.compile(r"^Day \d+\. ", re.I),
]

# Short descriptions from the code table are also text the parser emits
_SHORT_DESCRIPTIONS = frozenset(entry.short for entry in ACTION_CODES.values())

_STANDALONE_VOTE = re.compile(r"\(\s*(\d+)\s*-\s*(\d+)\s*\)\.?")


def is_human_readable(text: str) -> bool:
    """Whether text is already a plain-English description."""
    stripped = text.strip()
    if stripped in _SHORT_DESCRIPTIONS:
        return True
    return any(pattern.search(stripped) for pattern in HUMAN_READABLE_PATTERNS)


def _tooltip(token: ActionToken, action_type: ActionType, description: str, action) -> str:
    entry = lookup_action(token.raw)
    if action_type == ActionType.REFERRED and action.committee:
        return f"{action.committee}: {action.committee_name or action.committee}"
    if action_type == ActionType.REFERRED:
        return f"Referred to committees: {description.split(': ', 1)[-1]}"
    if action_type in (ActionType.PASSED, ActionType.FAILED) and action.vote:
        verb = "Passed" if action_type == ActionType.PASSED else "Failed"
        return f"{verb} in the {chamber_name(action.chamber)} with vote {action.vote}"
    if action_type == ActionType.SIGNED and action.date and action.chapter:
        return (
            f"Signed by the Governor on {action.date}, "
            f"became Chapter {action.chapter}"
        )
    if action_type == ActionType.VETOED and action.date:
        return f"{description.split(' on ', 1)[0]} on {action.date}"
    if entry:
        return f"{token.raw}: {entry.full}"
    return description


class ActionTextExpander:
    """Expands action text into display segments."""

    def __init__(self, parser: Optional[ActionStringParser] = None) -> None:
        self.parser = parser or ActionStringParser()

    def expand(self, action_text: str) -> ExpandedAction:
        """Expand action text into annotated segments.

        Args:
            action_text: Raw code string, or an already-readable description

        Returns:
            ExpandedAction; never raises for odd input
        """
        text = action_text or ""
        result = ExpandedAction(original=text)
        if not text.strip():
            return result
        if is_human_readable(text):
            result.segments.append(
                ExpandedSegment(original=text, expanded=text, type=SegmentType.TEXT)
            )
            return result

        state = ParseState()
        for raw in split_tokens(text.replace("`", "")):
            result.segments.append(self._expand_token(raw, state))
        return result

    def _expand_token(self, raw: str, state: ParseState) -> ExpandedSegment:
        if is_day_marker(raw):
            day = DAY_MARKER.fullmatch(raw.strip()).group(1)
            return ExpandedSegment(
                original=raw,
                expanded=f"Day {day}",
                type=SegmentType.DAY,
                tooltip=f"Legislative Day {day}",
            )

        vote = _STANDALONE_VOTE.fullmatch(raw)
        if vote:
            tally = f"{vote.group(1)}-{vote.group(2)}"
            return ExpandedSegment(
                original=raw, expanded=raw, type=SegmentType.VOTE,
                tooltip=f"Vote: {tally}",
            )

        token = ActionToken(raw)
        rule, action = self.parser.classify(token, state)
        if rule is None or rule.name == "unknown":
            logger.debug("Showing unrecognized token %r as text", raw)
            return ExpandedSegment(original=raw, expanded=raw, type=SegmentType.TEXT)

        segment_type = rule.segment_type
        if segment_type == SegmentType.VOTE and not action.vote:
            segment_type = SegmentType.ACTION
        if segment_type == SegmentType.COMMITTEE:
            name = lookup_committee(action.committee or raw) or raw
            return ExpandedSegment(
                original=raw, expanded=name, type=segment_type,
                tooltip=f"{action.committee or raw}: {name}",
            )
        expanded = action.description
        if segment_type == SegmentType.REFERRAL:
            expanded = f"Referrals: {', '.join(state.referral_names)}"
        return ExpandedSegment(
            original=raw,
            expanded=expanded,
            type=segment_type,
            tooltip=_tooltip(token, action.type, action.description, action),
        )


def expand_action_text(action_text: str) -> ExpandedAction:
    """Expand action text with the default rules."""
    return ActionTextExpander().expand(action_text)
