"""Token classification rules.

This module defines every recognized action token and what it does to
the parse state. The rules are evaluated top to bottom and the first
match wins; several tokens satisfy more than one pattern, so the order
below is significant. New tokens are added by inserting a rule at the
right position (or by passing a custom list to ``ActionStringParser``).
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional

from nmlegis.codes import (
    is_committee_code,
    lookup_action,
    lookup_committee,
    lookup_committee_entry,
)
from nmlegis.extractors import (
    chamber_name,
    count_amendments,
    extract_chamber,
    extract_chapter,
    extract_paren_date,
    extract_vote,
)
from nmlegis.models import (
    ActionRule,
    ActionToken,
    ActionType,
    BillStatus,
    ParsedAction,
    SegmentType,
)
from nmlegis.status import StatusTracker

SPEAKERS_TABLE_CODE = "T"
SPEAKERS_TABLE_NAME = "Speaker's Table"


@dataclass
class ParseState:
    """Running state while walking one action string."""

    tracker: StatusTracker = field(default_factory=StatusTracker)
    current_committee: Optional[str] = None
    current_committee_name: Optional[str] = None
    referrals: list[str] = field(default_factory=list)
    referral_names: list[str] = field(default_factory=list)

    @property
    def status(self) -> BillStatus:
        return self.tracker.status

    def enter_committee(self, code: str, name: str) -> None:
        """Record where the bill sits; a terminal status keeps it out of committee."""
        if self.tracker.is_terminal:
            return
        self.current_committee = code
        self.current_committee_name = name

    def leave_committee(self) -> None:
        self.current_committee = None
        self.current_committee_name = None

    def finish(self, status: BillStatus) -> None:
        """Move to a terminal status; the bill is no longer in committee."""
        self.tracker.transition(status)
        self.leave_committee()


def _committee_action(token: ActionToken, state: ParseState, description: str) -> ParsedAction:
    return ParsedAction(
        type=ActionType.COMMITTEE_ACTION,
        code=token.raw,
        description=description,
        committee=state.current_committee,
        committee_name=state.current_committee_name,
    )


# =========================================================================
# HANDLERS
# =========================================================================

def handle_prefiled(token: ActionToken, groups: dict, state: ParseState) -> ParsedAction:
    chamber = token.upper[0]
    state.tracker.transition(BillStatus.PREFILED)
    return ParsedAction(
        type=ActionType.PREFILED,
        code=token.raw,
        description=f"Pre-filed in {chamber_name(chamber)}",
        chamber=chamber,
    )


def handle_multi_referral(token: ActionToken, groups: dict, state: ParseState) -> ParsedAction:
    committees = [c.strip() for c in token.raw.split("/")]
    state.referrals = committees
    state.referral_names = [lookup_committee(c) or c for c in committees]
    return ParsedAction(
        type=ActionType.REFERRED,
        code=token.raw,
        description=f"Referred to: {', '.join(state.referral_names)}",
    )


def handle_passed(token: ActionToken, groups: dict, state: ParseState) -> ParsedAction:
    chamber = extract_chamber(groups, token)
    vote = extract_vote(groups, token)
    description = f"Passed {chamber_name(chamber)}"
    if vote:
        description += f" ({vote})"
    state.tracker.record_passage(chamber)
    state.leave_committee()
    state.referrals = []
    state.referral_names = []
    return ParsedAction(
        type=ActionType.PASSED,
        code=token.raw,
        description=description,
        vote=vote,
        chamber=chamber,
    )


def handle_failed(token: ActionToken, groups: dict, state: ParseState) -> ParsedAction:
    chamber = extract_chamber(groups, token)
    vote = extract_vote(groups, token)
    description = f"Failed in {chamber_name(chamber)}"
    if vote:
        description += f" ({vote})"
    state.finish(BillStatus.FAILED)
    return ParsedAction(
        type=ActionType.FAILED,
        code=token.raw,
        description=description,
        vote=vote,
        chamber=chamber,
    )


def handle_do_pass(token: ActionToken, groups: dict, state: ParseState) -> ParsedAction:
    if groups.get("amended"):
        return _committee_action(token, state, "Committee voted Do Pass, as amended")
    return _committee_action(token, state, "Committee voted Do Pass")


def handle_do_not_pass(token: ActionToken, groups: dict, state: ParseState) -> ParsedAction:
    action = _committee_action(token, state, "Committee voted Do Not Pass")
    state.finish(BillStatus.FAILED)
    return action


def handle_committee_substitute(token: ActionToken, groups: dict, state: ParseState) -> ParsedAction:
    return _committee_action(token, state, "Committee substitute adopted")


def handle_floor_amendment(token: ActionToken, groups: dict, state: ParseState) -> ParsedAction:
    count = count_amendments(groups, token)
    plural = "s" if count > 1 else ""
    return ParsedAction(
        type=ActionType.FLOOR_ACTION,
        code=token.raw,
        description=f"{count} floor amendment{plural} adopted",
    )


def handle_tabled(token: ActionToken, groups: dict, state: ParseState) -> ParsedAction:
    indefinite = "INDEF" in token.upper
    state.finish(BillStatus.TABLED)
    return ParsedAction(
        type=ActionType.TABLED,
        code=token.raw,
        description="Tabled indefinitely" if indefinite else "Temporarily tabled",
    )


def handle_postponed(token: ActionToken, groups: dict, state: ParseState) -> ParsedAction:
    action = ParsedAction(
        type=ActionType.FAILED,
        code=token.raw,
        description="Action postponed indefinitely",
        committee=state.current_committee,
        committee_name=state.current_committee_name,
    )
    state.finish(BillStatus.FAILED)
    return action


def handle_signed(token: ActionToken, groups: dict, state: ParseState) -> ParsedAction:
    date = extract_paren_date(groups, token)
    chapter = extract_chapter(groups, token)
    description = "Signed into law"
    if date:
        description += f" on {date}"
    if chapter:
        description += f", Chapter {chapter}"
    state.finish(BillStatus.SIGNED)
    return ParsedAction(
        type=ActionType.SIGNED,
        code=token.raw,
        description=description,
        date=date,
        chapter=chapter,
    )


def handle_vetoed(token: ActionToken, groups: dict, state: ParseState) -> ParsedAction:
    pocket = token.upper == "PKVT" or "POCKET" in token.upper
    date = extract_paren_date(groups, token)
    description = "Pocket vetoed by Governor" if pocket else "Vetoed by Governor"
    if date:
        description += f" on {date}"
    state.finish(BillStatus.VETOED)
    return ParsedAction(
        type=ActionType.VETOED,
        code=token.raw,
        description=description,
        date=date,
    )


def handle_without_recommendation(token: ActionToken, groups: dict, state: ParseState) -> ParsedAction:
    description = "Reported without recommendation"
    if groups.get("amended"):
        description += ", as amended"
    return _committee_action(token, state, description)


def handle_concurrence(token: ActionToken, groups: dict, state: ParseState) -> ParsedAction:
    chamber = extract_chamber(groups, token)
    return ParsedAction(
        type=ActionType.FLOOR_ACTION,
        code=token.raw,
        description=f"{chamber_name(chamber)} concurred with amendments",
        chamber=chamber,
    )


def handle_speakers_table(token: ActionToken, groups: dict, state: ParseState) -> ParsedAction:
    state.enter_committee(SPEAKERS_TABLE_CODE, SPEAKERS_TABLE_NAME)
    return ParsedAction(
        type=ActionType.FLOOR_ACTION,
        code=token.raw,
        description="On Speaker's table (24-hour hold)",
    )


def handle_conference(token: ActionToken, groups: dict, state: ParseState) -> ParsedAction:
    return ParsedAction(
        type=ActionType.FLOOR_ACTION,
        code=token.raw,
        description="Sent to conference committee",
    )


def committee_code_of(token: ActionToken) -> Optional[str]:
    """Canonical committee code for a token, ignoring a trailing period."""
    for candidate in (token.raw, token.raw.rstrip(".")):
        entry = lookup_committee_entry(candidate)
        if entry:
            return entry.code
    return None


def handle_committee(token: ActionToken, groups: dict, state: ParseState) -> ParsedAction:
    code = committee_code_of(token) or token.raw
    name = lookup_committee(code)
    state.enter_committee(code, name or code)
    state.tracker.transition(BillStatus.IN_COMMITTEE)
    return ParsedAction(
        type=ActionType.REFERRED,
        code=token.raw,
        description=f"Sent to {name or code}",
        committee=code,
        committee_name=name,
    )


def handle_known_code(token: ActionToken, groups: dict, state: ParseState) -> ParsedAction:
    entry = lookup_action(token.raw)
    return ParsedAction(
        type=ActionType.OTHER,
        code=token.raw,
        description=entry.short if entry else token.raw,
    )


def handle_unknown(token: ActionToken, groups: dict, state: ParseState) -> ParsedAction:
    return ParsedAction(
        type=ActionType.OTHER,
        code=token.raw,
        description=token.raw,
    )


# =========================================================================
# CONDITIONS
# =========================================================================

def is_multi_referral(token: ActionToken) -> bool:
    """Slash-joined committee codes like ``SRC/SFC``."""
    if "/" not in token.raw or re.match(r"(PASSED|FAILED)/", token.upper):
        return False
    committees = [c.strip() for c in token.raw.split("/")]
    return all(c and is_committee_code(c) for c in committees)


def contains_committee_substitute(token: ActionToken) -> bool:
    return "CS" in token.upper


def is_tabled(token: ActionToken) -> bool:
    upper = token.upper.rstrip(".")
    return upper == "TBLD" or upper.startswith("TBLD ")


def is_veto(token: ActionToken) -> bool:
    return "VETO" in token.upper or token.upper in ("PVET", "PKVT")


def create_action_rules() -> List[ActionRule]:
    """Create all token rules, in evaluation order.

    Returns:
        List of ActionRule objects; the first rule that matches a token
        classifies it
    """
    rules = []

    # =========================================================================
    # INTRODUCTION AND REFERRAL
    # =========================================================================

    rules.append(ActionRule(
        name="prefiled",
        action_type=ActionType.PREFILED,
        patterns=[re.compile(r"[HS]PREF", re.I)],
        handler=handle_prefiled,
    ))
    rules.append(ActionRule(
        name="multi_referral",
        action_type=ActionType.REFERRED,
        condition=is_multi_referral,
        handler=handle_multi_referral,
        segment_type=SegmentType.REFERRAL,
    ))

    # =========================================================================
    # CHAMBER VOTES
    # =========================================================================

    rules.append(ActionRule(
        name="passed",
        action_type=ActionType.PASSED,
        patterns=[
            re.compile(
                r"PASSED\s*/\s*(?P<chamber>[HS])"
                r"(?:\s*\(\s*(?P<yeas>\d+)\s*-\s*(?P<nays>\d+)\s*\)?)?\.?",
                re.I
            ),
        ],
        handler=handle_passed,
        segment_type=SegmentType.VOTE,
    ))
    rules.append(ActionRule(
        name="failed",
        action_type=ActionType.FAILED,
        patterns=[
            re.compile(
                r"FAILED\s*/\s*(?P<chamber>[HS])"
                r"(?:\s*\(\s*(?P<yeas>\d+)\s*-\s*(?P<nays>\d+)\s*\)?)?\.?",
                re.I
            ),
        ],
        handler=handle_failed,
        segment_type=SegmentType.VOTE,
    ))

    # =========================================================================
    # COMMITTEE REPORTS
    # =========================================================================

    rules.append(ActionRule(
        name="do_pass",
        action_type=ActionType.COMMITTEE_ACTION,
        patterns=[re.compile(r"DP(?P<amended>/A)?\.?", re.I)],
        handler=handle_do_pass,
    ))
    rules.append(ActionRule(
        name="do_not_pass",
        action_type=ActionType.COMMITTEE_ACTION,
        patterns=[re.compile(r"DNP\.?", re.I)],
        handler=handle_do_not_pass,
    ))
    rules.append(ActionRule(
        name="committee_substitute",
        action_type=ActionType.COMMITTEE_ACTION,
        condition=contains_committee_substitute,
        handler=handle_committee_substitute,
    ))

    # =========================================================================
    # FLOOR AND TERMINAL ACTIONS
    # =========================================================================

    rules.append(ActionRule(
        name="floor_amendment",
        action_type=ActionType.FLOOR_ACTION,
        patterns=[re.compile(r"FL/(?P<amendments>A+)", re.I)],
        handler=handle_floor_amendment,
    ))
    rules.append(ActionRule(
        name="tabled",
        action_type=ActionType.TABLED,
        condition=is_tabled,
        handler=handle_tabled,
    ))
    rules.append(ActionRule(
        name="postponed_indefinitely",
        action_type=ActionType.FAILED,
        patterns=[re.compile(r"API\.?", re.I)],
        handler=handle_postponed,
    ))
    rules.append(ActionRule(
        name="signed",
        action_type=ActionType.SIGNED,
        patterns=[re.compile(r"SGND.*", re.I | re.S)],
        handler=handle_signed,
    ))
    rules.append(ActionRule(
        name="vetoed",
        action_type=ActionType.VETOED,
        condition=is_veto,
        handler=handle_vetoed,
    ))
    rules.append(ActionRule(
        name="without_recommendation",
        action_type=ActionType.COMMITTEE_ACTION,
        patterns=[re.compile(r"W/O\s+REC(?P<amended>/A)?\.?", re.I)],
        handler=handle_without_recommendation,
    ))
    rules.append(ActionRule(
        name="concurrence",
        action_type=ActionType.FLOOR_ACTION,
        patterns=[re.compile(r"(?P<chamber>[HS])/CNCRD\.?", re.I)],
        handler=handle_concurrence,
    ))
    rules.append(ActionRule(
        name="speakers_table",
        action_type=ActionType.FLOOR_ACTION,
        patterns=[re.compile(r"T\.?", re.I)],
        handler=handle_speakers_table,
    ))
    rules.append(ActionRule(
        name="conference_committee",
        action_type=ActionType.FLOOR_ACTION,
        patterns=[re.compile(r"CC\.?", re.I)],
        handler=handle_conference,
    ))

    # =========================================================================
    # TABLE LOOKUPS AND FALLBACK
    # =========================================================================

    rules.append(ActionRule(
        name="committee",
        action_type=ActionType.REFERRED,
        condition=lambda token: committee_code_of(token) is not None,
        handler=handle_committee,
        segment_type=SegmentType.COMMITTEE,
    ))
    rules.append(ActionRule(
        name="known_code",
        action_type=ActionType.OTHER,
        condition=lambda token: lookup_action(token.raw) is not None,
        handler=handle_known_code,
    ))
    rules.append(ActionRule(
        name="unknown",
        action_type=ActionType.OTHER,
        condition=lambda token: True,
        handler=handle_unknown,
        segment_type=SegmentType.TEXT,
    ))

    return rules


# Create the default rule table
ACTION_RULES = create_action_rules()
