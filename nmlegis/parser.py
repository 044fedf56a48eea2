"""Main parsing logic for NM Legislature action strings.

Action strings look like ``[1] HPREF-HAFC/HJC-HAFC-DP-PASSED/H (54-2)``:
an optional legislative-day marker followed by hyphen-separated codes.
"""

import logging
import re
from typing import Optional

from nmlegis.models import (
    ActionRule,
    ActionToken,
    ActionType,
    ParsedAction,
    ParsedBillActions,
)
from nmlegis.rules import ACTION_RULES, ParseState
from nmlegis.status import summarize

logger = logging.getLogger(__name__)

# Markers may carry inner spaces, e.g. "[ 3 ]"
DAY_MARKER = re.compile(r"\[\s*(\d+)\s*\]")
LEADING_DAY_MARKER = re.compile(r"^" + DAY_MARKER.pattern + r"\s*")


def clean_action_string(raw: Optional[str]) -> str:
    """Trim an action string and drop stray backticks seen in scraped data."""
    if not raw:
        return ""
    return raw.replace("`", "").strip()


def is_day_marker(text: str) -> bool:
    return DAY_MARKER.fullmatch(text.strip()) is not None


def split_tokens(text: str) -> list[str]:
    """Split an action string into tokens.

    Tokens are separated by hyphens, except inside parentheses so that
    votes like ``(54-2)`` stay with their ``PASSED/H``. Day markers such
    as ``[3]`` also end a token and are returned as tokens of their own.
    Tokens are trimmed and empty ones dropped.

    Args:
        text: Action string (or part of one)

    Returns:
        Token strings in order
    """
    tokens: list[str] = []
    current: list[str] = []
    depth = 0

    def flush() -> None:
        token = "".join(current).strip()
        if token:
            tokens.append(token)
        current.clear()

    i = 0
    while i < len(text):
        char = text[i]
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(depth - 1, 0)
        elif char == "-" and depth == 0:
            flush()
            i += 1
            continue
        elif char == "[" and depth == 0:
            marker = DAY_MARKER.match(text, i)
            if marker:
                flush()
                tokens.append(marker.group(0))
                i = marker.end()
                continue
        current.append(char)
        i += 1
    flush()
    return tokens


class ActionStringParser:
    """Parses action strings into ParsedBillActions."""

    def __init__(
        self,
        rules: Optional[list[ActionRule]] = None,
        warn_on_unknown: bool = False,
    ) -> None:
        """Initialize parser.

        Args:
            rules: Ordered rule table (uses the default if None)
            warn_on_unknown: Log unrecognized tokens at WARNING, not DEBUG
        """
        self.rules = rules or ACTION_RULES
        self.warn_on_unknown = warn_on_unknown

    def classify(
        self, token: ActionToken, state: ParseState
    ) -> tuple[Optional[ActionRule], ParsedAction]:
        """Classify one token with the first matching rule.

        Args:
            token: Token to classify
            state: Parse state, updated by the rule's handler

        Returns:
            The rule that matched (None if none did) and the action built
        """
        for rule in self.rules:
            groups = rule.match(token)
            if groups is not None:
                return rule, rule.handler(token, groups, state)
        return None, ParsedAction(
            type=ActionType.OTHER,
            code=token.raw,
            description=token.raw,
        )

    def parse(self, raw: Optional[str]) -> ParsedBillActions:
        """Parse one action string.

        Never raises for malformed input: every token yields exactly one
        ParsedAction, and tokens no rule understands are kept as OTHER
        with their raw text as the description.

        Args:
            raw: Action string, e.g. "[5] SRC/SFC-SRC"

        Returns:
            ParsedBillActions with actions, status and summary
        """
        result = ParsedBillActions(raw=raw or "")
        remaining = clean_action_string(raw)
        if not remaining:
            result.summary = "No action recorded"
            return result

        day_match = LEADING_DAY_MARKER.match(remaining)
        if day_match:
            result.legislative_day = int(day_match.group(1))
            remaining = remaining[day_match.end():]

        state = ParseState()
        for text in split_tokens(remaining):
            if is_day_marker(text):
                continue
            token = ActionToken(text)
            rule, action = self.classify(token, state)
            if rule is None or rule.name == "unknown":
                self._log_unknown(token, raw)
            result.actions.append(action)

        result.status = state.status
        result.current_committee = state.current_committee
        result.current_committee_name = state.current_committee_name
        result.referrals = list(state.referrals)
        result.referral_names = list(state.referral_names)
        result.summary = summarize(result)
        return result

    def _log_unknown(self, token: ActionToken, raw: Optional[str]) -> None:
        level = logging.WARNING if self.warn_on_unknown else logging.DEBUG
        logger.log(level, "Unknown action token %r in %r", token.raw, raw)


def parse_action_string(raw: Optional[str]) -> ParsedBillActions:
    """Parse an action string with the default rules.

    This is the main entry point for parsing.
    """
    return ActionStringParser().parse(raw)
