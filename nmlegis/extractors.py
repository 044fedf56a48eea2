"""Field extraction utilities for action tokens.

They all take the named groups of a rule match plus the token itself,
so some arguments go unused. Everything here is best effort: a field
that can't be read comes back as None rather than raising.
"""

import re
from typing import Optional

from nmlegis.models import ActionToken, CHAMBER_NAMES

_DATE_IN_PARENS = re.compile(r"\(\s*([^)]*?)\s*\)")
_CHAPTER = re.compile(r"Ch[\.\s]*(\d+)", re.I)
_VOTE = re.compile(r"(\d+)\s*-\s*(\d+)")


def extract_vote(groups: dict, token: ActionToken) -> Optional[str]:
    """Extract a "yea-nay" vote tally.

    Args:
        groups: Named groups from the rule match
        token: Token being classified

    Returns:
        Vote string (e.g., "54-2"), or None if no tally was announced
    """
    yeas = groups.get("yeas")
    nays = groups.get("nays")
    if yeas is not None and nays is not None:
        return f"{int(yeas)}-{int(nays)}"
    match = _VOTE.search(groups.get("vote") or "")
    if match:
        return f"{int(match.group(1))}-{int(match.group(2))}"
    return None


def extract_chamber(groups: dict, token: ActionToken) -> Optional[str]:
    """Extract a chamber letter ("H" or "S")."""
    chamber = groups.get("chamber")
    if chamber and chamber.upper() in CHAMBER_NAMES:
        return chamber.upper()
    return None


def extract_paren_date(groups: dict, token: ActionToken) -> Optional[str]:
    """Extract the date annotation from e.g. ``SGND(Mar.4)Ch.9``.

    The text is returned as written; dates in the action strings have no
    year and inconsistent punctuation, so no conversion is attempted.
    """
    match = _DATE_IN_PARENS.search(token.raw)
    if match and match.group(1):
        return match.group(1)
    return None


def extract_chapter(groups: dict, token: ActionToken) -> Optional[str]:
    """Extract a law chapter number, e.g. "9" from ``SGND(Mar.4)Ch.9``."""
    match = _CHAPTER.search(token.raw)
    if match:
        return match.group(1)
    return None


def count_amendments(groups: dict, token: ActionToken) -> int:
    """Count floor amendments in ``fl/a``, ``fl/aa``, ``fl/aaa``..."""
    amendments = groups.get("amendments") or ""
    return len(amendments)


def chamber_name(chamber: Optional[str]) -> str:
    """Map "H"/"S" to "House"/"Senate", passing anything else through."""
    if not chamber:
        return ""
    return CHAMBER_NAMES.get(chamber.upper(), chamber)
