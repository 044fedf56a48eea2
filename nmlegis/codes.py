"""NM Legislature action and committee code tables.

Reference: https://www.nmlegis.gov/Legislation/Key_To_Abbreviations

The tables are built once at import and exposed read-only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class CommitteeChamber(str, Enum):
    """Chamber a committee belongs to."""

    HOUSE = "House"
    SENATE = "Senate"
    OTHER = "Other"


@dataclass(frozen=True)
class ActionCodeEntry:
    """An action code with short and full descriptions."""

    code: str
    short: str
    full: str


@dataclass(frozen=True)
class CommitteeEntry:
    """A committee code and its display name."""

    code: str
    name: str

    @property
    def chamber(self) -> CommitteeChamber:
        """Chamber guessed from the leading letter of the code.

        This is a heuristic; historical codes do not promise it.
        """
        if self.code.startswith("H"):
            return CommitteeChamber.HOUSE
        if self.code.startswith("S"):
            return CommitteeChamber.SENATE
        return CommitteeChamber.OTHER


_ACTIONS: list[ActionCodeEntry] = [
    # Symbols
    ActionCodeEntry("*", "Emergency clause",
                    "Emergency clause. If a bill passes by less than the required two-thirds vote, this symbol is deleted."),

    # General actions
    ActionCodeEntry("API", "Postponed Indefinitely", "Action postponed indefinitely"),
    ActionCodeEntry("CA", "Constitutional Amendment", "Constitutional Amendment"),
    ActionCodeEntry("CC", "Conference Committee",
                    "Conference committee. This entry follows when the Senate and House fail to agree on amendments to a bill."),
    ActionCodeEntry("CS", "Committee Substitute",
                    "Committee substitute. This entry, following a DNP report, indicates the committee's substitute bill. "
                    "Succeeding entries will record the action on the committee substitute."),
    ActionCodeEntry("DEAD", "Dead", "Bill Has Died"),

    # Do Not Pass
    ActionCodeEntry("DNP", "Do Not Pass", "DO NOT PASS committee report adopted"),
    ActionCodeEntry("DNP.", "Do Not Pass", "DO NOT PASS committee report adopted"),
    ActionCodeEntry("DNP nt adptd", "DNP Not Adopted", "DO NOT PASS committee report NOT adopted"),

    # Do Pass
    ActionCodeEntry("DP", "Do Pass", "DO PASS committee report adopted"),
    ActionCodeEntry("DP/a", "Do Pass (amended)", "DO PASS, as amended, committee report adopted"),

    # Enrolling and engrossing
    ActionCodeEntry("E&E", "Enrolled & Engrossed",
                    "The final authoritative version of a bill passed by both houses of the legislature. "
                    "The preparation is performed by the house of introduction and incorporates all amendments "
                    "adopted and agreed to by both houses."),

    # Passed / failed
    ActionCodeEntry("PASSED", "Passed", "Passed"),
    ActionCodeEntry("PASS", "Passed", "Passed"),
    ActionCodeEntry("PASSED/H", "Passed House", "Passed House (always followed by announced vote)"),
    ActionCodeEntry("PASSED/S", "Passed Senate", "Passed Senate (always followed by announced vote)"),
    ActionCodeEntry("FAILED/H", "Failed House", "Failed passage in House (sometimes followed by announced vote)"),
    ActionCodeEntry("FAILED/S", "Failed Senate", "Failed passage in Senate (sometimes followed by announced vote)"),

    # Floor actions
    ActionCodeEntry("FL/", "Floor Substitute",
                    "Floor substitute. A bill or committee substitute may be substituted on final passage by any "
                    "legislator. Succeeding entries will record the action on the floor substitute."),
    ActionCodeEntry("fl/a", "Floor Amendment", "Floor amendment adopted"),
    ActionCodeEntry("fl/aa", "Floor Amendments (2)", "Two floor amendments adopted"),
    ActionCodeEntry("fl/aaa", "Floor Amendments (3)", "Three floor amendments adopted"),

    # Concurrence
    ActionCodeEntry("h/cncrd", "House Concurred", "House has concurred in Senate amendments on a House bill"),
    ActionCodeEntry("h/fld cncr", "House Failed Concur",
                    "House has failed to concur in Senate amendments on a House bill. The House then sends a "
                    "message requesting the Senate to recede from its amendments."),
    ActionCodeEntry("s/cncrd", "Senate Concurred", "Senate has concurred in House amendments on a Senate bill"),
    ActionCodeEntry("s/fld recede", "Senate Failed Recede",
                    "This procedure could follow if the Senate refuses to recede from its amendments"),

    ActionCodeEntry("germane", "Germane", "Bills which fall within the purview of a 30-day session"),
    ActionCodeEntry("m/rcnsr adptd", "Reconsider Adopted", "Motion to reconsider previous action adopted"),
    ActionCodeEntry("rcld frm/h", "Recalled from House",
                    "Bill recalled from the House for further consideration by the Senate"),
    ActionCodeEntry("rcld frm/s", "Recalled from Senate",
                    "Bill recalled from the Senate for further consideration by the House"),

    # Signed / vetoed
    ActionCodeEntry("SGND", "Signed",
                    "Signed by one or both houses. For legislation not requiring Governor's signature."),
    ActionCodeEntry("SGND.", "Signed",
                    "Signed by one or both houses. For legislation not requiring Governor's signature."),
    ActionCodeEntry("PSGN", "Signed", "Signed by the Governor"),
    ActionCodeEntry("PVET", "Vetoed", "Vetoed by the Governor"),
    ActionCodeEntry("PKVT", "Pocket Veto", "Pocket Veto"),
    ActionCodeEntry("VETO", "Vetoed", "Vetoed by the Governor"),

    # Certificates and chapters
    ActionCodeEntry("OCER", "Certificate", "Certificate"),
    ActionCodeEntry("PCH", "Chaptered", "Chaptered into law"),
    ActionCodeEntry("PCA", "Constitutional Amendment", "Constitutional Amendment"),
    ActionCodeEntry("QSUB", "Substituted", "Substituted"),

    # Tabling
    ActionCodeEntry("T", "Speaker's Table",
                    "On the Speaker's table by rule (temporary calendar). This entry appears only on House action. "
                    "By House Rule 11-20-1, legislation, except that on the Consent Calendar, is placed on the "
                    "Speaker's table for 24 hours before being placed on the House Calendar for action by the House."),
    ActionCodeEntry("tbld", "Tabled", "Tabled temporarily by motion"),
    ActionCodeEntry("TBLD INDEF", "Tabled Indefinitely", "Tabled indefinitely"),
    ActionCodeEntry("TBLD INDEF.", "Tabled Indefinitely", "Tabled indefinitely"),

    # Withdrawn / reported
    ActionCodeEntry("w/drn", "Withdrawn", "Withdrawn from committee or daily calendar for subsequent action"),
    ActionCodeEntry("w/o rec", "Without Recommendation", "WITHOUT RECOMMENDATION committee report adopted"),

    # Printing
    ActionCodeEntry("prntd", "Printed", "Bill has been printed"),
    ActionCodeEntry("nt prntd", "Not Printed", "Bill not printed"),
    ActionCodeEntry("nt ref com", "Not Referred", "Not referred to committee"),
]

_COMMITTEES: list[CommitteeEntry] = [
    # House committees
    CommitteeEntry("HAAWC", "House Agriculture, Acequias And Water Resources"),
    CommitteeEntry("HAFC", "Appropriations & Finance"),
    CommitteeEntry("HAGC", "House Agriculture & Water Resources Committee"),
    CommitteeEntry("HAWC", "Agriculture, Water & Wildlife"),
    CommitteeEntry("HBEC", "Business & Employment"),
    CommitteeEntry("HBIC", "House Business & Industry Committee"),
    CommitteeEntry("HCAL", "House Calendar"),
    CommitteeEntry("HCAT", "House Temporary Calendar"),
    CommitteeEntry("HCEDC", "Commerce & Economic Development Committee"),
    CommitteeEntry("HCNR", "House Concurrence Calendar"),
    CommitteeEntry("HCPAC", "House Consumer & Public Affairs Committee"),
    CommitteeEntry("HCW", "Committee of the Whole"),
    CommitteeEntry("HE&EC", "Enrolling & Engrossing"),
    CommitteeEntry("HEC", "Education"),
    CommitteeEntry("HEEC", "House Enrolling & Engrossing Committee"),
    CommitteeEntry("HEENC", "Energy, Environment & Natural Resources (former)"),
    CommitteeEntry("HENRC", "House Energy, Environment & Natural Resources"),
    CommitteeEntry("HGEIC", "Government, Elections & Indian Affairs"),
    CommitteeEntry("HGUAC", "House Government & Urban Affairs"),
    CommitteeEntry("HHC", "Health"),
    CommitteeEntry("HHGAC", "House Health & Government Affairs Committee"),
    CommitteeEntry("HHGIC", "House Health, Government & Indian Affairs Committee"),
    CommitteeEntry("HHHC", "House Health & Human Services"),
    CommitteeEntry("HINT", "House Intro"),
    CommitteeEntry("HJC", "Judiciary"),
    CommitteeEntry("HLC", "House Labor & Human Resources Committee"),
    CommitteeEntry("HLEDC", "House Labor & Economic Development"),
    CommitteeEntry("HLELC", "House Local Government, Elections, Land Grants & Cultural Affairs"),
    CommitteeEntry("HLLC", "Local Government, Land Grants & Cultural Affairs"),
    CommitteeEntry("HLVMC", "Labor, Veterans' And Military Affairs Committee"),
    CommitteeEntry("HPREF", "House Pre-file"),
    CommitteeEntry("HPSC", "Printing & Supplies"),
    CommitteeEntry("HRC", "Rules & Order of Business"),
    CommitteeEntry("HRDLC", "House Rural Development, Land Grants And Cultural Affairs"),
    CommitteeEntry("HRPAC", "Regulatory & Public Affairs"),
    CommitteeEntry("HSCAC", "Safety & Civil Affairs"),
    CommitteeEntry("HSEIC", "State Government, Elections & Indian Affairs Committee"),
    CommitteeEntry("HSIVC", "House State Government, Indian & Veterans' Affairs"),
    CommitteeEntry("HTBL", "House Table"),
    CommitteeEntry("HTC", "House Transportation Committee"),
    CommitteeEntry("HTPWC", "Transportation & Public Works"),
    CommitteeEntry("HTRC", "House Taxation & Revenue Committee"),
    CommitteeEntry("HVEC", "House Voters & Elections Committee"),
    CommitteeEntry("HWMC", "Ways & Means"),
    CommitteeEntry("HXPSC", "House Printing & Supplies Committee"),
    CommitteeEntry("HXRC", "House Rules & Order of Business"),
    CommitteeEntry("HZLM", "In Limbo (House)"),

    # Senate committees
    CommitteeEntry("SCAL", "Senate Calendar"),
    CommitteeEntry("SCC", "Committees' Committee"),
    CommitteeEntry("SCNR", "Senate Concurrence Calendar"),
    CommitteeEntry("SCONC", "Conservation"),
    CommitteeEntry("SCORC", "Corporations & Transportation"),
    CommitteeEntry("SCW", "Committee of the Whole"),
    CommitteeEntry("SEC", "Education"),
    CommitteeEntry("SFC", "Finance"),
    CommitteeEntry("SGC", "Senate Select Gaming Committee"),
    CommitteeEntry("SHPAC", "Senate Health and Public Affairs"),
    CommitteeEntry("SIAC", "Indian & Cultural Affairs"),
    CommitteeEntry("SINT", "Senate Intro"),
    CommitteeEntry("SIRC", "Senate Indian, Rural and Cultural Affairs"),
    CommitteeEntry("SJC", "Judiciary"),
    CommitteeEntry("SPAC", "Public Affairs"),
    CommitteeEntry("SPREF", "Senate Pre-file"),
    CommitteeEntry("SRC", "Rules"),
    CommitteeEntry("STBL", "Senate Table"),
    CommitteeEntry("STBTC", "Senate Tax, Business and Transportation"),
    CommitteeEntry("SWMC", "Senate Ways & Means Committee"),
    CommitteeEntry("SZLM", "In Limbo (Senate)"),
]

# LegiScan numeric status codes
STATUS_CODES: Mapping[int, dict[str, str]] = MappingProxyType({
    1: {"label": "In Committee", "description": "Being reviewed by committee"},
    2: {"label": "Passed One Chamber", "description": "Heading to the other chamber"},
    3: {"label": "Passed Both Chambers", "description": "Waiting for Governor's signature"},
    4: {"label": "Signed Into Law", "description": "Signed by the Governor"},
    5: {"label": "Vetoed", "description": "Rejected by the Governor"},
    6: {"label": "Did Not Pass", "description": "Failed to advance"},
})

ACTION_CODES: Mapping[str, ActionCodeEntry] = MappingProxyType(
    {a.code: a for a in _ACTIONS}
)
COMMITTEE_CODES: Mapping[str, CommitteeEntry] = MappingProxyType(
    {c.code: c for c in _COMMITTEES}
)

# Uppercased views for case-insensitive lookups. When two codes differ
# only by case the first one listed wins.
_ACTIONS_UPPER: dict[str, ActionCodeEntry] = {}
for _entry in _ACTIONS:
    _ACTIONS_UPPER.setdefault(_entry.code.upper(), _entry)
_COMMITTEES_UPPER: dict[str, CommitteeEntry] = {
    c.code.upper(): c for c in _COMMITTEES
}


def _lookup(table: Mapping, upper_table: Mapping, code: str):
    if not code:
        return None
    for candidate in (code, code + "."):
        if candidate in table:
            return table[candidate]
        if candidate.upper() in upper_table:
            return upper_table[candidate.upper()]
    return None


def lookup_action(code: str) -> Optional[ActionCodeEntry]:
    """Get the meaning of an action code.

    Tries an exact match, then a case-insensitive one, then both again
    with a trailing period appended.

    Args:
        code: Action code as it appears in the action string

    Returns:
        ActionCodeEntry, or None if the code is unknown
    """
    return _lookup(ACTION_CODES, _ACTIONS_UPPER, code)


def lookup_committee_entry(code: str) -> Optional[CommitteeEntry]:
    """Get the committee entry for a code, or None if unknown."""
    return _lookup(COMMITTEE_CODES, _COMMITTEES_UPPER, code)


def lookup_committee(code: str) -> Optional[str]:
    """Get the display name of a committee code.

    Args:
        code: Committee code (e.g., "HAFC")

    Returns:
        Committee name, or None if not found
    """
    entry = lookup_committee_entry(code)
    return entry.name if entry else None


def is_action_code(code: str) -> bool:
    """Check if a string is a known action code."""
    return lookup_action(code) is not None


def is_committee_code(code: str) -> bool:
    """Check if a string is a known committee code."""
    return lookup_committee_entry(code) is not None
