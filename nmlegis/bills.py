"""Bill name helpers ("HB 1", "CS/SJR 5", "*HB12")."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

# CS = committee substitute; * = emergency clause
_BILL_NAME = re.compile(
    r"^(?:CS[\s/]*)?\*?(?P<chamber>[HS])(?P<type>B|M|R|CR|JM|JR)\s*(?P<number>\d+)$",
    re.I,
)

BILL_TYPE_NAMES = {
    "B": "Bill",
    "M": "Memorial",
    "JM": "Joint Memorial",
    "R": "Resolution",
    "JR": "Joint Resolution",
    "CR": "Concurrent Resolution",
}


@dataclass(frozen=True)
class BillName:
    """Components of a bill name."""

    chamber: str  # "H" or "S"
    type: str  # "B", "JM", ...
    number: int

    @property
    def origin_chamber(self) -> str:
        return self.chamber

    @property
    def type_name(self) -> str:
        return get_bill_type_name(self.type)

    def __str__(self) -> str:
        return normalize_bill_number(self.chamber, self.type, self.number)


def parse_bill_name(name: str) -> Optional[BillName]:
    """Parse a bill name like "HB1" or "SJR 5".

    Returns:
        BillName, or None if the name isn't recognized
    """
    if not name:
        return None
    match = _BILL_NAME.match(name.strip())
    if not match:
        return None
    return BillName(
        chamber=match.group("chamber").upper(),
        type=match.group("type").upper(),
        number=int(match.group("number")),
    )


def normalize_bill_number(chamber: str, bill_type: str, number: int) -> str:
    """Build the canonical bill number, e.g. "HB1"."""
    return f"{chamber}{bill_type}{number}"


def get_bill_type_name(bill_type: str) -> str:
    """Map a bill type code to its full name, e.g. "JM" -> "Joint Memorial"."""
    return BILL_TYPE_NAMES.get(bill_type.upper(), bill_type)
