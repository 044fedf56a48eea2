"""Code reference lookup for help screens."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from nmlegis.codes import (
    ACTION_CODES,
    COMMITTEE_CODES,
    CommitteeEntry,
    lookup_committee_entry,
)


def get_all_codes() -> dict[str, list[dict[str, str]]]:
    """Get all codes for reference display.

    Returns:
        {"actions": [{code, short, full}], "committees": [{code, name}]}
    """
    return {
        "actions": [
            {"code": entry.code, "short": entry.short, "full": entry.full}
            for entry in ACTION_CODES.values()
        ],
        "committees": [
            {"code": entry.code, "name": entry.name}
            for entry in COMMITTEE_CODES.values()
        ],
    }


def search_codes(query: str) -> dict[str, list[dict[str, str]]]:
    """Filter the reference tables by a case-insensitive substring.

    Args:
        query: Text to look for in codes and descriptions

    Returns:
        Same shape as ``get_all_codes``; everything if query is empty
    """
    codes = get_all_codes()
    if not query:
        return codes
    needle = query.lower()
    return {
        section: [
            row for row in rows
            if any(needle in value.lower() for value in row.values())
        ]
        for section, rows in codes.items()
    }


def get_committee_info(code: str) -> Optional[CommitteeEntry]:
    """Get information about a committee.

    Args:
        code: Committee code (e.g., "HAFC")

    Returns:
        CommitteeEntry, or None if not found
    """
    return lookup_committee_entry(code)


def list_committees() -> dict[str, str]:
    """List all known committees.

    Returns:
        Dictionary mapping committee codes to names
    """
    return {code: entry.name for code, entry in COMMITTEE_CODES.items()}


def save_reference(output_path: Path = Path("out/legislative_codes.json")) -> Path:
    """Save the code reference to a JSON file.

    Args:
        output_path: Path to save the reference to

    Returns:
        The path written
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(get_all_codes(), f, indent=2)
    return output_path
