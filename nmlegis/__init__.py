"""NM Legislature action-code parsing and history normalization.

This package turns the compact action strings published by the New Mexico
Legislature into typed actions, a bill status, and dated history items.

Main components:
- codes: Action and committee code tables
- models: Core data structures (ParsedAction, HistoryDisplayItem, ...)
- rules: Ordered token classification rules
- parser: Action-string tokenizer and parser
- status: Status state machine and current-location helpers
- history: History normalization for both source formats
- display: Display expansion of action text
- registry: Code reference lookup
- bills: Bill name helpers
"""

from nmlegis.display import expand_action_text
from nmlegis.history import normalize_history, parse_history_data
from nmlegis.models import (
    ActionType,
    BillStatus,
    HistoryDisplayItem,
    ParsedAction,
    ParsedBillActions,
)
from nmlegis.parser import ActionStringParser, parse_action_string
from nmlegis.registry import get_all_codes

__all__ = [
    "ActionType",
    "BillStatus",
    "HistoryDisplayItem",
    "ParsedAction",
    "ParsedBillActions",
    "ActionStringParser",
    "parse_action_string",
    "normalize_history",
    "parse_history_data",
    "expand_action_text",
    "get_all_codes",
]

__version__ = "0.1.0"
