"""Test status tracking and current-location helpers."""

import pytest

from nmlegis.history import normalize_history
from nmlegis.models import BillStatus, HistoryDisplayItem
from nmlegis.status import (
    StatusTracker,
    get_current_bill_location,
    get_current_committee_from_history,
    get_most_recent_action,
    legiscan_status_code,
    legiscan_status_label,
)
from unit.fixtures.action_factory import HistoryFactory


class TestStatusTracker:
    """Test the status state machine."""

    def test_starts_prefiled(self):
        assert StatusTracker().status == BillStatus.PREFILED

    @pytest.mark.parametrize("terminal", [
        BillStatus.SIGNED, BillStatus.VETOED, BillStatus.FAILED, BillStatus.TABLED,
    ])
    def test_terminal_is_sticky(self, terminal):
        tracker = StatusTracker()
        assert tracker.transition(terminal)
        assert not tracker.transition(BillStatus.IN_COMMITTEE)
        tracker.record_passage("H")
        assert tracker.status == terminal

    def test_passage_in_both_chambers(self):
        tracker = StatusTracker()
        tracker.record_passage("H")
        assert tracker.status == BillStatus.PASSED_ONE
        tracker.record_passage("H")
        assert tracker.status == BillStatus.PASSED_ONE
        tracker.record_passage("S")
        assert tracker.status == BillStatus.PASSED_BOTH

    def test_can_return_to_committee(self):
        tracker = StatusTracker()
        tracker.record_passage("S")
        tracker.transition(BillStatus.IN_COMMITTEE)
        assert tracker.status == BillStatus.IN_COMMITTEE
        tracker.record_passage("H")
        assert tracker.status == BillStatus.PASSED_BOTH


class TestLegiscanCodes:
    """Test mapping onto LegiScan progress codes."""

    @pytest.mark.parametrize("status,code,label", [
        (BillStatus.IN_COMMITTEE, 1, "In Committee"),
        (BillStatus.PASSED_ONE, 2, "Passed One Chamber"),
        (BillStatus.PASSED_BOTH, 3, "Passed Both Chambers"),
        (BillStatus.SIGNED, 4, "Signed Into Law"),
        (BillStatus.VETOED, 5, "Vetoed"),
        (BillStatus.TABLED, 6, "Did Not Pass"),
    ])
    def test_mapping(self, status, code, label):
        assert legiscan_status_code(status) == code
        assert legiscan_status_label(status) == label


class TestHistoryQueries:
    """Test reading stored history."""

    def test_most_recent_action(self, history_factory: HistoryFactory):
        history = [
            history_factory.create_item("2026-02-01", "Second", sequence=2),
            history_factory.create_item("2026-02-03", "Last", sequence=1),
            history_factory.create_item("2026-02-01", "First", sequence=1),
        ]
        assert get_most_recent_action(history)["action"] == "Last"
        assert get_most_recent_action([]) is None

    def test_most_recent_action_objects(self):
        items = [
            HistoryDisplayItem("2026-02-01", "b", "H", sequence=2),
            HistoryDisplayItem("2026-02-01", "a", "H", sequence=1),
        ]
        assert get_most_recent_action(items).action == "b"

    def test_current_committee(self, history_factory: HistoryFactory):
        history = history_factory.create_history(
            ("2026-01-21", "Sent to Judiciary", "H"),
            ("2026-01-23", "Sent to Appropriations & Finance", "H"),
        )
        assert get_current_committee_from_history(history) == "Appropriations & Finance"

    def test_current_committee_cleared_by_passage(self, history_factory):
        history = history_factory.create_history(
            ("2026-01-21", "Sent to Judiciary", "H"),
            ("2026-01-23", "Passed House (54-2)", "H"),
        )
        assert get_current_committee_from_history(history) is None
        assert get_current_committee_from_history(None) is None


class TestBillLocation:
    """Test describing where a bill currently is."""

    def test_empty(self):
        location = get_current_bill_location([], "H")
        assert location.status == "unknown"
        assert location.location == "Waiting for first committee assignment"

    def test_in_committee(self, session_dates):
        items = normalize_history("[1] HPREF-HAFC", session_dates.session_2026(), "H")
        location = get_current_bill_location(items, "H")
        assert location.status == "in_committee"
        assert location.committee == "Appropriations & Finance"
        assert location.location == "Currently in Appropriations & Finance"
        assert location.last_date == "2026-01-21"

    def test_passed_house_now_in_senate(self, session_dates):
        items = normalize_history(
            "[1] HAFC-DP-PASSED/H (54-2) [4] SFC", session_dates.session_2026(), "H"
        )
        location = get_current_bill_location(items, "H")
        assert location.status == "passed_house"
        assert location.location == "Passed the House, now in Finance"

    def test_passed_senate_heading_to_house(self, session_dates):
        items = normalize_history(
            "[2] SJC-DP-PASSED/S (30-4)", session_dates.session_2026(), "S"
        )
        location = get_current_bill_location(items, "S")
        assert location.status == "passed_senate"
        assert location.location == "Passed the Senate, heading to House"

    @pytest.mark.parametrize("actions,status", [
        ("[1] PASSED/H (54-2) [9] PASSED/S (30-4)", "passed_both"),
        ("[1] PASSED/H (54-2) [9] PASSED/S (30-4) [30] SGND", "signed"),
        ("[1] PASSED/H (54-2) [9] PASSED/S (30-4) [30] VETO", "vetoed"),
        ("[1] HJC-DNP", "failed"),
        ("[1] HJC-TBLD INDEF", "failed"),
    ])
    def test_outcomes(self, actions, status, session_dates):
        items = normalize_history(actions, session_dates.session_2026(), "H")
        assert get_current_bill_location(items, "H").status == status
