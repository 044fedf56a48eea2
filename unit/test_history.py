"""Test history normalization and legislative-day dates."""

from datetime import date, datetime, timedelta

import pytest

from nmlegis.history import (
    adapt_history_items,
    convert_actions_to_history,
    legislative_day_to_date,
    normalize_history,
    parse_history_data,
    split_day_segments,
)
from nmlegis.models import HistoryDisplayItem, HistoryFormat
from unit.fixtures.action_factory import ActionStringFactory, HistoryFactory
from unit.fixtures.date_helpers import SessionDates


class TestLegislativeDays:
    """Test legislative day to calendar date conversion."""

    def test_day_one_is_session_start(self, session_dates: SessionDates):
        start = session_dates.session_2026()
        assert legislative_day_to_date(start, 1) == start

    def test_weekend_skipped(self, session_dates: SessionDates):
        """Day 6 of a session opening on Monday is the next Monday."""
        start = session_dates.monday_start()
        assert legislative_day_to_date(start, 6) == date(2026, 1, 26)

    def test_friday_start(self, session_dates: SessionDates):
        start = session_dates.friday_start()
        assert legislative_day_to_date(start, 2) == date(2026, 1, 26)

    @pytest.mark.parametrize("day", range(1, 40))
    def test_never_lands_on_weekend_after_day_one(self, session_dates, day):
        result = legislative_day_to_date(session_dates.session_2026(), day)
        assert result.weekday() < 5

    def test_later_days_never_earlier(self, session_dates):
        start = session_dates.session_2026()
        dates = [legislative_day_to_date(start, day) for day in range(1, 30)]
        assert dates == sorted(dates)

    @pytest.mark.parametrize("start", [
        date(2026, 1, 21),
        date(2026, 1, 23),
        date(2026, 1, 24),
        date(2026, 1, 25),
    ])
    def test_matches_weekday_count(self, start):
        """Agrees with stepping one weekday at a time."""
        current = start
        for day in range(2, 400):
            current += timedelta(days=1)
            while current.weekday() >= 5:
                current += timedelta(days=1)
            assert legislative_day_to_date(start, day) == current, day

    def test_saturday_start(self):
        start = date(2026, 1, 24)
        assert legislative_day_to_date(start, 1) == start
        assert legislative_day_to_date(start, 2) == date(2026, 1, 26)

    def test_fifty_weeks_later(self, session_dates):
        assert legislative_day_to_date(session_dates.session_2026(), 251) == date(2027, 1, 6)

    @pytest.mark.parametrize("day", [4_000_000, 10**9, 10**30])
    def test_out_of_range_day_overflows(self, session_dates, day):
        with pytest.raises(OverflowError):
            legislative_day_to_date(session_dates.session_2026(), day)


class TestActionStringHistory:
    """Test converting action strings into dated history items."""

    def test_full_passage(self, action_factory: ActionStringFactory, session_dates):
        items = convert_actions_to_history(
            action_factory.full_passage(), session_dates.session_2026(), "H"
        )

        assert [item.sequence for item in items] == list(range(1, len(items) + 1))
        assert [item.date for item in items] == [
            "2026-01-21", "2026-01-21",
            "2026-01-23", "2026-01-23", "2026-01-23",
            "2026-01-27", "2026-01-27", "2026-01-27",
        ]
        assert items[0].action == "Pre-filed in House"
        assert items[4].action == "Passed House (54-2)"
        assert items[4].importance == 1
        assert items[7].action == "Passed Senate (35-3)"
        assert items[7].chamber == "S"
        assert items[5].chamber == "S"
        assert all(item.importance == 0 for item in items[:4])

    def test_dates_and_sequence_monotonic(self, session_dates):
        items = normalize_history(
            "[1] HPREF-HAFC [3] HAFC-DP-PASSED/H (54-2) [10] SJC-DP [12] PASSED/S (30-4)-SGND",
            session_dates.session_2026(),
            "H",
        )
        keys = [item.sort_key() for item in items]
        assert keys == sorted(keys)
        assert len({item.sequence for item in items}) == len(items)

    def test_no_markers_dated_at_session_start(self, session_dates):
        items = normalize_history("HAFC-DP", session_dates.session_2026(), "H")
        assert [item.date for item in items] == ["2026-01-21", "2026-01-21"]

    def test_senate_bill_starts_in_senate(self, session_dates):
        items = normalize_history("[1] SPREF-XYZZY", session_dates.session_2026(), "S")
        assert [item.chamber for item in items] == ["S", "S"]
        assert items[1].action == "XYZZY"

    def test_important_actions(self, session_dates):
        items = normalize_history(
            "[2] HJC-DNP [4] FAILED/H (10-50)", session_dates.session_2026(), "H"
        )
        assert [item.importance for item in items] == [0, 0, 1]

    def test_split_day_segments(self):
        assert split_day_segments("HPREF [1] HAFC [3] DP") == [
            (None, "HPREF"), (1, "[1] HAFC"), (3, "[3] DP"),
        ]

    def test_split_spaced_day_markers(self):
        assert split_day_segments("HPREF [ 3 ]HAFC") == [
            (None, "HPREF"), (3, "[ 3 ]HAFC"),
        ]

    def test_spaced_marker_dates_segment(self, session_dates):
        items = normalize_history(
            "[1] HPREF [ 3 ] HAFC-DP", session_dates.session_2026(), "H"
        )
        assert [item.date for item in items] == [
            "2026-01-21", "2026-01-23", "2026-01-23",
        ]

    def test_out_of_range_day_keeps_session_start(self, session_dates):
        items = normalize_history("[4000000] HAFC", session_dates.session_2026(), "H")
        assert [item.date for item in items] == ["2026-01-21"]
        assert items[0].action == "Sent to Appropriations & Finance"

    def test_out_of_range_day_keeps_previous_date(self, session_dates):
        items = normalize_history(
            "[3] HAFC [4000000] DP", session_dates.session_2026(), "H"
        )
        assert [item.date for item in items] == ["2026-01-23", "2026-01-23"]
        assert [item.sequence for item in items] == [1, 2]


class TestLegiscanHistory:
    """Test adapting already-dated history arrays."""

    def test_items_kept_in_order(self, history_factory: HistoryFactory, session_dates):
        history = history_factory.create_history(
            ("2026-01-21", "Sent to Judiciary", "H"),
            ("2026-02-03", "Passed House (60-8)", "H"),
            ("2026-02-10", "Sent to Finance", "S"),
        )
        items = normalize_history(history, session_dates.session_2026(), "H")
        assert [item.to_dict() for item in items] == history

    def test_missing_sequence_uses_position(self):
        items = adapt_history_items([
            {"date": "2026-02-01", "action": "Passed House", "chamber": 1},
            {"calendar_day": "2026-02-03", "action": "Sent to Finance", "chamber": "S"},
            {"action": "No date here"},
        ], "H")
        assert len(items) == 2
        assert items[0].chamber == "H"
        assert items[0].sequence == 1
        assert items[1].date == "2026-02-03"
        assert items[1].sequence == 2
        assert items[1].chamber_id == 2

    def test_unusable_sequence_uses_position(self):
        items = adapt_history_items([
            {"date": "2026-02-01", "action": "a", "sequence": "abc"},
            {"date": "2026-02-01", "action": "b", "sequence": "1.5"},
            {"date": "2026-02-01", "action": "c", "sequence": None},
            {"date": "2026-02-01", "action": "d", "sequence": [4]},
            {"date": "2026-02-01", "action": "e", "sequence": "9"},
        ], "H")
        assert [item.sequence for item in items] == [1, 2, 3, 4, 9]

    def test_chamber_id_fallback(self):
        items = adapt_history_items(
            [{"date": "2026-02-01", "action": "x", "chamber_id": 2}], "H"
        )
        assert items[0].chamber == "S"

    def test_display_items_passed_through(self):
        item = HistoryDisplayItem(date="2026-02-01", action="x", chamber="S")
        assert adapt_history_items([item], "H") == [item]


class TestFormatDetection:
    """Test detecting the stored history format."""

    def test_action_string(self, session_dates):
        result = parse_history_data("[1] HPREF", session_dates.session_2026(), "H")
        assert result.format == HistoryFormat.NMLEGIS
        assert result.parsed is not None
        assert result.raw_actions == "[1] HPREF"
        assert len(result.items) == 1

    def test_actions_object(self, session_dates):
        result = parse_history_data(
            {"actions": "[1] HPREF-HAFC"}, session_dates.session_2026(), "H"
        )
        assert result.format == HistoryFormat.NMLEGIS
        assert len(result.items) == 2

    def test_list(self, history_factory, session_dates):
        history = [history_factory.create_item("2026-01-21", "Sent to Rules", "S")]
        result = parse_history_data(history, session_dates.session_2026(), "S")
        assert result.format == HistoryFormat.LEGISCAN
        assert result.parsed is None

    @pytest.mark.parametrize("history", [None, "", [], {}, "   ", "``", 42, {"actions": 5}])
    def test_empty_or_unknown(self, history, session_dates):
        result = parse_history_data(history, session_dates.session_2026(), "H")
        assert result.items == []
        assert result.format == HistoryFormat.UNKNOWN

    def test_datetime_start_accepted(self):
        items = normalize_history("HAFC", datetime(2026, 1, 21, 9, 30), "H")
        assert items[0].date == "2026-01-21"


class TestArgumentErrors:
    """Caller contract violations raise."""

    @pytest.mark.parametrize("chamber", ["X", "h", "", None, "House"])
    def test_bad_chamber(self, chamber, session_dates):
        with pytest.raises(ValueError):
            normalize_history("HAFC", session_dates.session_2026(), chamber)

    @pytest.mark.parametrize("start", ["2026-01-21", None, 20260121])
    def test_bad_session_start(self, start):
        with pytest.raises(TypeError):
            normalize_history("HAFC", start, "H")

    def test_bad_chamber_with_empty_history(self, session_dates):
        with pytest.raises(ValueError):
            normalize_history(None, session_dates.session_2026(), "Q")
