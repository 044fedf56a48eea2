"""Test display expansion of action text."""

import pytest

from nmlegis.display import expand_action_text, is_human_readable
from nmlegis.history import normalize_history
from nmlegis.models import SegmentType


class TestExpansion:
    """Test expanding raw action codes into segments."""

    def test_committee_and_report(self):
        result = expand_action_text("HAFC-DP")
        assert [s.type for s in result.segments] == [
            SegmentType.COMMITTEE, SegmentType.ACTION,
        ]
        committee, report = result.segments
        assert committee.expanded == "Appropriations & Finance"
        assert committee.tooltip == "HAFC: Appropriations & Finance"
        assert report.original == "DP"
        assert report.expanded == "Committee voted Do Pass"
        assert report.tooltip == "DP: DO PASS committee report adopted"
        assert result.expanded == "Appropriations & Finance → Committee voted Do Pass"

    def test_day_and_vote(self):
        result = expand_action_text("[3] PASSED/H (54-2)")
        day, vote = result.segments
        assert day.type == SegmentType.DAY
        assert day.expanded == "Day 3"
        assert day.tooltip == "Legislative Day 3"
        assert vote.type == SegmentType.VOTE
        assert vote.expanded == "Passed House (54-2)"
        assert vote.tooltip == "Passed in the House with vote 54-2"

    def test_passage_without_vote_is_action(self):
        segment = expand_action_text("PASSED/S").segments[0]
        assert segment.type == SegmentType.ACTION
        assert segment.expanded == "Passed Senate"

    def test_referral(self):
        segment = expand_action_text("SRC/SFC").segments[0]
        assert segment.type == SegmentType.REFERRAL
        assert segment.expanded == "Referrals: Rules, Finance"
        assert segment.tooltip == "Referred to committees: Rules, Finance"

    def test_signed_tooltip(self):
        segment = expand_action_text("SGND(Mar.4)Ch.9").segments[0]
        assert segment.expanded == "Signed into law on Mar.4, Chapter 9"
        assert segment.tooltip == "Signed by the Governor on Mar.4, became Chapter 9"

    def test_standalone_vote(self):
        segment = expand_action_text("HAFC-(8-2)").segments[1]
        assert segment.type == SegmentType.VOTE
        assert segment.expanded == "(8-2)"
        assert segment.tooltip == "Vote: 8-2"

    def test_unknown_token_is_text(self):
        segment = expand_action_text("XYZZY123").segments[0]
        assert segment.type == SegmentType.TEXT
        assert segment.expanded == "XYZZY123"
        assert segment.tooltip is None

    def test_to_dict(self):
        data = expand_action_text("HJC").to_dict()
        assert data == {
            "original": "HJC",
            "segments": [{
                "original": "HJC",
                "expanded": "Judiciary",
                "type": "committee",
                "tooltip": "HJC: Judiciary",
            }],
            "expanded": "Judiciary",
        }


class TestHumanReadable:
    """Already-readable text comes back unchanged."""

    @pytest.mark.parametrize("text", [
        "Sent to Appropriations & Finance",
        "Passed House (54-2)",
        "Committee voted Do Pass, as amended",
        "Signed into law on Mar.4, Chapter 9",
        "Pocket vetoed by Governor",
        "2 floor amendments adopted",
        "Printed",
    ])
    def test_single_text_segment(self, text):
        result = expand_action_text(text)
        assert len(result.segments) == 1
        assert result.segments[0].type == SegmentType.TEXT
        assert result.segments[0].expanded == text
        assert result.expanded == text

    @pytest.mark.parametrize("text", ["HAFC-DP", "DP/a", "[1] HPREF", "T"])
    def test_codes_are_not_readable(self, text):
        assert not is_human_readable(text)

    def test_normalized_history_round_trip(self, action_factory, session_dates):
        """Every action written by the normalizer expands to itself."""
        raw = " ".join([
            action_factory.full_passage(),
            "[7] SJC-DP/a-CS-fl/aa-s/cncrd-T-CC-w/o rec-HJC.-prntd-tbld",
            "[8] SFC-DNP-API-FAILED/S (1-30)-SGND(Mar.4)Ch.9-PKVT-VETO-TBLD INDEF",
            "[9] HPREF-SPREF-SRC/SFC",
        ])
        items = normalize_history(raw, session_dates.session_2026(), "H")
        assert len(items) > 20
        for item in items:
            result = expand_action_text(item.action)
            assert [s.type for s in result.segments] == [SegmentType.TEXT], item.action
            assert result.expanded == item.action


class TestTotality:
    """Expansion never raises."""

    @pytest.mark.parametrize("text", [
        "", None, "   ", "-", "[", "(((", "PASSED/H (54-", "[1] [2]", "`HAFC`",
    ])
    def test_odd_input(self, text):
        result = expand_action_text(text)
        assert isinstance(result.expanded, str)

    def test_empty_has_no_segments(self):
        assert expand_action_text("").segments == []
