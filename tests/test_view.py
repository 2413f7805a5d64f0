"""
Tests for mapping stored records to dashboard display rows.
"""
import math
from datetime import datetime, timezone

from packages.leaderboard.repository import build_document
from packages.leaderboard.view import (
    MIN_INITIAL_INVESTMENT, ZERO_WINDOW, estimate_initial_investment, roi,
    to_display_row, to_response,
)
from conftest import OWNER, make_record


class TestInvestmentEstimate:
    def test_tiers(self):
        assert estimate_initial_investment(200_000_000) == 40_000_000
        assert estimate_initial_investment(60_000_000) == 9_000_000
        assert estimate_initial_investment(20_000_000) == 2_400_000
        assert estimate_initial_investment(1_000_000) == 80_000

    def test_tier_boundaries_are_exclusive(self):
        # exactly 1e8 is not "> 1e8", falls to the 0.15 tier
        assert estimate_initial_investment(100_000_000) == 15_000_000

    def test_floor(self):
        assert estimate_initial_investment(0) == MIN_INITIAL_INVESTMENT
        assert estimate_initial_investment(-5_000_000) == MIN_INITIAL_INVESTMENT
        assert estimate_initial_investment(100_000) == MIN_INITIAL_INVESTMENT

    def test_roi_guards_non_positive_estimate(self):
        assert roi(10, 0) == 0.0
        assert roi(10, math.nan) == 0.0


class TestDisplayRow:
    def test_large_trader(self):
        row = to_display_row(make_record(3, "whale", address="0xabc", all_time="200000000",
                                         weekly="4000000", monthly="-8000000"))
        assert row.ethAddress == "0xabc"
        assert row.accountValue == "200000000"
        assert row.prize == 3
        assert row.displayName == "whale"
        windows = dict(row.windowPerformances)
        assert windows["allTime"].roi == "5"
        assert windows["week"].roi == "0.1"
        assert windows["month"].roi == "-0.2"
        assert windows["month"].pnl == "-8000000"

    def test_window_order_and_day_zeros(self):
        row = to_display_row(make_record())
        assert [w for w, _ in row.windowPerformances] == ["day", "week", "month", "allTime"]
        assert row.windowPerformances[0][1] == ZERO_WINDOW
        assert all(p.vlm == "0" for _, p in row.windowPerformances)

    def test_zero_pnl_uses_floor(self):
        row = to_display_row(make_record(all_time="0", weekly="0", monthly="0"))
        assert dict(row.windowPerformances)["allTime"].roi == "0"

    def test_pnl_strings_pass_through(self):
        row = to_display_row(make_record(weekly="7112015.27"))
        assert dict(row.windowPerformances)["week"].pnl == "7112015.27"


class TestResponse:
    def test_timestamp_is_document_creation_time(self, records):
        now = datetime(2025, 9, 7, 8, 0, 1, 250000, tzinfo=timezone.utc)
        doc = build_document(records, OWNER, now=now)
        resp = to_response(doc)
        assert resp.timestamp == "2025-09-07T08:00:01.250Z"
        assert [r.displayName for r in resp.data] == [r.name for r in records]
