"""
Tests for filtering, sorting, pagination and the platform badge hash.
"""
import pytest

from packages.leaderboard.models import PLATFORMS
from packages.leaderboard.ranker import (
    DEFAULTS, address_hash, collation_key, eligible, paginate, platform_for_address,
    round_half_away, select_rows, sort_rows, window_pnl,
)
from packages.leaderboard.view import to_display_row
from conftest import make_record


def row(name="t", all_time="5000", weekly="0", monthly="0", rank=1):
    return to_display_row(make_record(rank, name, all_time=all_time, weekly=weekly, monthly=monthly))


def reference_hash(s: str) -> int:
    h = 0
    for c in s:
        h = (31 * h + ord(c)) & 0xFFFFFFFF
    return h - (1 << 32) if h >= 1 << 31 else h


class TestEligibility:
    @pytest.mark.parametrize("pnl,ok", [
        ("1000", False), ("1001", True), ("-1001", True),
        ("1000.4", False), ("1000.5", True), ("-1000.5", True), ("abc", False),
    ])
    def test_threshold(self, pnl, ok):
        assert eligible(row(all_time=pnl), DEFAULTS) is ok

    def test_threshold_from_config(self):
        assert eligible(row(all_time="600"), {"min_all_time_pnl": 500})

    def test_round_half_away(self):
        assert round_half_away(2.5) == 3
        assert round_half_away(-2.5) == -3
        assert round_half_away(2.4) == 2

    def test_window_pnl_nan_is_zero(self):
        assert window_pnl(row(weekly="n/a"), "week") == 0.0


class TestSorting:
    def test_desc_by_all_time(self):
        rows = [row("a", "2000"), row("b", "9000"), row("c", "5000")]
        assert [r.displayName for r in sort_rows(rows)] == ["b", "c", "a"]

    def test_asc_by_weekly(self):
        rows = [row("a", weekly="30"), row("b", weekly="-10"), row("c", weekly="20")]
        assert [r.displayName for r in sort_rows(rows, "weeklyPnl", "asc")] == ["b", "c", "a"]

    def test_name_sort_treats_empty_as_anonymous(self):
        rows = [row("carol"), row(""), row("bob")]
        assert [r.displayName for r in sort_rows(rows, "name", "asc")] == ["", "bob", "carol"]

    def test_name_sort_ignores_case(self):
        rows = [row("Zed"), row("alice"), row("Bob")]
        assert [r.displayName for r in sort_rows(rows, "name", "asc")] == ["alice", "Bob", "Zed"]
        assert [r.displayName for r in sort_rows(rows, "name", "desc")] == ["Zed", "Bob", "alice"]

    def test_name_sort_accents_and_case_ties(self):
        rows = [row("Eve"), row("\u00c9mile"), row("Alice"), row("emma"), row("alice")]
        assert [r.displayName for r in sort_rows(rows, "name", "asc")] == \
            ["alice", "Alice", "\u00c9mile", "emma", "Eve"]

    def test_name_sort_does_not_depend_on_process_locale(self):
        assert collation_key("alice") < collation_key("Bob") < collation_key("zed")

    def test_unknown_field_falls_back_to_all_time(self):
        rows = [row("a", "2000"), row("b", "9000")]
        assert [r.displayName for r in sort_rows(rows, "volume", "desc")] == ["b", "a"]

    def test_stable_on_equal_keys(self):
        rows = [row("first", "3000"), row("second", "3000")]
        assert [r.displayName for r in sort_rows(rows, "allTimePnl", "desc")] == ["first", "second"]
        assert [r.displayName for r in sort_rows(rows, "allTimePnl", "asc")] == ["first", "second"]

    def test_select_filters_then_caps(self):
        rows = [row(f"t{i}", str(2000 + i)) for i in range(60)] + [row("small", "10")]
        out = select_rows(rows, DEFAULTS, "allTimePnl", "desc")
        assert len(out) == 50
        assert out[0].displayName == "t59"
        assert all(r.displayName != "small" for r in out)


class TestPagination:
    def test_pages(self):
        rows = list(range(1, 24))
        first, total, page = paginate(rows, 1, 10)
        assert first == list(range(1, 11)) and total == 3 and page == 1
        last, _, page = paginate(rows, 3, 10)
        assert last == [21, 22, 23] and page == 3

    def test_page_is_clamped(self):
        rows = list(range(23))
        assert paginate(rows, 5, 10)[2] == 3
        assert paginate(rows, 0, 10)[2] == 1
        assert paginate(rows, -4, 10)[2] == 1

    def test_empty_has_one_page(self):
        assert paginate([], 3, 10) == ([], 1, 1)


class TestPlatformBadge:
    def test_short_strings(self):
        assert address_hash("a") == 97
        assert platform_for_address("a") == "EdgeX"
        assert platform_for_address("ab") == "Hyperliquid"

    def test_matches_reference_hash_on_overflow(self):
        addr = "0x7fdafde5cfb5465924316eced2d3715494c517d1"
        assert address_hash(addr) == reference_hash(addr)
        assert platform_for_address(addr) == PLATFORMS[abs(reference_hash(addr)) % 3]

    def test_deterministic(self):
        addr = "0x45d26f28196d226c34e3b3c0d2e7b8d5e4e7c1a2"
        assert platform_for_address(addr) == platform_for_address(addr)
