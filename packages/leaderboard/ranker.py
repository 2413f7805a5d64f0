import math, unicodedata
from typing import Sequence

from .aggregator import parse_decimal
from .models import PLATFORMS, DisplayRow

SORT_FIELDS = {"name": None, "weeklyPnl": "week", "monthlyPnl": "month", "allTimePnl": "allTime"}

DEFAULTS = {
    "min_all_time_pnl": 1000,
    "max_rows": 50,
    "page_size": 10,
    "default_sort": "allTimePnl",
    "default_direction": "desc",
}

def window_pnl(row: DisplayRow, window: str) -> float:
    for name, perf in row.windowPerformances:
        if name == window:
            v = parse_decimal(perf.pnl)
            return 0.0 if math.isnan(v) else v
    return 0.0

def round_half_away(x: float) -> int:
    return int(math.copysign(math.floor(abs(x) + 0.5), x))

def eligible(row: DisplayRow, cfg: dict) -> bool:
    pnl = window_pnl(row, "allTime")
    return round_half_away(abs(pnl)) > cfg.get("min_all_time_pnl", DEFAULTS["min_all_time_pnl"])

def collation_key(name: str):
    """Case- and accent-insensitive first, then accents, then lowercase before uppercase."""
    folded = name.casefold()
    base = "".join(c for c in unicodedata.normalize("NFKD", folded) if not unicodedata.combining(c))
    return base, folded, name.swapcase()

def sort_key(row: DisplayRow, sort_by: str):
    if sort_by == "name":
        return collation_key(row.displayName or "Anonymous")
    return window_pnl(row, SORT_FIELDS.get(sort_by) or "allTime")

def sort_rows(rows: Sequence[DisplayRow], sort_by: str = "allTimePnl", direction: str = "desc") -> list[DisplayRow]:
    # unknown fields rank by all-time pnl; sorted() is stable in both directions
    field = sort_by if sort_by in SORT_FIELDS else "allTimePnl"
    return sorted(rows, key=lambda r: sort_key(r, field), reverse=(direction == "desc"))

def select_rows(rows: Sequence[DisplayRow], cfg: dict, sort_by: str, direction: str) -> list[DisplayRow]:
    pool = [r for r in rows if eligible(r, cfg)]
    return sort_rows(pool, sort_by, direction)[: cfg.get("max_rows", DEFAULTS["max_rows"])]

def paginate(rows: Sequence[DisplayRow], page: int, page_size: int = DEFAULTS["page_size"]):
    """Return (page_rows, total_pages, page) with page clamped to [1, total_pages]."""
    total_pages = max(1, math.ceil(len(rows) / page_size))
    page = min(max(1, page), total_pages)
    start = (page - 1) * page_size
    return list(rows[start:start + page_size]), total_pages, page

def _to_int32(x: int) -> int:
    x &= 0xFFFFFFFF
    return x - 0x100000000 if x & 0x80000000 else x

def address_hash(address: str) -> int:
    """32-bit signed `(h << 5) - h + code` string hash, JS-compatible (UTF-16 units)."""
    h = 0
    data = address.encode("utf-16-le")
    for i in range(0, len(data), 2):
        code = data[i] | (data[i + 1] << 8)
        h = _to_int32(_to_int32(h << 5) - h + code)
    return h

def platform_for_address(address: str, platforms: Sequence[str] = PLATFORMS) -> str:
    """Cosmetic platform badge; not the trader's real platform."""
    return platforms[abs(address_hash(address)) % len(platforms)]
