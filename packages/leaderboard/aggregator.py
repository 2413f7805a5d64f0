"""Turn an ordered list of trader records into a summary and its highlights.

Input order is trusted: `top_performer` is the first record, not the best one.
Callers that want "best" must sort by all-time PnL first.
"""
import math
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, Sequence

from .models import LeaderboardHighlights, LeaderboardSummary, TraderRecord

def parse_decimal(value) -> float:
    """float(value), or NaN when the value is not numeric. Never raises."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan

def format_number(x: float) -> str:
    """Stringify a float the way the dashboard (JavaScript) does."""
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "Infinity" if x > 0 else "-Infinity"
    s = repr(x)
    if x == int(x) and abs(x) < 1e21:
        # past 1e16 repr switches to exponent form; keep its shortest digits
        return format(Decimal(s), "f") if "e" in s else str(int(x))
    if "e" not in s:
        return s
    if 1e-6 <= abs(x) < 1e21:
        return format(Decimal(s), "f")
    mant, exp = s.split("e")
    sign = "-" if exp.startswith("-") else "+"
    return f"{mant}e{sign}{int(exp.lstrip('+-'))}"

def _pnl(t: TraderRecord, field: str) -> float:
    return parse_decimal(getattr(t, field))

def summarize(records: Sequence[TraderRecord], date: Optional[str] = None,
              now: Optional[datetime] = None) -> LeaderboardSummary:
    now = now or datetime.now(timezone.utc)
    dist: dict[str, int] = {}
    total_all = total_week = total_month = 0.0
    for t in records:
        dist[t.platform] = dist.get(t.platform, 0) + 1
        total_all += _pnl(t, "all_time_pnl")
        total_week += _pnl(t, "weekly_pnl")
        total_month += _pnl(t, "monthly_pnl")
    return LeaderboardSummary(
        date=date or now.date().isoformat(),
        timestamp=int(now.timestamp() * 1000),
        total_traders=len(records),
        top_performers=list(records),
        platform_distribution=dist,
        total_all_time_pnl=format_number(total_all),
        total_weekly_pnl=format_number(total_week),
        total_monthly_pnl=format_number(total_month),
    )

def _biggest(records: Sequence[TraderRecord], field: str) -> TraderRecord:
    best = records[0]
    for t in records[1:]:
        # strict > keeps the earliest of equal maxima
        if _pnl(t, field) > _pnl(best, field):
            best = t
    return best

def platform_leaders(records: Sequence[TraderRecord]) -> dict[str, TraderRecord]:
    leaders: dict[str, TraderRecord] = {}
    for t in records:
        cur = leaders.get(t.platform)
        if cur is None or _pnl(t, "all_time_pnl") > _pnl(cur, "all_time_pnl"):
            leaders[t.platform] = t
    return leaders

def highlight(records: Sequence[TraderRecord]) -> LeaderboardHighlights:
    if not records:
        raise ValueError("cannot highlight an empty leaderboard")
    total_value = sum((_pnl(t, "all_time_pnl") for t in records), 0.0)
    return LeaderboardHighlights(
        top_performer=records[0],
        biggest_weekly_gain=_biggest(records, "weekly_pnl"),
        biggest_monthly_gain=_biggest(records, "monthly_pnl"),
        platform_leaders=platform_leaders(records),
        total_value_tracked=format_number(total_value),
        entries_count=len(records),
    )
