from .aggregator import format_number, parse_decimal
from .models import (DisplayRow, LeaderboardDocument, LeaderboardResponse,
                     TraderRecord, WindowPerformance)

MIN_INITIAL_INVESTMENT = 50_000.0

# (all-time pnl above, share of pnl assumed to be principal); checked top-down
INVESTMENT_TIERS = (
    (100_000_000.0, 0.20),
    (50_000_000.0, 0.15),
    (10_000_000.0, 0.12),
)
BASE_SHARE = 0.08

def estimate_initial_investment(all_time_pnl: float) -> float:
    """Tiered guess at the principal behind a PnL figure, floored at 50k.

    Uses the raw (signed) value: losses fall through to the base tier and the floor.
    """
    share = BASE_SHARE
    for threshold, tier_share in INVESTMENT_TIERS:
        if all_time_pnl > threshold:
            share = tier_share
            break
    return max(all_time_pnl * share, MIN_INITIAL_INVESTMENT)

def roi(pnl: float, initial: float) -> float:
    return pnl / initial if initial > 0 else 0.0

ZERO_WINDOW = WindowPerformance(pnl="0", roi="0", vlm="0")

def to_display_row(t: TraderRecord) -> DisplayRow:
    all_time = parse_decimal(t.all_time_pnl)
    initial = estimate_initial_investment(all_time)

    def window(pnl_str: str) -> WindowPerformance:
        return WindowPerformance(pnl=pnl_str, roi=format_number(roi(parse_decimal(pnl_str), initial)), vlm="0")

    return DisplayRow(
        ethAddress=t.address,
        accountValue=t.all_time_pnl,
        windowPerformances=[
            ("day", ZERO_WINDOW),
            ("week", window(t.weekly_pnl)),
            ("month", window(t.monthly_pnl)),
            ("allTime", window(t.all_time_pnl)),
        ],
        prize=t.rank,
        displayName=t.name,
    )

def to_display_rows(doc: LeaderboardDocument) -> list[DisplayRow]:
    return [to_display_row(t) for t in doc.leaderboard.top_performers]

def to_response(doc: LeaderboardDocument) -> LeaderboardResponse:
    return LeaderboardResponse(timestamp=doc.metadata.created_at, data=to_display_rows(doc))
