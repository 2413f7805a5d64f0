from pydantic import BaseModel, ConfigDict, Field
from typing import Literal, Optional

Platform = Literal["Hyperliquid", "EdgeX", "Avantis"]
PLATFORMS: tuple[str, ...] = ("Hyperliquid", "EdgeX", "Avantis")

TimeWindow = Literal["day", "week", "month", "allTime"]
WINDOWS: tuple[str, ...] = ("day", "week", "month", "allTime")

class TraderRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rank: int = Field(ge=1)
    name: str
    address: str
    platform: Platform
    all_time_pnl: str = Field(alias="allTimePnl")
    weekly_pnl: str = Field(alias="weeklyPnl")
    monthly_pnl: str = Field(alias="monthlyPnl")

class LeaderboardSummary(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: str
    timestamp: int
    total_traders: int = Field(alias="totalTraders")
    top_performers: list[TraderRecord] = Field(alias="topPerformers")
    platform_distribution: dict[str, int] = Field(alias="platformDistribution")
    total_all_time_pnl: str = Field(alias="totalAllTimePnl")
    total_weekly_pnl: str = Field(alias="totalWeeklyPnl")
    total_monthly_pnl: str = Field(alias="totalMonthlyPnl")

class LeaderboardHighlights(BaseModel):
    model_config = ConfigDict(frozen=True)

    top_performer: TraderRecord
    biggest_weekly_gain: TraderRecord
    biggest_monthly_gain: TraderRecord
    platform_leaders: dict[str, TraderRecord]
    total_value_tracked: str
    entries_count: int

class LeaderboardMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    entity_type: str
    version: str
    created_at: str
    stored_by: str
    integration: str
    data_source: str

class LeaderboardDocument(BaseModel):
    """The persisted blob: metadata + summary + highlights."""
    model_config = ConfigDict(frozen=True)

    metadata: LeaderboardMetadata
    leaderboard: LeaderboardSummary
    summary: LeaderboardHighlights

    @property
    def is_complete(self) -> bool:
        return self.leaderboard.total_traders == len(self.leaderboard.top_performers)

class WindowPerformance(BaseModel):
    pnl: str
    roi: str
    vlm: str

class DisplayRow(BaseModel):
    ethAddress: str
    accountValue: str
    windowPerformances: list[tuple[TimeWindow, WindowPerformance]]
    prize: int
    displayName: str

class LeaderboardResponse(BaseModel):
    timestamp: str
    data: list[DisplayRow]

class RankedRow(DisplayRow):
    rank: int
    platform: str

class LeaderboardPage(BaseModel):
    timestamp: str
    page: int
    total_pages: int
    total_rows: int
    sort_by: str
    direction: Literal["asc", "desc"]
    rows: list[RankedRow]
    date: Optional[str] = None
