"""Error kinds surfaced by the leaderboard packages."""


class LeaderboardError(Exception):
    """Base class for leaderboard errors."""


class MissingCredential(LeaderboardError):
    """A required secret (e.g. PRIVATE_KEY) is absent or unusable."""


class NotFound(LeaderboardError):
    """No stored leaderboard matches the requested date."""

    def __init__(self, date: str, message: str = "") -> None:
        super().__init__(message or f"No leaderboard data found for date: {date}")
        self.date = date


class MalformedDocument(LeaderboardError):
    """A stored or loaded document failed to decode or validate."""


class UpstreamFailure(LeaderboardError):
    """An external fetch or store call failed."""
