import json, re
from pathlib import Path
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from packages.core.errors import MalformedDocument, UpstreamFailure
from .models import TraderRecord

_DATE_NAME = re.compile(r"^\d{4}-\d{2}-\d{2}$")

def parse_records(raw: Any) -> list[TraderRecord]:
    """Validate a JSON list of trader records; all bad indices are reported at once."""
    if not isinstance(raw, list):
        raise MalformedDocument("leaderboard input must be a JSON list of trader records")
    records, bad = [], []
    for i, entry in enumerate(raw):
        try:
            records.append(TraderRecord.model_validate(entry))
        except ValidationError:
            bad.append(i)
    if bad:
        raise MalformedDocument(f"Found {len(bad)} invalid entries in leaderboard data (indices {bad})")
    return records

class LeaderboardFileSource:
    """Trader records from a JSON file; `YYYY-MM-DD.json` names set the date."""
    def __init__(self, path: str):
        self.path = Path(path)

    @property
    def date(self) -> Optional[str]:
        stem = self.path.stem
        return stem if _DATE_NAME.match(stem) else None

    def load(self) -> list[TraderRecord]:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise MalformedDocument(f"JSON parsing failed for {self.path}: {e}") from e
        return parse_records(raw)

class LeaderboardHTTPSource:
    def __init__(self, url: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = url
        self._transport = transport

    async def fetch(self) -> list[TraderRecord]:
        try:
            async with httpx.AsyncClient(timeout=10, transport=self._transport) as h:
                r = await h.get(self.url)
                r.raise_for_status()
                raw = r.json()  # expect [{...}, ...] or {"traders": [...]}
        except (httpx.HTTPError, ValueError) as e:
            raise UpstreamFailure(f"leaderboard fetch failed: {e}") from e
        if isinstance(raw, dict):
            raw = raw.get("traders", [])
        return parse_records(raw)
