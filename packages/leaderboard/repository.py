"""Leaderboard documents <-> annotated entities in the entity store.

Writes are append-only: every save creates a new entity. Reads pick the
document with the most traders among those tagged with the requested date,
trying the owner's namespaced type first and the shared type second.
"""
import json, math
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence, Tuple

import structlog
from pydantic import ValidationError

from packages.config.constants import (
    DATA_SOURCE, DATA_SOURCE_TAG, ENTITY_TYPE, ENTITY_VERSION, GENERIC_TYPE,
    INTEGRATION, INTEGRATION_TAG, LEADERBOARD_BTL,
)
from packages.core.errors import MalformedDocument, NotFound
from packages.golem_sdk_adapter.query import build_query
from packages.golem_sdk_adapter.types import Annotation, EntityCreate, StoredEntity
from .aggregator import highlight, parse_decimal, summarize
from .models import LeaderboardDocument, LeaderboardMetadata, TraderRecord

log = structlog.get_logger()

def namespaced_type(owner_address: str) -> str:
    return f"leaderboard_{owner_address[2:10]}"

def build_document(records: Sequence[TraderRecord], owner: str, date: Optional[str] = None,
                   now: Optional[datetime] = None) -> LeaderboardDocument:
    now = now or datetime.now(timezone.utc)
    return LeaderboardDocument(
        metadata=LeaderboardMetadata(
            entity_type=ENTITY_TYPE,
            version=ENTITY_VERSION,
            created_at=now.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            stored_by=owner,
            integration=INTEGRATION,
            data_source=DATA_SOURCE,
        ),
        leaderboard=summarize(records, date=date, now=now),
        summary=highlight(records),
    )

def encode_document(doc: LeaderboardDocument) -> bytes:
    return json.dumps(doc.model_dump(by_alias=True), indent=2).encode("utf-8")

def cents(value: str) -> Optional[int]:
    """floor(value * 100); None when it cannot be stored as a numeric annotation."""
    x = parse_decimal(value) * 100
    if not math.isfinite(x) or x < 0:
        return None
    return math.floor(x)

def build_annotations(doc: LeaderboardDocument, owner: str, btl: int = LEADERBOARD_BTL
                      ) -> Tuple[List[Annotation], List[Annotation]]:
    lb, s = doc.leaderboard, doc.summary
    strings = [
        Annotation(key="type", value=namespaced_type(owner)),
        Annotation(key="date", value=lb.date),
        Annotation(key="stored_by", value=owner),
        Annotation(key="top_performer", value=s.top_performer.name),
        Annotation(key="top_performer_platform", value=s.top_performer.platform),
        Annotation(key="top_performer_address", value=s.top_performer.address),
        Annotation(key="biggest_weekly_trader", value=s.biggest_weekly_gain.name),
        Annotation(key="biggest_monthly_trader", value=s.biggest_monthly_gain.name),
        Annotation(key="integration", value=INTEGRATION_TAG),
        Annotation(key="data_source", value=DATA_SOURCE_TAG),
        Annotation(key="platforms", value=",".join(lb.platform_distribution)),
        Annotation(key="entity_version", value=ENTITY_VERSION),
        Annotation(key="leaderboard_type", value="pnl_rankings"),
    ]
    numeric = [
        ("timestamp", lb.timestamp),
        ("total_traders", lb.total_traders),
        ("top_all_time_cents", cents(s.top_performer.all_time_pnl)),
        ("top_weekly_cents", cents(s.biggest_weekly_gain.weekly_pnl)),
        ("top_monthly_cents", cents(s.biggest_monthly_gain.monthly_pnl)),
        ("total_value_cents", cents(s.total_value_tracked)),
        ("platform_count", len(lb.platform_distribution)),
        ("btl_blocks", btl),
        ("rank_1_all_time", cents(lb.top_performers[0].all_time_pnl)),
    ]
    # zero totals are not annotated
    if parse_decimal(lb.total_weekly_pnl) != 0:
        numeric.append(("total_weekly_cents", cents(lb.total_weekly_pnl)))
    if parse_decimal(lb.total_monthly_pnl) != 0:
        numeric.append(("total_monthly_cents", cents(lb.total_monthly_pnl)))
    numbers = [Annotation(key=k, value=v) for k, v in numeric if v is not None]
    return strings, numbers

def decode_document(raw: bytes) -> LeaderboardDocument:
    try:
        return LeaderboardDocument.model_validate_json(raw)
    except ValidationError as e:
        raise MalformedDocument(f"invalid leaderboard document: {e.error_count()} error(s)") from e
    except (UnicodeDecodeError, ValueError) as e:
        raise MalformedDocument(f"undecodable leaderboard document: {e}") from e

def decode_all(entities: Iterable[StoredEntity]) -> List[Tuple[StoredEntity, LeaderboardDocument]]:
    out = []
    for e in entities:
        try:
            out.append((e, decode_document(e.storage_value)))
        except MalformedDocument as err:
            log.warning("Skipping malformed leaderboard entity", entity_key=e.entity_key, err=str(err))
    return out

def _largest(docs: Iterable[LeaderboardDocument]) -> Optional[LeaderboardDocument]:
    best = None
    for doc in docs:
        if best is None or doc.leaderboard.total_traders > best.leaderboard.total_traders:
            best = doc
    return best

def select_best(entities: Iterable[StoredEntity]) -> Optional[LeaderboardDocument]:
    """Largest `totalTraders` among decodable documents; first seen wins ties."""
    return _largest(doc for _, doc in decode_all(entities))

class LeaderboardRepository:
    def __init__(self, store, owner_address: str, btl: int = LEADERBOARD_BTL):
        self.store = store
        self.owner = owner_address
        self.btl = btl

    @property
    def unique_type(self) -> str:
        return namespaced_type(self.owner)

    async def save(self, records: Sequence[TraderRecord], date: Optional[str] = None
                   ) -> Tuple[str, LeaderboardDocument]:
        doc = build_document(records, self.owner, date=date)
        strings, numbers = build_annotations(doc, self.owner, self.btl)
        entity = EntityCreate(data=encode_document(doc), btl=self.btl,
                              string_annotations=strings, numeric_annotations=numbers)
        created = await self.store.store([entity])
        key = created[0].entity_key
        log.info("Leaderboard stored", entity_key=key, date=doc.leaderboard.date,
                 traders=doc.leaderboard.total_traders, bytes=len(entity.data),
                 expiration_block=created[0].expiration_block)
        return key, doc

    async def find(self, date: str) -> List[StoredEntity]:
        """Entities for `date` under the owner's type, else under the shared type."""
        for type_ in (self.unique_type, GENERIC_TYPE):
            query = build_query(type=type_, date=date)
            results = await self.store.query(query)
            log.info("Leaderboard query", query=query, results=len(results))
            if results:
                return results
        return []

    async def latest(self, date: str, require_complete: bool = False) -> LeaderboardDocument:
        entities = await self.find(date)
        if not entities:
            raise NotFound(date)
        docs = [d for _, d in decode_all(entities)]
        if require_complete:
            docs = [d for d in docs if d.is_complete]
        best = _largest(docs)
        if best is None:
            raise NotFound(date, "No valid leaderboard data found")
        return best

    async def available_dates(self) -> List[str]:
        dates = set()
        for type_ in (self.unique_type, GENERIC_TYPE):
            for _, doc in decode_all(await self.store.query(build_query(type=type_))):
                dates.add(doc.leaderboard.date)
        return sorted(dates)
