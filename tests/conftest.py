import pytest

from packages.golem_sdk_adapter.memory import MemoryEntityStore
from packages.golem_sdk_adapter.types import Annotation, EntityCreate
from packages.leaderboard.models import TraderRecord
from packages.leaderboard.repository import LeaderboardRepository, encode_document

OWNER = "0xabcdef0123456789abcdef0123456789abcdef01"


def make_record(rank=1, name="trader", address=None, platform="Hyperliquid",
                all_time="1000000", weekly="1000", monthly="5000"):
    return TraderRecord(
        rank=rank,
        name=name,
        address=address or f"0x{rank:040x}",
        platform=platform,
        allTimePnl=all_time,
        weeklyPnl=weekly,
        monthlyPnl=monthly,
    )


async def put_document(store, doc, type_, date):
    """Store a document under an explicit type/date, bypassing the repository."""
    return await store.store([EntityCreate(
        data=encode_document(doc),
        btl=100,
        string_annotations=[Annotation(key="type", value=type_), Annotation(key="date", value=date)],
    )])


@pytest.fixture
def records():
    return [
        make_record(1, "alpha", platform="Avantis", all_time="309103011.9973880053", weekly="7112015.27", monthly="42061092.10"),
        make_record(2, "bravo", platform="Avantis", all_time="166149989.78", weekly="8502710.93", monthly="18789503.14"),
        make_record(3, "charlie", platform="EdgeX", all_time="147523455.48", weekly="3504427.81", monthly="15248986.07"),
        make_record(4, "delta", platform="Hyperliquid", all_time="112799229.84", weekly="4634088.46", monthly="12329367.05"),
        make_record(5, "echo", platform="Hyperliquid", all_time="103786039.98", weekly="4325988.32", monthly="13552332.19"),
    ]


@pytest.fixture
def store():
    return MemoryEntityStore(owner=OWNER)


@pytest.fixture
def repo(store):
    return LeaderboardRepository(store, OWNER, btl=50000)
