"""A single Hyperliquid fill as one annotated entity."""
import json, math
from datetime import datetime, timezone
from typing import Optional

from packages.config.constants import ENTITY_VERSION, INTEGRATION_TAG, TRADE_BTL, TRADE_TYPE
from packages.golem_sdk_adapter.types import Annotation, EntityCreate
from .models import HyperliquidFill

TRADE_FIELDS = 15

def _iso(ms: int) -> str:
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")

def describe(fill: HyperliquidFill) -> str:
    return f"{'BUY' if fill.is_buy else 'SELL'} {fill.sz} {fill.coin} @ ${fill.px}"

def build_trade_document(fill: HyperliquidFill, owner: str, now: Optional[datetime] = None) -> dict:
    now = now or datetime.now(timezone.utc)
    value = fill.notional
    fee = float(fill.fee or 0)
    return {
        "entity_type": "COMPLETE_HYPERLIQUID_TRADE",
        "version": ENTITY_VERSION,
        "created_at": now.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        "stored_by": owner,
        "hyperliquid_trade": {
            "trade_id": str(fill.tid),
            "order_id": str(fill.oid or 0),
            "transaction_hash": fill.hash,
            "coin": fill.coin,
            "side": fill.side,
            "size": fill.sz,
            "price": fill.px,
            "execution_time": fill.time,
            "direction": fill.dir,
            "closed_pnl": fill.closedPnl,
            "fee_amount": fill.fee or "0",
            "fee_token": fill.feeToken,
            "start_position": fill.startPosition,
            "cross_margin": fill.crossed,
            "user_address": fill.user or "0x0000000000000000000000000000000000000000",
            "raw_api_response": fill.model_dump(),
        },
        "computed": {
            "total_value_usd": value,
            "human_description": describe(fill),
            "formatted_value": f"${value:.2f}",
            "is_buy_order": fill.is_buy,
            "is_profitable": float(fill.closedPnl or 0) > 0,
            "trade_date": _iso(fill.time)[:10],
            "trade_timestamp_iso": _iso(fill.time),
            "fee_percentage": f"{(fee / value * 100) if value else 0.0:.4f}",
        },
        "metadata": {
            "source": "Hyperliquid_API_v1",
            "data_complete": True,
            "fields_preserved": TRADE_FIELDS,
        },
    }

def _scaled(value: str, factor: int) -> int:
    x = float(value or 0) * factor
    return math.floor(x) if math.isfinite(x) else 0

def build_trade_entity(fill: HyperliquidFill, owner: str, btl: int = TRADE_BTL) -> EntityCreate:
    doc = build_trade_document(fill, owner)
    strings = {
        "type": TRADE_TYPE,
        "coin": fill.coin,
        "side": "buy" if fill.is_buy else "sell",
        "direction": fill.dir or "settlement",
        "trade_id": str(fill.tid),
        "order_id": str(fill.oid or 0),
        "user": fill.user or "unknown",
        "fee_token": fill.feeToken,
        "integration": INTEGRATION_TAG,
        "source": "hyperliquid_api",
        "description": doc["computed"]["human_description"],
        "date": doc["computed"]["trade_date"],
        "timestamp_iso": doc["computed"]["trade_timestamp_iso"],
        "entity_version": ENTITY_VERSION,
    }
    numeric = {
        "trade_id_num": int(str(fill.tid)[-10:]),
        "order_id_num": int(str(fill.oid or 1)[-10:]) or 1,
        "execution_time": fill.time,
        "price_cents": _scaled(fill.px, 100),
        "size_scaled": _scaled(fill.sz, 10_000),
        "value_usd_cents": _scaled(str(doc["computed"]["total_value_usd"]), 100),
        "pnl_cents": _scaled(fill.closedPnl, 100),
        "fee_cents": _scaled(fill.fee, 100),
        "start_position_scaled": _scaled(fill.startPosition, 10_000),
        "btl_blocks": btl,
        "is_buy": 1 if fill.is_buy else 0,
        "is_sell": 0 if fill.is_buy else 1,
        "is_profitable": 1 if doc["computed"]["is_profitable"] else 0,
        "cross_margin": 1 if fill.crossed else 0,
        "fields_count": TRADE_FIELDS,
    }
    # zero and negative values cannot be encoded as numeric annotations
    return EntityCreate(
        data=json.dumps(doc, indent=2).encode("utf-8"),
        btl=btl,
        string_annotations=[Annotation(key=k, value=v) for k, v in strings.items()],
        numeric_annotations=[Annotation(key=k, value=v) for k, v in numeric.items() if v > 0],
    )
