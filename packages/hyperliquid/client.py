"""Read-only client for the Hyperliquid `/info` endpoint."""
import time
from typing import Any, Optional

import httpx
import structlog

from packages.config.constants import HYPERLIQUID_API_URL
from packages.core.errors import UpstreamFailure
from .models import HyperliquidAsset, HyperliquidFill, HyperliquidPosition

log = structlog.get_logger()

class HyperliquidInfoClient:
    def __init__(self, base_url: str = HYPERLIQUID_API_URL, timeout: float = 30.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    async def _info(self, body: dict) -> Any:
        try:
            async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout,
                                         transport=self._transport) as h:
                r = await h.post("/info", json=body)
                r.raise_for_status()
                return r.json()
        except (httpx.HTTPError, ValueError) as e:
            log.error("Hyperliquid API error", request=body.get("type"), err=str(e))
            raise UpstreamFailure(f"Hyperliquid {body.get('type')} request failed: {e}") from e

    async def user_fills(self, address: str) -> list[HyperliquidFill]:
        data = await self._info({"type": "userFills", "user": address})
        if not isinstance(data, list):
            raise UpstreamFailure("Invalid response format from Hyperliquid API")
        fills = [HyperliquidFill(**{**f, "user": address}) for f in data]
        log.info("Fills fetched", user=address, count=len(fills))
        return fills

    async def recent_fills(self, address: str, limit: int = 100) -> list[HyperliquidFill]:
        fills = await self.user_fills(address)
        return sorted(fills, key=lambda f: f.time, reverse=True)[:limit]

    async def fills_by_time_range(self, address: str, start_ms: int, end_ms: int) -> list[HyperliquidFill]:
        return [f for f in await self.user_fills(address) if start_ms <= f.time <= end_ms]

    async def fills_by_coin(self, address: str, coin: str) -> list[HyperliquidFill]:
        return [f for f in await self.user_fills(address) if f.coin == coin]

    async def user_positions(self, address: str) -> list[HyperliquidPosition]:
        data = await self._info({"type": "clearinghouseState", "user": address})
        rows = (data or {}).get("assetPositions") or []
        out = []
        for row in rows:
            pos = row.get("position", {})
            out.append(HyperliquidPosition(
                user=address,
                coin=pos.get("coin", "?"),
                szi=pos.get("szi", "0"),
                entryPx=pos.get("entryPx"),
                positionValue=pos.get("positionValue"),
                unrealizedPnl=pos.get("unrealizedPnl"),
                leverage=pos.get("leverage"),
            ))
        return out

    async def asset_metadata(self) -> list[HyperliquidAsset]:
        data = await self._info({"type": "meta"})
        universe = (data or {}).get("universe")
        if not universe:
            raise UpstreamFailure("No asset metadata found")
        return [HyperliquidAsset(**a) for a in universe]

    async def all_mids(self) -> dict[str, str]:
        data = await self._info({"type": "allMids"})
        if not data:
            raise UpstreamFailure("No market data found")
        return data

    async def health(self) -> dict:
        try:
            await self.all_mids()
            status = "healthy"
        except UpstreamFailure:
            status = "unhealthy"
        return {"status": status, "timestamp": int(time.time() * 1000)}
