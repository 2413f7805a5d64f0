from pydantic import BaseModel
from typing import Any, Literal, Optional

Direction = Literal["long", "short", "open", "close"]

class HyperliquidFill(BaseModel):
    hash: str
    tid: int
    oid: Optional[int] = None
    coin: str
    side: Literal["B", "A"]   # B = buy, A = sell
    sz: str
    px: str
    time: int                 # ms
    dir: str = ""
    closedPnl: str = "0"
    fee: Optional[str] = None
    feeToken: str = "USDC"
    startPosition: str = "0"
    crossed: bool = False
    builderFee: Optional[str] = None
    user: Optional[str] = None

    @property
    def is_buy(self) -> bool:
        return self.side == "B"

    @property
    def notional(self) -> float:
        return float(self.sz) * float(self.px)

    def direction_label(self) -> str:
        opening = "open" in self.dir.lower()
        if opening:
            return "Open Long" if self.is_buy else "Open Short"
        return "Close Short" if self.is_buy else "Close Long"

def filter_by_direction(fills: list[HyperliquidFill], direction: Direction) -> list[HyperliquidFill]:
    return [f for f in fills if direction in f.dir.lower()]

class HyperliquidPosition(BaseModel):
    user: str
    coin: str
    szi: str = "0"
    entryPx: Optional[str] = None
    positionValue: Optional[str] = None
    unrealizedPnl: Optional[str] = None
    leverage: Any = None

class HyperliquidAsset(BaseModel):
    name: str
    szDecimals: int = 6
    maxLeverage: int = 1
    onlyIsolated: bool = False
