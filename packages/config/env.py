# config environment
import os
from typing import Literal, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel

from packages.config.constants import (
    DEFAULT_ENV, DEFAULT_LEADERBOARD_DATE, GOLEM_RPC_URL,
    GOLEM_WS_URL, HYPERLIQUID_API_URL, LEADERBOARD_BTL, TRADE_BTL, VIEW_CFG,
)
from packages.core.errors import MissingCredential

class Cfg(BaseModel):
    private_key: Optional[str] = None
    rpc_url: str = GOLEM_RPC_URL
    ws_url: str = GOLEM_WS_URL
    hyperliquid_url: str = HYPERLIQUID_API_URL
    store_backend: Literal["golem", "memory"] = "golem"
    leaderboard_btl: int = LEADERBOARD_BTL
    trade_btl: int = TRADE_BTL
    default_date: str = DEFAULT_LEADERBOARD_DATE
    api_host: str = "0.0.0.0"
    api_port: int = 3005

    def private_key_bytes(self) -> bytes:
        if not self.private_key:
            raise MissingCredential("PRIVATE_KEY environment variable is required")
        hex_key = self.private_key[2:] if self.private_key.startswith("0x") else self.private_key
        try:
            return bytes.fromhex(hex_key)
        except ValueError as e:
            raise MissingCredential(f"PRIVATE_KEY is not valid hex: {e}") from e

def load_cfg(env_file: str = DEFAULT_ENV) -> Cfg:
    load_dotenv(env_file)
    return Cfg(
        private_key=os.environ.get("PRIVATE_KEY") or None,
        rpc_url=os.environ.get("GOLEM_RPC_URL", GOLEM_RPC_URL),
        ws_url=os.environ.get("GOLEM_WS_URL", GOLEM_WS_URL),
        hyperliquid_url=os.environ.get("HYPERLIQUID_API_URL", HYPERLIQUID_API_URL),
        store_backend=os.environ.get("STORE_BACKEND", "golem"),
        leaderboard_btl=int(os.environ.get("LEADERBOARD_BTL", str(LEADERBOARD_BTL))),
        trade_btl=int(os.environ.get("TRADE_BTL", str(TRADE_BTL))),
        default_date=os.environ.get("DEFAULT_LEADERBOARD_DATE", DEFAULT_LEADERBOARD_DATE),
        api_host=os.environ.get("API_HOST", "0.0.0.0"),
        api_port=int(os.environ.get("API_PORT", "3005")),
    )

def load_view_cfg(path: str = VIEW_CFG) -> dict:
    """Ranking/pagination settings; the `view` section of the YAML file, {} if missing."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except FileNotFoundError:
        return {}
    return raw.get("view", {}) or {}
