# config constants
DEFAULT_ENV = "configs/.env"
VIEW_CFG = "configs/leaderboard.yml"

GOLEM_RPC_URL = "https://ethwarsaw.holesky.golemdb.io/rpc"
GOLEM_WS_URL = "wss://ethwarsaw.holesky.golemdb.io/rpc/ws"
HYPERLIQUID_API_URL = "https://api.hyperliquid.xyz"

DEFAULT_LEADERBOARD_DATE = "2025-09-07"
LEADERBOARD_BTL = 50000   # ~70h of blocks
TRADE_BTL = 10000         # ~14h of blocks

ENTITY_TYPE = "DAILY_PNL_LEADERBOARD"
ENTITY_VERSION = "1.0"
GENERIC_TYPE = "daily_leaderboard"
TRADE_TYPE = "hyperliquid_trade"
INTEGRATION = "ETH_Warsaw_2025_Leaderboard"
INTEGRATION_TAG = "eth_warsaw_2025"
DATA_SOURCE = "multi_platform_aggregated"
DATA_SOURCE_TAG = "aggregated_platforms"
