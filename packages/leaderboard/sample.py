# fallback input for the `store` command when no file/url is given
from .models import TraderRecord

SAMPLE_LEADERBOARD = [
    TraderRecord(rank=1, name="Anonymous", address="0x77c3ea550d2da44b120e55071f57a108f8dd5e45",
                 platform="Avantis", allTimePnl="309103011.9973880053",
                 weeklyPnl="7112015.2720489996", monthlyPnl="42061092.1083469987"),
    TraderRecord(rank=2, name="thank you jefef", address="0xfae95f601f3a25ace60d19dbb929f2a5c57e3571",
                 platform="Avantis", allTimePnl="166149989.7842980027",
                 weeklyPnl="8502710.9329620004", monthlyPnl="18789503.1446329989"),
    TraderRecord(rank=3, name="Anonymous", address="0x9794bbbc222b6b93c1417d01aa1ff06d42e5333b",
                 platform="EdgeX", allTimePnl="147523455.4827440083",
                 weeklyPnl="3504427.817886", monthlyPnl="15248986.0793140009"),
    TraderRecord(rank=4, name="Anonymous", address="0x716bd8d3337972db99995dda5c4b34d954a61d95",
                 platform="Hyperliquid", allTimePnl="112799229.8451820016",
                 weeklyPnl="4634088.4673549999", monthlyPnl="12329367.0540769994"),
    TraderRecord(rank=5, name="jefe", address="0x51156f7002c4f74f4956c9e0f2b7bfb6e9dbfac2",
                 platform="Hyperliquid", allTimePnl="103786039.9804670066",
                 weeklyPnl="4325988.3229949996", monthlyPnl="13552332.1932740007"),
]
