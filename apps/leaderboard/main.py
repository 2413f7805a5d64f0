import argparse, asyncio, json, sys
from packages.config.constants import DEFAULT_ENV, TRADE_TYPE
from packages.config.env import load_cfg
from packages.config.logging import setup_logging
from packages.core.errors import LeaderboardError, NotFound
from packages.golem_sdk_adapter.factory import open_store
from packages.golem_sdk_adapter.query import build_query
from packages.hyperliquid.client import HyperliquidInfoClient
from packages.hyperliquid.trades import build_trade_entity, describe
from packages.leaderboard.aggregator import parse_decimal
from packages.leaderboard.fetchers import LeaderboardFileSource, LeaderboardHTTPSource
from packages.leaderboard.repository import LeaderboardRepository
from packages.leaderboard.sample import SAMPLE_LEADERBOARD


log = setup_logging()

def usd(x) -> str:
    return f"${parse_decimal(x):,.2f}"

async def _repo(cfg):
    log.info("Opening entity store...", backend=cfg.store_backend)
    store = await open_store(cfg)
    owner = store.owner_address()
    log.info("Connected", address=owner)
    return LeaderboardRepository(store, owner, btl=cfg.leaderboard_btl)

def print_document(doc, limit: int = 20):
    lb, s, m = doc.leaderboard, doc.summary, doc.metadata
    print(f"\n=== LEADERBOARD {lb.date} ===")
    print(f"Created:  {m.created_at} by {m.stored_by}")
    print(f"Traders:  {lb.total_traders}  ({', '.join(f'{k}:{v}' for k, v in lb.platform_distribution.items())})")
    print(f"Totals:   all-time {usd(lb.total_all_time_pnl)} | week {usd(lb.total_weekly_pnl)} | month {usd(lb.total_monthly_pnl)}")
    print(f"#1:       {s.top_performer.name} ({s.top_performer.platform}) {usd(s.top_performer.all_time_pnl)}")
    print(f"Weekly:   {s.biggest_weekly_gain.name} {usd(s.biggest_weekly_gain.weekly_pnl)}")
    print(f"Monthly:  {s.biggest_monthly_gain.name} {usd(s.biggest_monthly_gain.monthly_pnl)}")
    for platform, t in s.platform_leaders.items():
        print(f"  {platform:<12} {t.name} (#{t.rank}) {usd(t.all_time_pnl)}")
    print()
    for t in lb.top_performers[:limit]:
        print(f"{t.rank:>3}. {t.name[:20]:<20} | {t.platform:<11} | All: {usd(t.all_time_pnl):>18} | "
              f"Week: {usd(t.weekly_pnl):>15} | Month: {usd(t.monthly_pnl):>15}")
    if len(lb.top_performers) > limit:
        print(f"     ... and {len(lb.top_performers) - limit} more traders")

async def run_store(args):
    log.info("=== STORE DAILY LEADERBOARD ===", file=args.file, url=args.url, date=args.date)
    date = args.date
    if args.file:
        src = LeaderboardFileSource(args.file)
        records = src.load()
        date = date or src.date
    elif args.url:
        records = await LeaderboardHTTPSource(args.url).fetch()
    else:
        log.info("No input given, using sample data")
        records = SAMPLE_LEADERBOARD
    log.info("Records loaded", count=len(records), date=date)

    cfg = load_cfg(args.env)
    repo = await _repo(cfg)
    try:
        key, doc = await repo.save(records, date=date)
        found = await repo.store.query(build_query(type=repo.unique_type, date=doc.leaderboard.date))
        log.info("Stored entity is queryable", entity_key=key, matches=len(found))
    finally:
        await repo.store.close()
    print_document(doc, limit=10)
    print(f"\nEntity key: {key}")

async def run_read(args):
    cfg = load_cfg(args.env)
    date = args.date or cfg.default_date
    log.info("=== READ LEADERBOARD ===", date=date)
    repo = await _repo(cfg)
    try:
        doc = await repo.latest(date)
    except NotFound as e:
        log.warning("No leaderboard", date=date)
        print(str(e))
        dates = await repo.available_dates()
        print("Available dates:", ", ".join(dates) if dates else "(none)")
        return
    finally:
        await repo.store.close()
    if args.json:
        print(json.dumps(doc.model_dump(by_alias=True), indent=2))
        return
    print_document(doc, limit=args.limit)

async def run_verify(args):
    cfg = load_cfg(args.env)
    date = args.date or cfg.default_date
    log.info("=== VERIFY LEADERBOARD ===", date=date)
    repo = await _repo(cfg)
    try:
        doc = await repo.latest(date)
    finally:
        await repo.store.close()
    lb = doc.leaderboard
    print(f"Entity claims:        {lb.total_traders} traders")
    print(f"topPerformers length: {len(lb.top_performers)}")
    print(f"Data integrity:       {'COMPLETE' if doc.is_complete else 'INCOMPLETE'}")
    if not doc.is_complete:
        sys.exit(1)

async def run_dates(args):
    cfg = load_cfg(args.env)
    repo = await _repo(cfg)
    try:
        dates = await repo.available_dates()
    finally:
        await repo.store.close()
    log.info("Dates listed", count=len(dates))
    for d in dates:
        print(d)

async def run_store_trade(args):
    log.info("=== STORE HYPERLIQUID TRADE ===", user=args.user)
    cfg = load_cfg(args.env)
    hl = HyperliquidInfoClient(cfg.hyperliquid_url)
    fills = await hl.recent_fills(args.user, limit=1)
    if not fills:
        log.warning("No trades found", user=args.user)
        return
    fill = fills[0]
    log.info("Trade fetched", tid=fill.tid, trade=describe(fill))

    store = await open_store(cfg)
    try:
        entity = build_trade_entity(fill, store.owner_address(), btl=cfg.trade_btl)
        created = await store.store([entity])
        found = await store.query(build_query(type=TRADE_TYPE, trade_id=str(fill.tid)))
    finally:
        await store.close()
    log.info("Trade stored", entity_key=created[0].entity_key, matches=len(found),
             string_annotations=len(entity.string_annotations),
             numeric_annotations=len(entity.numeric_annotations))
    print(created[0].entity_key)

def run_serve(args):
    import uvicorn
    cfg = load_cfg(args.env)
    uvicorn.run("apps.api.main:app", host=args.host or cfg.api_host, port=args.port or cfg.api_port, reload=False)

def main():
    ap = argparse.ArgumentParser(prog="leaderboard")
    ap.add_argument("--env", default=DEFAULT_ENV, help="dotenv file to load")
    sub = ap.add_subparsers(dest="cmd")

    s = sub.add_parser("store", help="aggregate trader records and store the leaderboard entity")
    s.add_argument("--file", help="JSON list of trader records (YYYY-MM-DD.json sets the date)")
    s.add_argument("--url", help="fetch trader records over HTTP instead")
    s.add_argument("--date", help="override the leaderboard date")
    s.set_defaults(func=run_store)

    r = sub.add_parser("read")
    r.add_argument("--date")
    r.add_argument("--limit", type=int, default=20)
    r.add_argument("--json", action="store_true", help="print raw document")
    r.set_defaults(func=run_read)

    v = sub.add_parser("verify", help="check totalTraders against stored topPerformers")
    v.add_argument("--date")
    v.set_defaults(func=run_verify)

    d = sub.add_parser("dates")
    d.set_defaults(func=run_dates)

    t = sub.add_parser("store-trade", help="store the latest Hyperliquid fill of a user")
    t.add_argument("--user", required=True)
    t.set_defaults(func=run_store_trade)

    sv = sub.add_parser("serve")
    sv.add_argument("--host")
    sv.add_argument("--port", type=int)
    sv.set_defaults(func=run_serve)

    args = ap.parse_args()
    if not getattr(args, "func", None):
        ap.print_help(); return
    if args.func is run_serve:
        run_serve(args); return
    try:
        asyncio.run(args.func(args))
    except (LeaderboardError, FileNotFoundError) as e:
        log.error("Command failed", cmd=args.cmd, err=str(e))
        sys.exit(1)

if __name__ == "__main__":
    main()
