from contextlib import asynccontextmanager
from typing import Any, Literal, Optional

from fastapi import Depends, FastAPI, Query
from fastapi.responses import JSONResponse

from packages.config.env import Cfg, load_cfg, load_view_cfg
from packages.config.logging import setup_logging
from packages.core.errors import MissingCredential, NotFound
from packages.golem_sdk_adapter.factory import open_store
from packages.leaderboard.ranker import DEFAULTS, paginate, platform_for_address, select_rows
from packages.leaderboard.repository import LeaderboardRepository
from packages.leaderboard.models import LeaderboardPage, RankedRow
from packages.leaderboard.view import to_display_rows, to_response

log = setup_logging()

@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    repo = getattr(app.state, "repo", None)
    if repo is not None:
        await repo.store.close()

app = FastAPI(
    title="PnL Leaderboard API",
    version="1.0.0",
    description="Daily multi-platform PnL leaderboard read from the Golem Base entity store.",
    lifespan=lifespan,
)

def get_cfg() -> Cfg:
    if getattr(app.state, "cfg", None) is None:
        app.state.cfg = load_cfg()
    return app.state.cfg

def get_view_cfg() -> dict:
    if getattr(app.state, "view", None) is None:
        app.state.view = {**DEFAULTS, **load_view_cfg()}
    return app.state.view

async def get_repository() -> LeaderboardRepository:
    # lazy: a missing PRIVATE_KEY must come back as a 500 body
    if getattr(app.state, "repo", None) is None:
        cfg = get_cfg()
        store = await open_store(cfg)
        app.state.repo = LeaderboardRepository(store, store.owner_address(), btl=cfg.leaderboard_btl)
    return app.state.repo

def _error(status: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status)

@app.get("/healthz")
def healthz() -> dict[str, Any]:
    return {"status": "ok"}

@app.get("/api/leaderboard")
async def leaderboard(date: Optional[str] = Query(default=None, description="YYYY-MM-DD")):
    target = date or get_cfg().default_date
    try:
        repo = await get_repository()
        doc = await repo.latest(target)
    except NotFound as e:
        log.info("Leaderboard not found", date=target)
        return _error(404, str(e))
    except MissingCredential as e:
        log.error("Store unavailable", date=target, err=str(e))
        return _error(500, str(e))
    except Exception as e:
        log.error("Failed to fetch leaderboard", date=target, err=str(e))
        return _error(500, f"Failed to fetch leaderboard: {e}")
    return to_response(doc).model_dump()

@app.get("/api/leaderboard/ranked")
async def leaderboard_ranked(
    date: Optional[str] = Query(default=None, description="YYYY-MM-DD"),
    sort_by: Optional[str] = Query(default=None),
    direction: Optional[Literal["asc", "desc"]] = Query(default=None),
    page: int = Query(default=1),
    view: dict = Depends(get_view_cfg),
):
    target = date or get_cfg().default_date
    sort_by = sort_by or view["default_sort"]
    direction = direction or view["default_direction"]
    try:
        repo = await get_repository()
        doc = await repo.latest(target)
    except NotFound as e:
        return _error(404, str(e))
    except MissingCredential as e:
        log.error("Store unavailable", date=target, err=str(e))
        return _error(500, str(e))
    except Exception as e:
        log.error("Failed to fetch leaderboard", date=target, err=str(e))
        return _error(500, f"Failed to fetch leaderboard: {e}")

    rows = select_rows(to_display_rows(doc), view, sort_by, direction)
    page_rows, total_pages, page = paginate(rows, page, view["page_size"])
    first = (page - 1) * view["page_size"]
    ranked = [
        RankedRow(**r.model_dump(), rank=first + i + 1, platform=platform_for_address(r.ethAddress))
        for i, r in enumerate(page_rows)
    ]
    return LeaderboardPage(
        timestamp=doc.metadata.created_at,
        date=doc.leaderboard.date,
        page=page,
        total_pages=total_pages,
        total_rows=len(rows),
        sort_by=sort_by,
        direction=direction,
        rows=ranked,
    ).model_dump()
