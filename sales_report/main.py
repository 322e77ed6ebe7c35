import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Query

from sales_report.config import settings
from sales_report.engine import analyze_sales_data
from sales_report.errors import InvalidInputError, UnresolvedReferenceError
from sales_report.models import SalesData
from sales_report.seed_data import seed
from sales_report.store import store
from sales_report.strategies import BonusPolicy, RankingMode, default_options

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.SEED_ON_STARTUP:
        seed(store)
        logger.info("Seeded demo data: %d sellers, %d purchase records",
                    len(store.sellers), len(store.purchase_records))
    yield


app = FastAPI(
    title="Sales Report Service",
    version="1.0.0",
    description="Per-seller revenue, profit, top products and bonus report",
    lifespan=lifespan,
)


def _build_report(data, ranking_mode: Optional[RankingMode], bonus_policy: Optional[BonusPolicy]):
    options = default_options(ranking_mode, bonus_policy)
    try:
        report = analyze_sales_data(data, options)
    except InvalidInputError as exc:
        raise HTTPException(422, str(exc))
    except UnresolvedReferenceError as exc:
        raise HTTPException(404, str(exc))
    return {"report": [entry.model_dump(mode="json") for entry in report]}


# ── Sellers ──────────────────────────────────────────────────────────────────

@app.get("/api/v1/sellers", summary="List all sellers")
def list_sellers():
    return {"sellers": [s.model_dump(mode="json") for s in store.list_sellers()]}


# ── Reports ──────────────────────────────────────────────────────────────────

@app.get("/api/v1/report", summary="Sales report over the stored data set")
def get_report(
    ranking_mode: Optional[RankingMode] = Query(default=None, description="Defaults to RANKING_MODE"),
    bonus_policy: Optional[BonusPolicy] = Query(default=None, description="Defaults to BONUS_STRATEGY"),
):
    return _build_report(store.as_sales_data(), ranking_mode, bonus_policy)


@app.post("/api/v1/report", summary="Sales report over a posted data set")
def post_report(
    data: SalesData,
    ranking_mode: Optional[RankingMode] = Query(default=None, description="Defaults to RANKING_MODE"),
    bonus_policy: Optional[BonusPolicy] = Query(default=None, description="Defaults to BONUS_STRATEGY"),
):
    return _build_report(data, ranking_mode, bonus_policy)


# ── Admin ─────────────────────────────────────────────────────────────────────

@app.post("/api/v1/admin/seed", summary="Re-seed demo data")
def reseed():
    store.clear()
    seed(store)
    return {
        "status": "seeded",
        "sellers": len(store.sellers),
        "products": len(store.products),
        "purchase_records": len(store.purchase_records),
    }
