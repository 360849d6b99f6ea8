"""Admin statistics endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from docportal.api.auth import require_dashboard_access, require_stats_access
from docportal.config import settings
from docportal.core.filters import build_filters
from docportal.core.stats import StatsEngine, StatsError
from docportal.core.store import StatsStore
from docportal.database import get_db
from docportal.schemas import DashboardReport, StatsReport

logger = logging.getLogger(__name__)

router = APIRouter()


def get_store(db: Session = Depends(get_db)) -> StatsStore:
    return StatsStore(db, timeout_ms=settings.stats_query_timeout_ms)


def get_engine(store: StatsStore = Depends(get_store)) -> StatsEngine:
    return StatsEngine(
        store,
        feed_limit=settings.stats_feed_limit,
        short_circuit=settings.stats_short_circuit,
    )


def _server_error(e: StatsError) -> HTTPException:
    detail = str(e) if settings.expose_error_details and str(e) else "Internal server error"
    return HTTPException(status_code=500, detail=detail)


@router.get("/stats", response_model=StatsReport)
def get_stats(
    from_date: Optional[str] = Query(None, alias="fromDate"),
    to_date: Optional[str] = Query(None, alias="toDate"),
    search: Optional[str] = None,
    category: Optional[str] = None,
    tags: Optional[str] = Query(None, description="Comma-separated tags"),
    current_user = Depends(require_stats_access),
    engine: StatsEngine = Depends(get_engine),
):
    """Get admin statistics with filters."""
    filters = build_filters(from_date=from_date, to_date=to_date, search=search, category=category, tags=tags)
    try:
        return engine.build_report(filters)
    except StatsError as e:
        logger.exception(f"Error fetching admin stats: {e}")
        raise _server_error(e)


@router.get("/dashboard-stats", response_model=DashboardReport)
def get_dashboard_stats(
    current_user = Depends(require_dashboard_access),
    engine: StatsEngine = Depends(get_engine),
):
    """Get dashboard tiles and recently added documents."""
    try:
        return engine.build_dashboard()
    except StatsError as e:
        logger.exception(f"Error fetching dashboard stats: {e}")
        raise _server_error(e)
