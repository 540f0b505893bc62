# =========================================================
# DASHBOARD METRICS ROUTER
#
# /metrics            primary view with sales + top sellers
# /dashboard-metrics  legacy field names, stock totals only
# /revenue-trend      sparse daily revenue, trailing window
# /machine-distribution
# =========================================================

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.config import settings
from app.database import get_db
from app.schemas.metrics import (
    CompatMetricsResponse,
    DashboardMetricsResponse,
    MachineDistributionRow,
    RevenuePoint,
)
from app.services import metrics

router = APIRouter(prefix="/api", tags=["Metrics"])


@router.get("/metrics", response_model=DashboardMetricsResponse)
def dashboard_metrics(
    top: int = Query(settings.TOP_SELLERS_LIMIT, ge=1, le=50),
    db: Session = Depends(get_db),
):
    return metrics.dashboard_metrics(db, top)


@router.get("/dashboard-metrics", response_model=CompatMetricsResponse)
@router.get("/dashboard/summary", response_model=CompatMetricsResponse)
def compat_dashboard_metrics(db: Session = Depends(get_db)):
    return metrics.compat_metrics(db)


@router.get("/revenue-trend", response_model=list[RevenuePoint])
def revenue_trend(
    days: int = Query(settings.REVENUE_TREND_DAYS, ge=1, le=90),
    db: Session = Depends(get_db),
):
    return metrics.revenue_trend(db, days)


@router.get("/machine-distribution", response_model=list[MachineDistributionRow])
def machine_distribution(db: Session = Depends(get_db)):
    return metrics.machine_distribution(db)
