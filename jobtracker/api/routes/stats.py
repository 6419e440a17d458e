"""
Statistics endpoints.

Every endpoint loads the current applications and field schema through the
data service and runs the pure aggregation functions over them.
"""
import asyncio
from typing import List, Literal, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query, status

from jobtracker.api.deps import get_data_service
from jobtracker.schemas.application import Application
from jobtracker.schemas.chart_config import AggregationType, DateRangePreset
from jobtracker.schemas.custom_field import CustomField
from jobtracker.schemas.stats import (
    ChartData,
    DayData,
    MonthData,
    OverviewCardValue,
    OverviewStats,
    StatusData,
)
from jobtracker.services import chart_data_service, stats_service
from jobtracker.services.data_service import DataService

router = APIRouter(prefix="/stats", tags=["Statistics"])

Metric = Literal["applications", "responses"]


async def _snapshot(service: DataService) -> Tuple[List[Application], List[CustomField]]:
    applications, fields = await asyncio.gather(
        service.load_applications(),
        service.load_custom_fields(),
    )
    return applications, fields


@router.get("/overview", response_model=OverviewStats)
async def overview(service: DataService = Depends(get_data_service)):
    applications, fields = await _snapshot(service)
    return stats_service.get_overview_stats(applications, fields)


@router.get("/per-day", response_model=List[DayData])
async def per_day(
    metric: Metric = Query("applications"),
    date_range: DateRangePreset = Query("all", alias="range"),
    service: DataService = Depends(get_data_service),
):
    applications, fields = await _snapshot(service)
    clip = stats_service.create_date_range(date_range)
    if metric == "responses":
        return stats_service.get_responses_per_day(applications, fields, clip)
    return stats_service.get_applications_per_day(applications, fields, clip)


@router.get("/per-month", response_model=List[MonthData])
async def per_month(
    metric: Metric = Query("applications"),
    months: int = Query(12, ge=1, le=60),
    service: DataService = Depends(get_data_service),
):
    applications, fields = await _snapshot(service)
    if metric == "responses":
        return stats_service.get_responses_per_month(applications, fields, months)
    return stats_service.get_applications_per_month(applications, fields, months)


@router.get("/status-breakdown", response_model=List[StatusData])
async def status_breakdown(service: DataService = Depends(get_data_service)):
    applications, fields = await _snapshot(service)
    return stats_service.get_status_breakdown(applications, fields)


@router.get("/field-aggregate")
async def field_aggregate(
    field_id: str = Query(...),
    aggregation: AggregationType = Query("count"),
    service: DataService = Depends(get_data_service),
):
    applications, fields = await _snapshot(service)
    if not any(f.id == field_id for f in fields):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Field not found")
    value = chart_data_service.calculate_field_aggregate(applications, fields, field_id, aggregation)
    return {"field_id": field_id, "aggregation": aggregation, "value": value}


@router.get("/charts", response_model=List[ChartData])
async def charts(
    chart_id: Optional[str] = Query(None),
    service: DataService = Depends(get_data_service),
):
    """Data for every configured chart, or just one with ?chart_id=."""
    (applications, fields), bundle = await asyncio.gather(
        _snapshot(service),
        service.load_chart_configs(),
    )
    configs = sorted(bundle.charts, key=lambda c: c.order)
    if chart_id is not None:
        configs = [c for c in configs if c.id == chart_id]
        if not configs:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Chart not found")
    return [chart_data_service.build_chart_data(config, applications, fields) for config in configs]


@router.get("/overview-cards", response_model=List[OverviewCardValue])
async def overview_cards(service: DataService = Depends(get_data_service)):
    (applications, fields), bundle = await asyncio.gather(
        _snapshot(service),
        service.load_chart_configs(),
    )
    cards = sorted(bundle.overview_cards, key=lambda c: c.order)
    return [chart_data_service.compute_overview_card(card, applications, fields) for card in cards]
