"""
Chart and overview card configuration endpoints.
"""
from fastapi import APIRouter, Depends, HTTPException, status

from jobtracker.api.deps import ensure_saved, get_data_service
from jobtracker.schemas.chart_config import (
    MAX_CHART_CONFIGS,
    MAX_OVERVIEW_CARDS,
    ChartConfigBundle,
    is_valid_chart_config,
    is_valid_overview_card_config,
)
from jobtracker.services.data_service import DataService

router = APIRouter(prefix="/chart-configs", tags=["Chart Configs"])


@router.get("", response_model=ChartConfigBundle)
async def get_chart_configs(service: DataService = Depends(get_data_service)):
    return await service.load_chart_configs()


@router.put("", response_model=ChartConfigBundle)
async def save_chart_configs(
    bundle: ChartConfigBundle,
    service: DataService = Depends(get_data_service),
):
    """Replace all charts and overview cards; at most four of each."""
    errors = []
    if len(bundle.charts) > MAX_CHART_CONFIGS:
        errors.append(f"Maximum {MAX_CHART_CONFIGS} charts allowed")
    if len(bundle.overview_cards) > MAX_OVERVIEW_CARDS:
        errors.append(f"Maximum {MAX_OVERVIEW_CARDS} overview cards allowed")
    errors.extend(f"Invalid chart: {chart.id}" for chart in bundle.charts if not is_valid_chart_config(chart))
    errors.extend(
        f"Invalid overview card: {card.id}"
        for card in bundle.overview_cards
        if not is_valid_overview_card_config(card)
    )
    if errors:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=errors)

    ensure_saved(await service.save_chart_configs(bundle.charts, bundle.overview_cards), "Chart configs")
    return bundle
