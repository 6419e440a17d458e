"""
Chart configs slice: statistics charts and overview cards.

Both lists hold at most four entries and keep dense 1..N orders.
"""
import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple, TypeVar

from jobtracker.schemas.chart_config import (
    MAX_CHART_CONFIGS,
    MAX_OVERVIEW_CARDS,
    ChartConfig,
    ChartConfigBundle,
    OverviewCardConfig,
    get_default_chart_configs,
    get_default_overview_card_configs,
)
from jobtracker.state.slice import Slice

logger = logging.getLogger(__name__)

Config = TypeVar("Config", ChartConfig, OverviewCardConfig)


@dataclass(frozen=True)
class ChartConfigsState:
    charts: Tuple[ChartConfig, ...] = ()
    overview_cards: Tuple[OverviewCardConfig, ...] = ()
    initialized: bool = False
    loading: bool = False
    error: Optional[str] = None


chart_configs_slice = Slice("chart_configs", ChartConfigsState())


def _renumber(items: List[Config]) -> Tuple[Config, ...]:
    return tuple(
        item if item.order == index else item.model_copy(update={"order": index})
        for index, item in enumerate(items, start=1)
    )


def _contains(items: Tuple[Config, ...], item_id: str) -> bool:
    return any(existing.id == item_id for existing in items)


def _add(items: Tuple[Config, ...], item: Config) -> Tuple[Config, ...]:
    return _renumber(sorted((*items, item), key=lambda c: c.order))


def _update(items: Tuple[Config, ...], item: Config) -> Tuple[Config, ...]:
    return tuple(item if existing.id == item.id else existing for existing in items)


def _delete(items: Tuple[Config, ...], item_id: str) -> Tuple[Config, ...]:
    return _renumber([existing for existing in items if existing.id != item_id])


def _move(items: Tuple[Config, ...], item_id: str, offset: int) -> Optional[Tuple[Config, ...]]:
    """Swap with the neighbour `offset` away; None when there is no such neighbour."""
    index = next((i for i, existing in enumerate(items) if existing.id == item_id), None)
    if index is None or not 0 <= index + offset < len(items):
        return None
    reordered = list(items)
    reordered[index], reordered[index + offset] = reordered[index + offset], reordered[index]
    return _renumber(reordered)


@chart_configs_slice.case("initialize_configs")
def initialize_configs(state: ChartConfigsState, payload: Optional[dict]) -> ChartConfigsState:
    """Fill in the default charts once; payload may carry status_field_id."""
    if state.initialized:
        return state
    status_field_id = (payload or {}).get("status_field_id")
    return replace(
        state,
        charts=tuple(get_default_chart_configs(status_field_id)),
        overview_cards=tuple(get_default_overview_card_configs()),
        initialized=True,
    )


@chart_configs_slice.case("set_configs")
def set_configs(state: ChartConfigsState, bundle: ChartConfigBundle) -> ChartConfigsState:
    return replace(
        state,
        charts=tuple(bundle.charts),
        overview_cards=tuple(bundle.overview_cards),
        initialized=True,
    )


# ----------------------------------------------------------------------
# Charts
# ----------------------------------------------------------------------

@chart_configs_slice.case("add_chart")
def add_chart(state: ChartConfigsState, chart: ChartConfig) -> ChartConfigsState:
    if _contains(state.charts, chart.id):
        return state
    if len(state.charts) >= MAX_CHART_CONFIGS:
        logger.warning(f"Maximum {MAX_CHART_CONFIGS} charts allowed")
        return state
    return replace(state, charts=_add(state.charts, chart))


@chart_configs_slice.case("update_chart")
def update_chart(state: ChartConfigsState, chart: ChartConfig) -> ChartConfigsState:
    return replace(state, charts=_update(state.charts, chart))


@chart_configs_slice.case("delete_chart")
def delete_chart(state: ChartConfigsState, chart_id: str) -> ChartConfigsState:
    return replace(state, charts=_delete(state.charts, chart_id))


@chart_configs_slice.case("reorder_charts")
def reorder_charts(state: ChartConfigsState, charts: List[ChartConfig]) -> ChartConfigsState:
    return replace(state, charts=_renumber(list(charts)))


@chart_configs_slice.case("move_chart_up")
def move_chart_up(state: ChartConfigsState, chart_id: str) -> ChartConfigsState:
    charts = _move(state.charts, chart_id, -1)
    return state if charts is None else replace(state, charts=charts)


@chart_configs_slice.case("move_chart_down")
def move_chart_down(state: ChartConfigsState, chart_id: str) -> ChartConfigsState:
    charts = _move(state.charts, chart_id, 1)
    return state if charts is None else replace(state, charts=charts)


# ----------------------------------------------------------------------
# Overview cards
# ----------------------------------------------------------------------

@chart_configs_slice.case("add_overview_card")
def add_overview_card(state: ChartConfigsState, card: OverviewCardConfig) -> ChartConfigsState:
    if _contains(state.overview_cards, card.id):
        return state
    if len(state.overview_cards) >= MAX_OVERVIEW_CARDS:
        logger.warning(f"Maximum {MAX_OVERVIEW_CARDS} overview cards allowed")
        return state
    return replace(state, overview_cards=_add(state.overview_cards, card))


@chart_configs_slice.case("update_overview_card")
def update_overview_card(state: ChartConfigsState, card: OverviewCardConfig) -> ChartConfigsState:
    return replace(state, overview_cards=_update(state.overview_cards, card))


@chart_configs_slice.case("delete_overview_card")
def delete_overview_card(state: ChartConfigsState, card_id: str) -> ChartConfigsState:
    return replace(state, overview_cards=_delete(state.overview_cards, card_id))


@chart_configs_slice.case("reorder_overview_cards")
def reorder_overview_cards(state: ChartConfigsState, cards: List[OverviewCardConfig]) -> ChartConfigsState:
    return replace(state, overview_cards=_renumber(list(cards)))


@chart_configs_slice.case("move_overview_card_up")
def move_overview_card_up(state: ChartConfigsState, card_id: str) -> ChartConfigsState:
    cards = _move(state.overview_cards, card_id, -1)
    return state if cards is None else replace(state, overview_cards=cards)


@chart_configs_slice.case("move_overview_card_down")
def move_overview_card_down(state: ChartConfigsState, card_id: str) -> ChartConfigsState:
    cards = _move(state.overview_cards, card_id, 1)
    return state if cards is None else replace(state, overview_cards=cards)


# ----------------------------------------------------------------------
# Status
# ----------------------------------------------------------------------

@chart_configs_slice.case("set_loading")
def set_loading(state: ChartConfigsState, loading: bool) -> ChartConfigsState:
    return replace(state, loading=loading, error=None if loading else state.error)


@chart_configs_slice.case("set_error")
def set_error(state: ChartConfigsState, error: Optional[str]) -> ChartConfigsState:
    return replace(state, error=error, loading=False)


@chart_configs_slice.case("clear_error")
def clear_error(state: ChartConfigsState, _payload=None) -> ChartConfigsState:
    return replace(state, error=None)
