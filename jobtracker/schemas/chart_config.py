"""
Pydantic schemas for configurable charts and overview cards.

These are report descriptors, not computed data.
"""
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

from jobtracker.schemas.application import utc_now_iso

ChartType = Literal["line", "bar", "pie", "area"]
DataSource = Literal["applications-count", "custom-field"]
GroupBy = Literal["day", "week", "month", "value"]
DateRangePreset = Literal["last7", "last30", "last90", "all", "custom"]
AggregationType = Literal["count", "sum", "avg", "min", "max"]
BuiltInMetric = Literal["total-applications", "total-responses", "response-rate", "avg-response-time"]

MAX_CHART_CONFIGS = 4
MAX_OVERVIEW_CARDS = 4
MAX_SERIES_PER_CHART = 4


class ChartSeries(BaseModel):
    """One plotted series of a chart."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    label: str
    data_source: DataSource = Field(..., alias="dataSource")
    custom_field_id: Optional[str] = Field(None, alias="customFieldId")
    color: Optional[str] = None


class ChartConfig(BaseModel):
    """
    A user-defined chart.
    
    Either `series` (multi-series) or the single-series `data_source` /
    `custom_field_id` pair is set; older configs only carry the latter.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    chart_type: ChartType = Field(..., alias="chartType")
    series: Optional[List[ChartSeries]] = Field(None, max_length=MAX_SERIES_PER_CHART)
    data_source: Optional[DataSource] = Field(None, alias="dataSource")
    custom_field_id: Optional[str] = Field(None, alias="customFieldId")
    color: Optional[str] = None
    group_by: GroupBy = Field(..., alias="groupBy")
    date_range: Optional[DateRangePreset] = Field(None, alias="dateRange")
    order: int = 1
    created_at: str = Field(default_factory=utc_now_iso, alias="createdAt")

    def effective_series(self) -> List[ChartSeries]:
        """Series list for both the multi-series and the legacy single-series form."""
        if self.series:
            return list(self.series)
        if self.data_source:
            return [ChartSeries(
                id="series-1",
                label=self.title,
                data_source=self.data_source,
                custom_field_id=self.custom_field_id,
                color=self.color,
            )]
        return []


class OverviewCardConfig(BaseModel):
    """A summary card showing one built-in metric or a field aggregate."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    data_source: Literal[
        "total-applications",
        "total-responses",
        "response-rate",
        "avg-response-time",
        "custom-field-aggregate",
    ] = Field(..., alias="dataSource")
    custom_field_id: Optional[str] = Field(None, alias="customFieldId")
    aggregation_type: Optional[AggregationType] = Field(None, alias="aggregationType")
    icon: Optional[str] = None
    order: int = 1
    created_at: str = Field(default_factory=utc_now_iso, alias="createdAt")


class ChartConfigBundle(BaseModel):
    """Charts and overview cards, persisted together."""
    model_config = ConfigDict(populate_by_name=True)

    charts: List[ChartConfig] = Field(default_factory=list)
    overview_cards: List[OverviewCardConfig] = Field(default_factory=list, alias="overviewCards")


def is_valid_chart_config(config: ChartConfig) -> bool:
    """Check that a chart names what it plots."""
    if not config.id or not config.title:
        return False

    has_series = bool(config.series)
    if not has_series and not config.data_source:
        return False

    for series in config.series or []:
        if not series.id or not series.label:
            return False
        if series.data_source == "custom-field" and not series.custom_field_id:
            return False

    if not has_series and config.data_source == "custom-field" and not config.custom_field_id:
        return False

    return True


def is_valid_overview_card_config(config: OverviewCardConfig) -> bool:
    if not config.id or not config.title:
        return False
    if config.data_source == "custom-field-aggregate":
        return bool(config.custom_field_id and config.aggregation_type)
    return True


def get_default_chart_configs(status_field_id: Optional[str] = None) -> List[ChartConfig]:
    """Charts offered before the user has configured any."""
    now = utc_now_iso()
    defaults = [
        ChartConfig(
            id="default-apps-daily",
            title="Applications Per Day",
            chart_type="line",
            data_source="applications-count",
            group_by="day",
            date_range="last30",
            color="#000000",
            order=1,
            created_at=now,
        ),
        ChartConfig(
            id="default-apps-monthly",
            title="Applications Per Month",
            chart_type="bar",
            data_source="applications-count",
            group_by="month",
            color="#000000",
            order=2,
            created_at=now,
        ),
    ]

    if status_field_id:
        defaults.append(ChartConfig(
            id="default-status-breakdown",
            title="Status Breakdown",
            chart_type="pie",
            data_source="custom-field",
            custom_field_id=status_field_id,
            group_by="value",
            order=3,
            created_at=now,
        ))

    return defaults


def get_default_overview_card_configs() -> List[OverviewCardConfig]:
    now = utc_now_iso()
    cards = [
        ("default-total-apps", "Total Applications", "total-applications"),
        ("default-total-responses", "Total Responses", "total-responses"),
        ("default-response-rate", "Response Rate", "response-rate"),
        ("default-avg-response-time", "Avg Response Time", "avg-response-time"),
    ]
    return [
        OverviewCardConfig(id=card_id, title=title, data_source=source, order=index, created_at=now)
        for index, (card_id, title, source) in enumerate(cards, start=1)
    ]
