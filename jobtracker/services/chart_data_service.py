"""
Chart data service.

Aggregates applications into chart series for user-configured charts and
overview cards. Time buckets are keyed by the application date field, falling
back to the record's creation timestamp when that value is missing.
"""
import logging
import math
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional, Union

from jobtracker.core.dates import (
    format_date_display,
    format_date_iso,
    format_month_key,
    format_month_year_short,
    parse_date,
)
from jobtracker.schemas.application import Application
from jobtracker.schemas.chart_config import AggregationType, ChartConfig, OverviewCardConfig
from jobtracker.schemas.custom_field import CustomField
from jobtracker.schemas.stats import (
    ChartData,
    ChartDataPoint,
    DateRange,
    OverviewCardValue,
    PieChartDataPoint,
    SeriesData,
)
from jobtracker.services.field_roles import FieldRole, resolve_field
from jobtracker.services.stats_service import (
    calculate_builtin_metric,
    create_date_range,
    round_half_up,
    trailing_months,
)

logger = logging.getLogger(__name__)

APPLICATIONS_COUNT = "applications-count"
NOT_APPLICABLE = "N/A"

AggregateResult = Union[int, float, str]


def _find_field(fields: List[CustomField], field_id: str) -> Optional[CustomField]:
    return next((f for f in fields if f.id == field_id), None)


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def _to_number(value: Any) -> Optional[float]:
    """Numeric reading of a stored value, or None when it is not a finite number."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return None
    return number if math.isfinite(number) else None


def _tidy(number: float) -> Union[int, float]:
    return int(number) if float(number).is_integer() else number


def _bucket_date(app: Application, date_field: Optional[CustomField]) -> Optional[datetime]:
    moment = parse_date(app.data.get(date_field.id)) if date_field else None
    if moment is None:
        moment = parse_date(app.created_at)
    return moment


def _accumulate(
    applications: List[Application],
    custom_fields: List[CustomField],
    field_id: str,
    bucket_key,
    date_range: Optional[DateRange] = None,
) -> Dict[str, dict]:
    """Fold applications into {key: {"value", "applications"}} buckets."""
    date_field = resolve_field(custom_fields, FieldRole.APPLICATION_DATE)
    field = None if field_id == APPLICATIONS_COUNT else _find_field(custom_fields, field_id)
    if field_id != APPLICATIONS_COUNT and field is None:
        return {}

    start = parse_date(date_range.start_date) if date_range else None
    end = parse_date(date_range.end_date) if date_range else None

    buckets: Dict[str, dict] = defaultdict(lambda: {"value": 0, "applications": []})
    for app in applications:
        moment = _bucket_date(app, date_field)
        if moment is None:
            continue
        if date_range and not (start <= moment <= end):
            continue

        if field is None:
            increment = 1
        else:
            value = app.data.get(field_id)
            if _is_blank(value):
                continue
            number = _to_number(value) if field.type == "number" else None
            # Number fields are summed, everything else counts occurrences
            increment = number if number is not None else 1

        bucket = buckets[bucket_key(moment)]
        bucket["value"] += increment
        bucket["applications"].append(app)

    return buckets


def aggregate_by_day(
    applications: List[Application],
    custom_fields: List[CustomField],
    field_id: str = APPLICATIONS_COUNT,
    date_range: Optional[DateRange] = None,
) -> List[ChartDataPoint]:
    """Per-day buckets that have data, ascending, optionally clipped to a range."""
    buckets = _accumulate(applications, custom_fields, field_id, format_date_iso, date_range)
    return [
        ChartDataPoint(key=key, label=key, value=_tidy(bucket["value"]), applications=bucket["applications"])
        for key, bucket in sorted(buckets.items())
    ]


def _week_start(moment: datetime) -> str:
    return format_date_iso(moment.date() - timedelta(days=moment.weekday()))


def aggregate_by_week(
    applications: List[Application],
    custom_fields: List[CustomField],
    field_id: str = APPLICATIONS_COUNT,
    date_range: Optional[DateRange] = None,
) -> List[ChartDataPoint]:
    """Buckets keyed by the Monday starting each week, ascending."""
    buckets = _accumulate(applications, custom_fields, field_id, _week_start, date_range)
    return [
        ChartDataPoint(key=key, label=key, value=_tidy(bucket["value"]), applications=bucket["applications"])
        for key, bucket in sorted(buckets.items())
    ]


def aggregate_by_month(
    applications: List[Application],
    custom_fields: List[CustomField],
    field_id: str = APPLICATIONS_COUNT,
    month_count: int = 6,
    today: Optional[date] = None,
) -> List[ChartDataPoint]:
    """The last `month_count` months ending with today's, empty months included as zero."""
    buckets = _accumulate(applications, custom_fields, field_id, format_month_key)
    points = []
    for month in trailing_months(month_count, today):
        key = format_month_key(month)
        bucket = buckets.get(key)
        points.append(ChartDataPoint(
            key=key,
            label=format_month_year_short(month),
            value=_tidy(bucket["value"]) if bucket else 0,
            applications=bucket["applications"] if bucket else [],
        ))
    return points


def aggregate_by_value(
    applications: List[Application],
    custom_fields: List[CustomField],
    field_id: str,
) -> List[PieChartDataPoint]:
    """
    Count applications per distinct value of a field.

    Select fields use option labels and colors; checkboxes read Yes/No.
    Percentages are rounded independently.
    """
    field = _find_field(custom_fields, field_id)
    if field is None:
        return []

    counts: Dict[str, int] = {}
    colors: Dict[str, Optional[str]] = {}
    total = 0

    for app in applications:
        value = app.data.get(field_id)
        if _is_blank(value):
            continue

        color = None
        if field.type == "select" and field.options:
            option = field.find_option(value)
            label = option.label if option and option.label else str(value)
            color = option.color if option else None
        elif field.type == "checkbox":
            label = "Yes" if value else "No"
        else:
            label = str(value)

        if label not in counts:
            counts[label] = 0
            colors[label] = color
        counts[label] += 1
        total += 1

    points = [
        PieChartDataPoint(
            label=label,
            value=count,
            color=colors[label],
            percentage=round_half_up(count / total * 100) if total else 0,
        )
        for label, count in counts.items()
    ]
    return sorted(points, key=lambda p: p.value, reverse=True)


def calculate_field_aggregate(
    applications: List[Application],
    custom_fields: List[CustomField],
    field_id: str,
    aggregation_type: AggregationType,
) -> AggregateResult:
    """
    Aggregate one field over all applications that have a value for it.

    sum and avg need a number field; min and max work on numbers and on dates
    (returned as DD/MM/YYYY). Anything else yields "N/A".
    """
    field = _find_field(custom_fields, field_id)
    if field is None:
        return NOT_APPLICABLE

    values = [app.data.get(field_id) for app in applications if not _is_blank(app.data.get(field_id))]
    if not values:
        return 0

    if aggregation_type == "count":
        return len(values)

    numbers = [n for n in (_to_number(v) for v in values) if n is not None]

    if aggregation_type == "sum":
        if field.type != "number":
            return NOT_APPLICABLE
        return _tidy(sum(numbers))

    if aggregation_type == "avg":
        if field.type != "number":
            return NOT_APPLICABLE
        if not numbers:
            return 0
        return round_half_up(sum(numbers) / len(numbers))

    if aggregation_type in ("min", "max"):
        pick = min if aggregation_type == "min" else max
        if field.type == "number":
            return _tidy(pick(numbers)) if numbers else 0
        if field.type == "date":
            dates = [d for d in (parse_date(v) for v in values) if d is not None]
            if not dates:
                return NOT_APPLICABLE
            return format_date_display(pick(dates))
        return NOT_APPLICABLE

    return NOT_APPLICABLE


def get_recommended_chart_types(field: CustomField) -> List[str]:
    return {
        "number": ["line", "bar", "area"],
        "select": ["pie", "bar"],
        "date": ["line", "bar"],
        "checkbox": ["pie", "bar"],
    }.get(field.type, ["bar"])


def get_recommended_aggregations(field: CustomField) -> List[str]:
    if field.type == "number":
        return ["count", "sum", "avg", "min", "max"]
    if field.type == "date":
        return ["count", "min", "max"]
    return ["count"]


def build_chart_data(
    config: ChartConfig,
    applications: List[Application],
    custom_fields: List[CustomField],
    today: Optional[date] = None,
) -> ChartData:
    """Compute every series of a configured chart."""
    chart = ChartData(
        chart_id=config.id,
        title=config.title,
        chart_type=config.chart_type,
        group_by=config.group_by,
    )
    series_list = config.effective_series()

    # Pie charts plot a single field's value breakdown
    if config.group_by == "value" or config.chart_type == "pie":
        first = series_list[0] if series_list else None
        field_id = (first.custom_field_id if first else None) or config.custom_field_id
        if field_id:
            chart.series.append(SeriesData(
                series_id=first.id if first else "series-1",
                label=first.label if first else config.title,
                color=first.color if first else config.color,
                points=aggregate_by_value(applications, custom_fields, field_id),
            ))
        return chart

    date_range = create_date_range(config.date_range, today) if config.date_range else None

    for series in series_list:
        if series.data_source == "custom-field":
            if not series.custom_field_id:
                logger.warning(f"Chart {config.id} series {series.id} has no field, skipped")
                continue
            field_id = series.custom_field_id
        else:
            field_id = APPLICATIONS_COUNT

        if config.group_by == "day":
            points = aggregate_by_day(applications, custom_fields, field_id, date_range)
        elif config.group_by == "week":
            points = aggregate_by_week(applications, custom_fields, field_id, date_range)
        else:
            points = aggregate_by_month(applications, custom_fields, field_id, today=today)

        chart.series.append(SeriesData(
            series_id=series.id,
            label=series.label,
            color=series.color,
            points=points,
        ))

    return chart


def compute_overview_card(
    card: OverviewCardConfig,
    applications: List[Application],
    custom_fields: List[CustomField],
) -> OverviewCardValue:
    if card.data_source == "custom-field-aggregate":
        if not card.custom_field_id or not card.aggregation_type:
            value: AggregateResult = NOT_APPLICABLE
        else:
            value = calculate_field_aggregate(
                applications, custom_fields, card.custom_field_id, card.aggregation_type
            )
    else:
        value = calculate_builtin_metric(card.data_source, applications, custom_fields)

    return OverviewCardValue(card_id=card.id, title=card.title, value=value)
