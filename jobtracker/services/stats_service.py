"""
Statistics service.

Pure functions computing dashboard metrics from applications and the current
field schema. Inputs are never mutated and the same inputs always give the
same result; "today" is passed in where a function depends on it.
"""
import math
from collections import defaultdict
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Dict, List, Optional

from jobtracker.core.dates import (
    days_between,
    format_date_iso,
    format_month_key,
    format_month_year_short,
    parse_date,
    shift_months,
    today_utc,
)
from jobtracker.schemas.application import Application
from jobtracker.schemas.chart_config import BuiltInMetric
from jobtracker.schemas.custom_field import CustomField
from jobtracker.schemas.stats import DateRange, DayData, MonthData, OverviewStats, StatusData
from jobtracker.services.field_roles import FieldRole, resolve_field

PRESET_DAYS: Dict[str, int] = {
    "last7": 7,
    "last30": 30,
    "last90": 90,
}


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives (Python's round() is banker's rounding)."""
    return int(math.floor(value + 0.5))


def has_value(value: Any) -> bool:
    """True for a stored value that counts as filled in."""
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return True


def _in_range(moment: datetime, date_range: Optional[DateRange]) -> bool:
    if date_range is None:
        return True
    start = parse_date(date_range.start_date)
    end = parse_date(date_range.end_date)
    return start <= moment <= end


def calculate_total_applications(applications: List[Application]) -> int:
    return len(applications)


def calculate_total_responses(applications: List[Application], custom_fields: List[CustomField]) -> int:
    """Count applications with a value in the response date field."""
    response_field = resolve_field(custom_fields, FieldRole.RESPONSE_DATE)
    if response_field is None:
        return 0
    return sum(1 for app in applications if has_value(app.data.get(response_field.id)))


def calculate_response_rate(applications: List[Application], custom_fields: List[CustomField]) -> int:
    """Responses as a whole percentage of all applications; 0 with no applications."""
    total = calculate_total_applications(applications)
    if total == 0:
        return 0
    responses = calculate_total_responses(applications, custom_fields)
    return round_half_up(responses / total * 100)


def calculate_average_response_time(applications: List[Application], custom_fields: List[CustomField]) -> int:
    """
    Mean days from application to first response.

    Only applications where both dates parse and the response is not earlier
    than the application count. Returns 0 when no such pair exists.
    """
    app_date_field = resolve_field(custom_fields, FieldRole.APPLICATION_DATE)
    response_field = resolve_field(custom_fields, FieldRole.RESPONSE_DATE)
    if app_date_field is None or response_field is None:
        return 0

    response_times: List[int] = []
    for app in applications:
        applied = parse_date(app.data.get(app_date_field.id))
        responded = parse_date(app.data.get(response_field.id))
        if applied and responded and responded >= applied:
            response_times.append(days_between(applied, responded))

    if not response_times:
        return 0
    return round_half_up(sum(response_times) / len(response_times))


def _per_day(
    applications: List[Application],
    field: Optional[CustomField],
    date_range: Optional[DateRange],
) -> List[DayData]:
    if field is None:
        return []

    buckets: Dict[str, List[Application]] = defaultdict(list)
    for app in applications:
        value = app.data.get(field.id)
        if not has_value(value):
            continue
        moment = parse_date(value)
        if moment is None or not _in_range(moment, date_range):
            continue
        buckets[format_date_iso(moment)].append(app)

    return [
        DayData(date=day, count=len(apps), applications=apps)
        for day, apps in sorted(buckets.items())
    ]


def get_applications_per_day(
    applications: List[Application],
    custom_fields: List[CustomField],
    date_range: Optional[DateRange] = None,
) -> List[DayData]:
    """Applications grouped by application date; only days with data, ascending."""
    return _per_day(applications, resolve_field(custom_fields, FieldRole.APPLICATION_DATE), date_range)


def get_responses_per_day(
    applications: List[Application],
    custom_fields: List[CustomField],
    date_range: Optional[DateRange] = None,
) -> List[DayData]:
    """Responses grouped by response date; only days with data, ascending."""
    return _per_day(applications, resolve_field(custom_fields, FieldRole.RESPONSE_DATE), date_range)


def trailing_months(month_count: int, today: Optional[date] = None) -> List[date]:
    """First day of each of the last `month_count` months, oldest first, ending with today's month."""
    today = today or today_utc()
    return [shift_months(today, -offset) for offset in range(month_count - 1, -1, -1)]


def _per_month(
    applications: List[Application],
    field: Optional[CustomField],
    month_count: int,
    today: Optional[date],
) -> List[MonthData]:
    if field is None:
        return []

    counts: Dict[str, int] = defaultdict(int)
    for app in applications:
        value = app.data.get(field.id)
        if not has_value(value):
            continue
        moment = parse_date(value)
        if moment is None:
            continue
        counts[format_month_key(moment)] += 1

    return [
        MonthData(
            month=format_month_key(month),
            month_label=format_month_year_short(month),
            count=counts.get(format_month_key(month), 0),
        )
        for month in trailing_months(month_count, today)
    ]


def get_applications_per_month(
    applications: List[Application],
    custom_fields: List[CustomField],
    month_count: int = 12,
    today: Optional[date] = None,
) -> List[MonthData]:
    """Applications per month over a zero-filled trailing window."""
    field = resolve_field(custom_fields, FieldRole.APPLICATION_DATE)
    return _per_month(applications, field, month_count, today)


def get_responses_per_month(
    applications: List[Application],
    custom_fields: List[CustomField],
    month_count: int = 12,
    today: Optional[date] = None,
) -> List[MonthData]:
    """Responses per month over a zero-filled trailing window."""
    field = resolve_field(custom_fields, FieldRole.RESPONSE_DATE)
    return _per_month(applications, field, month_count, today)


def get_status_breakdown(applications: List[Application], custom_fields: List[CustomField]) -> List[StatusData]:
    """
    Count and percentage per declared status option.

    Percentages are rounded one by one and may not add up to 100. Options
    nobody has are dropped; the rest are sorted by count, largest first.
    """
    status_field = resolve_field(custom_fields, FieldRole.STATUS)
    if status_field is None or not status_field.options:
        return []

    total = len(applications)
    if total == 0:
        return []

    counts: Dict[Any, int] = defaultdict(int)
    for app in applications:
        value = app.data.get(status_field.id)
        if has_value(value):
            counts[value] += 1

    breakdown = [
        StatusData(
            status=option.value,
            label=option.label,
            count=counts.get(option.value, 0),
            percentage=round_half_up(counts.get(option.value, 0) / total * 100),
            color=option.color,
        )
        for option in status_field.options
    ]
    # sorted() is stable, so ties keep option order
    return sorted((s for s in breakdown if s.count > 0), key=lambda s: s.count, reverse=True)


def create_date_range(preset: str, today: Optional[date] = None) -> Optional[DateRange]:
    """
    Inclusive range for a preset, ending at the end of today.

    'all' (and 'custom', which carries no bounds of its own) mean no clipping.
    """
    days = PRESET_DAYS.get(preset)
    if days is None:
        return None

    today = today or today_utc()
    end = datetime.combine(today, time.max, tzinfo=timezone.utc)
    start = datetime.combine(today - timedelta(days=days - 1), time.min, tzinfo=timezone.utc)
    return DateRange(start_date=start, end_date=end)


def calculate_builtin_metric(
    metric: BuiltInMetric,
    applications: List[Application],
    custom_fields: List[CustomField],
) -> int:
    if metric == "total-applications":
        return calculate_total_applications(applications)
    if metric == "total-responses":
        return calculate_total_responses(applications, custom_fields)
    if metric == "response-rate":
        return calculate_response_rate(applications, custom_fields)
    if metric == "avg-response-time":
        return calculate_average_response_time(applications, custom_fields)
    raise ValueError(f"Unknown metric: {metric}")


def get_overview_stats(applications: List[Application], custom_fields: List[CustomField]) -> OverviewStats:
    return OverviewStats(
        total_applications=calculate_total_applications(applications),
        total_responses=calculate_total_responses(applications, custom_fields),
        response_rate=calculate_response_rate(applications, custom_fields),
        average_response_time=calculate_average_response_time(applications, custom_fields),
    )
