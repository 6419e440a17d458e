"""
Unit tests for dashboard statistics.
"""
from datetime import date, datetime, timezone

import pytest

from jobtracker.core.defaults import default_custom_fields
from jobtracker.schemas.application import Application
from jobtracker.schemas.custom_field import CustomField, FieldOption
from jobtracker.services import stats_service
from jobtracker.services.field_roles import FieldRole, resolve_field_id


def _apps(*records):
    return [Application(id=f"app-{index}", data=data) for index, data in enumerate(records)]


@pytest.fixture
def fields():
    return default_custom_fields()


def test_applications_per_day_groups_and_sorts(fields):
    applications = _apps(
        {"applicationDate": "2024-01-16"},
        {"applicationDate": "2024-01-15"},
        {"applicationDate": "2024-01-15"},
    )

    days = stats_service.get_applications_per_day(applications, fields)

    assert [(d.date, d.count) for d in days] == [("2024-01-15", 2), ("2024-01-16", 1)]
    assert [app.id for app in days[0].applications] == ["app-1", "app-2"]


def test_per_day_skips_empty_and_invalid_dates(fields):
    applications = _apps(
        {"applicationDate": ""},
        {"applicationDate": "not a date"},
        {},
        {"applicationDate": "2024-01-15T18:30:00Z"},
    )

    days = stats_service.get_applications_per_day(applications, fields)

    assert [(d.date, d.count) for d in days] == [("2024-01-15", 1)]


def test_per_day_clipped_to_range(fields):
    applications = _apps(
        {"applicationDate": "2024-01-01"},
        {"applicationDate": "2024-01-14"},
        {"applicationDate": "2024-01-20"},
    )
    date_range = stats_service.create_date_range("last7", today=date(2024, 1, 20))

    days = stats_service.get_applications_per_day(applications, fields, date_range)

    assert [d.date for d in days] == ["2024-01-14", "2024-01-20"]


def test_responses_per_day(fields):
    applications = _apps(
        {"applicationDate": "2024-01-10", "responseDate": "2024-01-12"},
        {"applicationDate": "2024-01-10"},
    )

    days = stats_service.get_responses_per_day(applications, fields)

    assert [(d.date, d.count) for d in days] == [("2024-01-12", 1)]


def test_response_rate(fields):
    applications = _apps(
        {"responseDate": "2024-01-20"},
        {"responseDate": "2024-01-21"},
        {"responseDate": ""},
    )

    assert stats_service.calculate_total_responses(applications, fields) == 2
    assert stats_service.calculate_response_rate(applications, fields) == 67
    assert stats_service.calculate_response_rate([], fields) == 0


def test_average_response_time(fields):
    applications = _apps(
        {"applicationDate": "2024-01-15", "responseDate": "2024-01-20"},
        {"applicationDate": "2024-01-16", "responseDate": "2024-01-25"},
        {"applicationDate": "2024-01-17"},
    )

    assert stats_service.calculate_average_response_time(applications, fields) == 7


def test_average_response_time_ignores_invalid_pairs(fields):
    applications = _apps(
        {"applicationDate": "2024-01-20", "responseDate": "2024-01-10"},
        {"applicationDate": "garbage", "responseDate": "2024-01-10"},
    )

    assert stats_service.calculate_average_response_time(applications, fields) == 0


def test_average_response_time_rounds_partial_days_up(fields):
    applications = _apps(
        {"applicationDate": "2024-01-15T00:00:00Z", "responseDate": "2024-01-16T06:00:00Z"},
    )

    assert stats_service.calculate_average_response_time(applications, fields) == 2


def test_roles_found_by_name_when_ids_are_custom():
    fields = [
        CustomField(id="field_1", name="Date Applied", type="date", order=1),
        CustomField(id="field_2", name="Recruiter Response", type="date", order=2),
        CustomField(id="field_3", name="Pipeline Status", type="select", order=3,
                    options=[FieldOption(value="open", label="Open")]),
        CustomField(id="field_4", name="Response notes", type="text", order=4),
    ]

    assert resolve_field_id(fields, FieldRole.APPLICATION_DATE) == "field_1"
    assert resolve_field_id(fields, FieldRole.RESPONSE_DATE) == "field_2"
    assert resolve_field_id(fields, FieldRole.STATUS) == "field_3"

    applications = _apps({"field_1": "2024-01-15", "field_2": "2024-01-18"})
    assert stats_service.calculate_average_response_time(applications, fields) == 3


def test_legacy_id_wins_over_name_match():
    fields = [
        CustomField(id="field_9", name="Application Date (old)", type="date", order=1),
        CustomField(id="applicationDate", name="Applied on", type="date", order=2),
    ]

    assert resolve_field_id(fields, FieldRole.APPLICATION_DATE) == "applicationDate"


def test_missing_roles_give_empty_results():
    fields = [CustomField(id="companyName", name="Company", type="text", order=1)]
    applications = _apps({"companyName": "Acme"})

    assert stats_service.calculate_total_responses(applications, fields) == 0
    assert stats_service.calculate_average_response_time(applications, fields) == 0
    assert stats_service.get_applications_per_day(applications, fields) == []
    assert stats_service.get_applications_per_month(applications, fields) == []
    assert stats_service.get_status_breakdown(applications, fields) == []


def test_per_month_zero_filled_window(fields):
    applications = _apps(
        {"applicationDate": "2024-01-05"},
        {"applicationDate": "2024-01-25"},
        {"applicationDate": "2024-03-01"},
        {"applicationDate": "2023-06-01"},
    )

    months = stats_service.get_applications_per_month(applications, fields, month_count=3, today=date(2024, 3, 10))

    assert [(m.month, m.month_label, m.count) for m in months] == [
        ("2024-01", "Jan 2024", 2),
        ("2024-02", "Feb 2024", 0),
        ("2024-03", "Mar 2024", 1),
    ]


def test_per_month_window_crosses_year(fields):
    months = stats_service.get_responses_per_month([], fields, month_count=2, today=date(2024, 1, 1))

    assert [m.month for m in months] == ["2023-12", "2024-01"]


def test_status_breakdown(fields):
    applications = _apps(
        {"status": "applied"},
        {"status": "applied"},
        {"status": "rejected"},
        {"status": ""},
    )

    breakdown = stats_service.get_status_breakdown(applications, fields)

    assert [(s.status, s.label, s.count, s.percentage) for s in breakdown] == [
        ("applied", "Applied", 2, 50),
        ("rejected", "Rejected", 1, 25),
    ]
    assert breakdown[0].color == "#0070F3"


def test_status_breakdown_rounds_each_share(fields):
    applications = _apps({"status": "applied"}, {"status": "screening"}, {"status": "rejected"})

    percentages = [s.percentage for s in stats_service.get_status_breakdown(applications, fields)]

    assert percentages == [33, 33, 33]


def test_create_date_range():
    date_range = stats_service.create_date_range("last7", today=date(2024, 1, 20))

    assert date_range.start_date == datetime(2024, 1, 14, tzinfo=timezone.utc)
    assert date_range.end_date.date() == date(2024, 1, 20)
    assert date_range.end_date.hour == 23
    assert stats_service.create_date_range("all") is None
    assert stats_service.create_date_range("custom") is None


def test_round_half_up():
    assert stats_service.round_half_up(2.5) == 3
    assert stats_service.round_half_up(66.666) == 67
    assert stats_service.round_half_up(0.4) == 0


def test_builtin_metrics(fields):
    applications = _apps(
        {"applicationDate": "2024-01-15", "responseDate": "2024-01-20"},
        {"applicationDate": "2024-01-16"},
    )

    assert stats_service.calculate_builtin_metric("total-applications", applications, fields) == 2
    assert stats_service.calculate_builtin_metric("total-responses", applications, fields) == 1
    assert stats_service.calculate_builtin_metric("response-rate", applications, fields) == 50
    assert stats_service.calculate_builtin_metric("avg-response-time", applications, fields) == 5

    with pytest.raises(ValueError):
        stats_service.calculate_builtin_metric("unknown", applications, fields)


def test_overview_stats_does_not_mutate_inputs(fields):
    applications = _apps({"applicationDate": "2024-01-15", "responseDate": "2024-01-20"})
    before = [app.model_copy(deep=True) for app in applications]

    overview = stats_service.get_overview_stats(applications, fields)

    assert overview.total_applications == 1
    assert overview.response_rate == 100
    assert applications == before
