"""
Unit tests for chart series and overview card aggregation.
"""
from datetime import date

import pytest

from jobtracker.core.defaults import default_custom_fields
from jobtracker.schemas.application import Application
from jobtracker.schemas.chart_config import ChartConfig, ChartSeries, OverviewCardConfig
from jobtracker.schemas.custom_field import CustomField, FieldOption
from jobtracker.services import chart_data_service
from jobtracker.services.chart_data_service import APPLICATIONS_COUNT, NOT_APPLICABLE


@pytest.fixture
def fields():
    return default_custom_fields() + [
        CustomField(id="salary", name="Salary", type="number", order=7),
        CustomField(id="remote", name="Remote", type="checkbox", order=8),
        CustomField(id="source", name="Source", type="select", order=9, options=[
            FieldOption(value="linkedin", label="LinkedIn", color="#0A66C2"),
            FieldOption(value="referral", label="Referral"),
        ]),
        CustomField(id="contact", name="Contact", type="text", order=10),
    ]


@pytest.fixture
def applications():
    return [
        Application(id="a1", created_at="2024-01-01T00:00:00.000Z", data={
            "applicationDate": "2024-01-15", "salary": 100, "remote": True, "source": "linkedin", "contact": "Ann",
        }),
        Application(id="a2", created_at="2024-01-01T00:00:00.000Z", data={
            "applicationDate": "2024-01-15", "salary": "50", "remote": False, "source": "linkedin",
        }),
        Application(id="a3", created_at="2024-01-01T00:00:00.000Z", data={
            "applicationDate": "2024-02-03", "salary": "", "source": "referral", "contact": "Bob",
        }),
        # No application date: bucketed by creation time
        Application(id="a4", created_at="2024-02-10T12:00:00.000Z", data={"salary": 25.5}),
    ]


def test_aggregate_by_day_counts(applications, fields):
    points = chart_data_service.aggregate_by_day(applications, fields)

    assert [(p.key, p.label, p.value) for p in points] == [
        ("2024-01-15", "2024-01-15", 2),
        ("2024-02-03", "2024-02-03", 1),
        ("2024-02-10", "2024-02-10", 1),
    ]


def test_aggregate_by_day_sums_number_fields(applications, fields):
    points = chart_data_service.aggregate_by_day(applications, fields, "salary")

    assert [(p.key, p.value) for p in points] == [("2024-01-15", 150), ("2024-02-10", 25.5)]


def test_aggregate_by_day_counts_other_fields(applications, fields):
    points = chart_data_service.aggregate_by_day(applications, fields, "contact")

    assert [(p.key, p.value) for p in points] == [("2024-01-15", 1), ("2024-02-03", 1)]


def test_unknown_series_field_gives_no_points(applications, fields):
    assert chart_data_service.aggregate_by_day(applications, fields, "nope") == []


def test_aggregate_by_week_uses_monday(fields):
    applications = [
        Application(data={"applicationDate": "2024-01-17"}),
        Application(data={"applicationDate": "2024-01-21"}),
        Application(data={"applicationDate": "2024-01-22"}),
    ]

    points = chart_data_service.aggregate_by_week(applications, fields)

    assert [(p.key, p.value) for p in points] == [("2024-01-15", 2), ("2024-01-22", 1)]


def test_aggregate_by_month_zero_filled(applications, fields):
    points = chart_data_service.aggregate_by_month(
        applications, fields, APPLICATIONS_COUNT, month_count=3, today=date(2024, 3, 5)
    )

    assert [(p.key, p.label, p.value) for p in points] == [
        ("2024-01", "Jan 2024", 2),
        ("2024-02", "Feb 2024", 2),
        ("2024-03", "Mar 2024", 0),
    ]
    assert points[2].applications == []


def test_aggregate_by_value_select_uses_labels_and_colors(applications, fields):
    points = chart_data_service.aggregate_by_value(applications, fields, "source")

    assert [(p.label, p.value, p.color, p.percentage) for p in points] == [
        ("LinkedIn", 2, "#0A66C2", 67),
        ("Referral", 1, None, 33),
    ]


def test_aggregate_by_value_checkbox(applications, fields):
    points = chart_data_service.aggregate_by_value(applications, fields, "remote")

    assert sorted((p.label, p.value) for p in points) == [("No", 1), ("Yes", 1)]


def test_field_aggregates(applications, fields):
    aggregate = chart_data_service.calculate_field_aggregate

    assert aggregate(applications, fields, "salary", "count") == 3
    assert aggregate(applications, fields, "salary", "sum") == 175.5
    assert aggregate(applications, fields, "salary", "avg") == 59
    assert aggregate(applications, fields, "salary", "min") == 25.5
    assert aggregate(applications, fields, "salary", "max") == 100
    assert aggregate(applications, fields, "contact", "sum") == NOT_APPLICABLE
    assert aggregate(applications, fields, "contact", "max") == NOT_APPLICABLE
    assert aggregate(applications, fields, "applicationDate", "min") == "15/01/2024"
    assert aggregate(applications, fields, "applicationDate", "max") == "03/02/2024"
    assert aggregate(applications, fields, "missing", "count") == NOT_APPLICABLE
    assert aggregate([], fields, "salary", "sum") == 0


def test_recommendations(fields):
    salary = next(f for f in fields if f.id == "salary")
    contact = next(f for f in fields if f.id == "contact")

    assert chart_data_service.get_recommended_chart_types(salary) == ["line", "bar", "area"]
    assert chart_data_service.get_recommended_aggregations(salary) == ["count", "sum", "avg", "min", "max"]
    assert chart_data_service.get_recommended_chart_types(contact) == ["bar"]
    assert chart_data_service.get_recommended_aggregations(contact) == ["count"]


def test_build_chart_data_multi_series_by_day(applications, fields):
    config = ChartConfig(
        id="c1",
        title="Applications and salary",
        chart_type="line",
        group_by="day",
        series=[
            ChartSeries(id="s1", label="Applications", data_source="applications-count"),
            ChartSeries(id="s2", label="Salary", data_source="custom-field", custom_field_id="salary"),
            ChartSeries(id="s3", label="Broken", data_source="custom-field"),
        ],
    )

    chart = chart_data_service.build_chart_data(config, applications, fields)

    assert [s.series_id for s in chart.series] == ["s1", "s2"]
    assert [p.value for p in chart.series[0].points] == [2, 1, 1]
    assert [p.value for p in chart.series[1].points] == [150, 25.5]


def test_build_chart_data_legacy_single_series_by_month(applications, fields):
    config = ChartConfig(
        id="c2",
        title="Per month",
        chart_type="bar",
        group_by="month",
        data_source="applications-count",
        color="#000000",
    )

    chart = chart_data_service.build_chart_data(config, applications, fields, today=date(2024, 2, 20))

    assert len(chart.series) == 1
    assert chart.series[0].color == "#000000"
    assert len(chart.series[0].points) == 6
    assert [p.value for p in chart.series[0].points][-2:] == [2, 2]


def test_build_chart_data_pie(applications, fields):
    config = ChartConfig(
        id="c3",
        title="Sources",
        chart_type="pie",
        group_by="value",
        data_source="custom-field",
        custom_field_id="source",
    )

    chart = chart_data_service.build_chart_data(config, applications, fields)

    assert [p.label for p in chart.series[0].points] == ["LinkedIn", "Referral"]


def test_compute_overview_cards(applications, fields):
    builtin = OverviewCardConfig(id="o1", title="Total", data_source="total-applications")
    salary = OverviewCardConfig(
        id="o2", title="Top salary", data_source="custom-field-aggregate",
        custom_field_id="salary", aggregation_type="max",
    )
    incomplete = OverviewCardConfig(id="o3", title="Broken", data_source="custom-field-aggregate")

    assert chart_data_service.compute_overview_card(builtin, applications, fields).value == 4
    assert chart_data_service.compute_overview_card(salary, applications, fields).value == 100
    assert chart_data_service.compute_overview_card(incomplete, applications, fields).value == NOT_APPLICABLE
