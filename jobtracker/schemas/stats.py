"""
Pydantic schemas for aggregation results.
"""
from datetime import datetime
from typing import List, Optional, Union
from pydantic import BaseModel, Field

from jobtracker.schemas.application import Application


class DateRange(BaseModel):
    """Inclusive range used to clip per-day aggregations."""
    start_date: datetime
    end_date: datetime


class DayData(BaseModel):
    date: str = Field(..., description="YYYY-MM-DD")
    count: int
    applications: List[Application] = Field(default_factory=list, description="Drill-down records")


class MonthData(BaseModel):
    month: str = Field(..., description="YYYY-MM")
    month_label: str = Field(..., description="e.g. 'Jan 2025'")
    count: int


class StatusData(BaseModel):
    status: str
    label: str
    count: int
    percentage: int
    color: Optional[str] = None


class ChartDataPoint(BaseModel):
    """One bucket of a day or month series."""
    key: str = Field(..., description="YYYY-MM-DD for days, YYYY-MM for months")
    label: str
    value: Union[int, float]
    applications: List[Application] = Field(default_factory=list)


class PieChartDataPoint(BaseModel):
    label: str
    value: int
    color: Optional[str] = None
    percentage: int = 0


class SeriesData(BaseModel):
    """Computed data for one series of a configured chart."""
    series_id: str
    label: str
    color: Optional[str] = None
    points: List[Union[ChartDataPoint, PieChartDataPoint]] = Field(default_factory=list)


class ChartData(BaseModel):
    chart_id: str
    title: str
    chart_type: str
    group_by: str
    series: List[SeriesData] = Field(default_factory=list)


class OverviewCardValue(BaseModel):
    card_id: str
    title: str
    value: Union[int, float, str]


class OverviewStats(BaseModel):
    total_applications: int
    total_responses: int
    response_rate: int
    average_response_time: int
