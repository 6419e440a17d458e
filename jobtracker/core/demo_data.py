"""
Sample data offered to first-time users.
"""
from typing import List

from jobtracker.schemas.application import Application
from jobtracker.schemas.custom_field import CustomField
from jobtracker.schemas.chart_config import ChartConfig, OverviewCardConfig

APPLICATION_TYPE_FIELD = "field_1762439194058"
FIRST_INTERVIEW_FIELD = "field_1762439550951"
SECOND_INTERVIEW_FIELD = "field_1762440135267"

_INTERVIEW_NOTE = (
    "Interview went well, a lot of questions regarding my current company.\n\n"
    "Key parts:\n- Why leaving company.\n- Biggest challenge\n- Why choosing {company}"
)


def _app(index, company, position, description, applied, status, response, app_type,
         created, updated, notes=None, **extra):
    data = {
        "companyName": company,
        "jobPosition": position,
        "jobDescription": description,
        "applicationDate": applied,
        "status": status,
        "responseDate": response,
        APPLICATION_TYPE_FIELD: app_type,
    }
    data.update(extra)
    return {
        "id": f"app-1730808000000-{index}",
        "data": data,
        "notes": notes or [],
        "createdAt": created,
        "updatedAt": updated,
    }


def _note(note_id, content, created):
    return {"id": note_id, "content": content, "createdAt": created, "updatedAt": created}


DEMO_APPLICATION_RECORDS: List[dict] = [
    _app(0, "Google", "Senior Software Engineer", "Exciting opportunity to work on cutting-edge technology",
         "2025-10-26", "applied", "", "hr_company",
         "2025-10-26T00:00:00.000Z", "2025-11-06T14:36:00.618Z"),
    _app(1, "Meta", "Frontend Developer", "Build scalable systems that impact millions of users",
         "2025-10-27", "applied", "", "hr_company",
         "2025-10-27T00:00:00.000Z", "2025-11-06T14:34:00.291Z"),
    _app(2, "Amazon", "Full Stack Engineer", "Join a fast-growing startup with great culture",
         "2025-10-28", "1st_interview_scheduled", "2025-10-31", "hr_company",
         "2025-10-28T00:00:00.000Z", "2025-11-06T18:41:39.463Z",
         **{FIRST_INTERVIEW_FIELD: "2025-11-01"}),
    _app(3, "Apple", "Backend Developer", "Work with talented engineers on innovative products",
         "2025-10-29", "interview_completed", "2025-11-01", "direct_apply",
         "2025-10-29T00:00:00.000Z", "2025-11-06T14:38:15.212Z",
         notes=[_note("note-1762439895211", _INTERVIEW_NOTE.format(company="Apple"), "2025-11-06T14:38:15.211Z")],
         **{FIRST_INTERVIEW_FIELD: "2025-11-03"}),
    _app(4, "Microsoft", "DevOps Engineer", "Remote-first company with competitive compensation",
         "2025-10-14", "offer_received", "2025-10-18", "direct_apply",
         "2025-10-30T00:00:00.000Z", "2025-11-06T15:08:24.989Z",
         notes=[
             _note("note-1762439911681", _INTERVIEW_NOTE.format(company="Microsoft"), "2025-11-06T14:38:31.681Z"),
             _note("note-1762441704988", "2nd interview went fine.\n\nA lot of technical questions.",
                   "2025-11-06T15:08:24.988Z"),
         ],
         **{FIRST_INTERVIEW_FIELD: "2025-10-24", SECOND_INTERVIEW_FIELD: "2025-11-01"}),
    _app(5, "Netflix", "React Developer", "Lead technical initiatives and mentor junior developers",
         "2025-10-31", "rejected", "2025-11-03", "direct_apply",
         "2025-10-31T00:00:00.000Z", "2025-11-06T14:39:43.226Z",
         notes=[_note("note-1762439983226", "Rejected because of needed other skill", "2025-11-06T14:39:43.226Z")]),
    _app(6, "Tesla", "TypeScript Developer", "Contribute to open source projects and internal tools",
         "2025-11-01", "withdrawn", "2025-11-04", "hr_company",
         "2025-11-01T00:00:00.000Z", "2025-11-06T14:39:24.887Z",
         notes=[_note("note-1762439964886", "After carefully reviewing the code challenge, it was not worth doing.",
                      "2025-11-06T14:39:24.886Z")]),
    _app(7, "Stripe", "Software Engineer", "Design and implement core platform features",
         "2025-11-02", "applied", "", "direct_apply",
         "2025-11-02T00:00:00.000Z", "2025-11-06T14:27:11.082Z"),
    _app(8, "Airbnb", "Principal Engineer", "Collaborate with cross-functional teams",
         "2025-11-03", "applied", "", "hr_company",
         "2025-11-03T00:00:00.000Z", "2025-11-06T14:34:05.813Z"),
    _app(9, "Uber", "Staff Engineer", "Shape the future of our product architecture",
         "2025-11-04", "1st_interview_scheduled", "2025-11-07", "hr_company",
         "2025-11-04T00:00:00.000Z", "2025-11-06T18:41:47.531Z",
         **{FIRST_INTERVIEW_FIELD: "2025-11-14"}),
]

DEMO_CUSTOM_FIELD_RECORDS: List[dict] = [
    {"id": "companyName", "name": "Company Name", "type": "text", "required": True, "order": 1, "showInTable": True},
    {"id": APPLICATION_TYPE_FIELD, "name": "Application Type", "type": "select", "required": True, "order": 2,
     "showInTable": True, "options": [
         {"value": "hr_company", "label": "HR Company", "color": "#ff9300"},
         {"value": "direct_apply", "label": "Direct Apply", "color": "#0433ff"},
     ]},
    {"id": "jobPosition", "name": "Job Title", "type": "text", "required": False, "order": 3, "showInTable": False},
    {"id": "jobDescription", "name": "Job Description", "type": "textarea", "required": False, "order": 4,
     "showInTable": False},
    {"id": "applicationDate", "name": "Application Date", "type": "date", "required": True, "order": 5,
     "showInTable": True},
    {"id": "status", "name": "Status", "type": "select", "required": True, "order": 6, "showInTable": True,
     "options": [
         {"value": "applied", "label": "Applied", "color": "#0070F3"},
         {"value": "1st_interview_scheduled", "label": "1st Interview Scheduled", "color": "#F5A623"},
         {"value": "interview_completed", "label": "Interview Completed", "color": "#50E3C2"},
         {"value": "offer_received", "label": "Offer Received", "color": "#00C853"},
         {"value": "rejected", "label": "Rejected", "color": "#ff2600"},
         {"value": "withdrawn", "label": "Withdrawn", "color": "#A3A3A3"},
         {"value": "2nd_interview_scheduled", "label": "2nd Interview Scheduled", "color": "#ffaa00"},
     ]},
    {"id": "responseDate", "name": "1st Response", "type": "date", "required": False, "order": 7, "showInTable": True},
    {"id": FIRST_INTERVIEW_FIELD, "name": "1st Interview", "type": "date", "required": False, "order": 8,
     "showInTable": True},
    {"id": SECOND_INTERVIEW_FIELD, "name": "2nd Interview", "type": "date", "required": False, "order": 9,
     "showInTable": True},
]

_CONFIG_CREATED_AT = "2025-11-06T14:15:02.690Z"

DEMO_CHART_CONFIG_RECORDS: List[dict] = [
    {"id": "default-apps-daily", "title": "Applications & Responses per Day", "chartType": "line",
     "series": [
         {"id": "series-1", "label": "Applications", "dataSource": "applications-count", "color": "#0056d6"},
         {"id": "series-1762438900668", "label": "First Response", "dataSource": "custom-field",
          "customFieldId": "responseDate", "color": "#ff9300"},
     ],
     "groupBy": "day", "dateRange": "last7", "order": 1, "createdAt": _CONFIG_CREATED_AT},
    {"id": "default-apps-monthly", "title": "Applications & Responses Per Month", "chartType": "bar",
     "series": [
         {"id": "series-1", "label": "Applications Per Month", "dataSource": "applications-count", "color": "#0056d6"},
         {"id": "series-1762438994351", "label": "First Response", "dataSource": "custom-field",
          "customFieldId": "responseDate", "color": "#ff9300"},
     ],
     "groupBy": "month", "order": 2, "createdAt": _CONFIG_CREATED_AT},
    {"id": "default-status-breakdown", "title": "Status Breakdown", "chartType": "pie",
     "series": [
         {"id": "series-1", "label": "Status Breakdown", "dataSource": "custom-field", "customFieldId": "status",
          "color": "#000000"},
     ],
     "groupBy": "value", "order": 3, "createdAt": _CONFIG_CREATED_AT},
    {"id": "chart-1762439420751", "title": "Application Type", "chartType": "pie",
     "series": [
         {"id": "series-1", "label": "Type", "dataSource": "custom-field", "customFieldId": APPLICATION_TYPE_FIELD,
          "color": "#000000"},
     ],
     "groupBy": "value", "dateRange": "last30", "order": 4, "createdAt": "2025-11-06T14:30:20.751Z"},
]

DEMO_OVERVIEW_CARD_RECORDS: List[dict] = [
    {"id": "default-total-apps", "title": "Total Applications", "dataSource": "total-applications", "order": 1,
     "createdAt": _CONFIG_CREATED_AT},
    {"id": "default-total-responses", "title": "Total Responses", "dataSource": "total-responses", "order": 2,
     "createdAt": _CONFIG_CREATED_AT},
    {"id": "default-response-rate", "title": "Response Rate", "dataSource": "response-rate", "order": 3,
     "createdAt": _CONFIG_CREATED_AT},
    {"id": "default-avg-response-time", "title": "Avg Response Time", "dataSource": "avg-response-time", "order": 4,
     "createdAt": _CONFIG_CREATED_AT},
]


def demo_applications() -> List[Application]:
    return [Application.model_validate(record) for record in DEMO_APPLICATION_RECORDS]


def demo_custom_fields() -> List[CustomField]:
    return [CustomField.model_validate(record) for record in DEMO_CUSTOM_FIELD_RECORDS]


def demo_chart_configs() -> List[ChartConfig]:
    return [ChartConfig.model_validate(record) for record in DEMO_CHART_CONFIG_RECORDS]


def demo_overview_cards() -> List[OverviewCardConfig]:
    return [OverviewCardConfig.model_validate(record) for record in DEMO_OVERVIEW_CARD_RECORDS]
