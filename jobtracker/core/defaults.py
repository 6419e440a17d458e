"""
Built-in defaults for a fresh tracker.

Single source of truth for storage keys, the default field schema and default
preferences.
"""
from typing import Dict, List

from jobtracker.schemas.custom_field import CustomField
from jobtracker.schemas.preference import UserPreference

# Local storage keys
STORAGE_KEYS: Dict[str, str] = {
    "applications": "job_tracker_applications",
    "custom_fields": "job_tracker_custom_fields",
    "preferences": "job_tracker_preferences",
    "chart_configs": "job_tracker_chart_configs",
    "first_visit": "job_tracker_first_visit",
}

DEFAULT_STATUS_OPTIONS: List[dict] = [
    {"value": "applied", "label": "Applied", "color": "#0070F3"},
    {"value": "screening", "label": "Screening", "color": "#7928CA"},
    {"value": "interview_scheduled", "label": "Interview Scheduled", "color": "#F5A623"},
    {"value": "interview_completed", "label": "Interview Completed", "color": "#50E3C2"},
    {"value": "offer_received", "label": "Offer Received", "color": "#00C853"},
    {"value": "rejected", "label": "Rejected", "color": "#E00"},
    {"value": "withdrawn", "label": "Withdrawn", "color": "#A3A3A3"},
]

DEFAULT_CUSTOM_FIELD_RECORDS: List[dict] = [
    {"id": "companyName", "name": "Company Name", "type": "text", "required": True, "order": 1, "showInTable": True},
    {"id": "jobPosition", "name": "Job Position", "type": "text", "required": True, "order": 2, "showInTable": True},
    # Long text, better viewed in the detail view
    {"id": "jobDescription", "name": "Job Description", "type": "textarea", "required": False, "order": 3, "showInTable": False},
    {"id": "applicationDate", "name": "Application Date", "type": "date", "required": True, "order": 4, "showInTable": True},
    {"id": "status", "name": "Status", "type": "select", "required": True, "order": 5, "showInTable": True,
     "options": DEFAULT_STATUS_OPTIONS},
    {"id": "responseDate", "name": "First Response Date", "type": "date", "required": False, "order": 6, "showInTable": True},
]

DEFAULT_PREFERENCE_RECORD: dict = {"theme": "light", "defaultPagination": 20}


def default_custom_fields() -> List[CustomField]:
    """Fresh copy of the default field schema."""
    return [CustomField.model_validate(record) for record in DEFAULT_CUSTOM_FIELD_RECORDS]


def default_preferences() -> UserPreference:
    return UserPreference.model_validate(DEFAULT_PREFERENCE_RECORD)
