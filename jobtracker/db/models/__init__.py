"""
Database models module.

This module imports all database models to ensure they are registered with SQLAlchemy's Base.metadata
before table creation.

All models must be imported here to be included in database migrations and table creation.
"""
from jobtracker.db.models.application import ApplicationRecord
from jobtracker.db.models.note import NoteRecord
from jobtracker.db.models.custom_field import CustomFieldRecord
from jobtracker.db.models.user_preference import UserPreferenceRecord
from jobtracker.db.models.chart_config import ChartConfigRecord

# Explicitly export all models for clarity
__all__ = [
    "ApplicationRecord",
    "NoteRecord",
    "CustomFieldRecord",
    "UserPreferenceRecord",
    "ChartConfigRecord",
]
