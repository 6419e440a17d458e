"""
Pydantic schemas for job applications and their notes.
"""
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

# Closed set of values a dynamic field can hold. Dates travel as ISO strings.
FieldValue = Union[bool, int, float, str, None]


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def generate_application_id() -> str:
    return f"app-{uuid.uuid4().hex}"


def generate_note_id() -> str:
    return f"note-{uuid.uuid4().hex}"


class Note(BaseModel):
    """A note attached to one application."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=generate_note_id, description="Note ID, unique within its application")
    content: str = Field(..., description="Note text")
    created_at: str = Field(default_factory=utc_now_iso, alias="createdAt")
    updated_at: Optional[str] = Field(None, alias="updatedAt", description="Set when the note is edited")


class Application(BaseModel):
    """
    One job application.
    
    `data` is keyed by custom field id; which keys exist depends on the field
    definitions that were present when each value was written.
    """
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "app-1730808000000-0",
                "data": {
                    "companyName": "Tech Corp",
                    "applicationDate": "2026-01-15",
                    "status": "applied",
                },
                "notes": [],
                "createdAt": "2026-01-15T09:00:00.000Z",
                "updatedAt": "2026-01-15T09:00:00.000Z",
            }
        },
    )

    id: str = Field(default_factory=generate_application_id, description="Application ID")
    data: Dict[str, FieldValue] = Field(default_factory=dict, description="Values keyed by custom field id")
    notes: List[Note] = Field(default_factory=list, description="Notes in display order")
    created_at: str = Field(default_factory=utc_now_iso, alias="createdAt")
    updated_at: str = Field(default_factory=utc_now_iso, alias="updatedAt")

    @classmethod
    def create(cls, data: Dict[str, FieldValue], now: Optional[str] = None) -> "Application":
        """Build a brand new application with a fresh id and empty notes."""
        timestamp = now or utc_now_iso()
        return cls(data=dict(data), notes=[], created_at=timestamp, updated_at=timestamp)

    def with_data(self, data: Dict[str, FieldValue], now: Optional[str] = None) -> "Application":
        return self.model_copy(update={"data": dict(data), "updated_at": now or utc_now_iso()})

    def with_note(self, note: Note, now: Optional[str] = None) -> "Application":
        if any(existing.id == note.id for existing in self.notes):
            raise ValueError(f"Note {note.id} already exists on application {self.id}")
        return self.model_copy(update={
            "notes": [*self.notes, note],
            "updated_at": now or utc_now_iso(),
        })

    def with_note_content(self, note_id: str, content: str, now: Optional[str] = None) -> "Application":
        timestamp = now or utc_now_iso()
        notes = [
            note.model_copy(update={"content": content, "updated_at": timestamp}) if note.id == note_id else note
            for note in self.notes
        ]
        return self.model_copy(update={"notes": notes, "updated_at": timestamp})

    def without_note(self, note_id: str, now: Optional[str] = None) -> "Application":
        notes = [note for note in self.notes if note.id != note_id]
        return self.model_copy(update={"notes": notes, "updated_at": now or utc_now_iso()})

    def find_note(self, note_id: str) -> Optional[Note]:
        return next((note for note in self.notes if note.id == note_id), None)


class ApplicationCreate(BaseModel):
    """Request body for creating an application from a validated form."""
    data: Dict[str, FieldValue] = Field(..., description="Values keyed by custom field id")


class ApplicationUpdate(BaseModel):
    """Request body for replacing an application's field values."""
    data: Dict[str, FieldValue] = Field(..., description="Values keyed by custom field id")


class NoteCreate(BaseModel):
    content: str = Field(..., min_length=1, description="Note text")


class NoteUpdate(BaseModel):
    content: str = Field(..., min_length=1, description="Note text")
