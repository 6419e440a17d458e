"""
Pydantic schemas for user-defined fields.
"""
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

from jobtracker.schemas.application import FieldValue

FieldType = Literal["text", "textarea", "date", "select", "number", "checkbox"]

FIELD_TYPES = ("text", "textarea", "date", "select", "number", "checkbox")


class FieldOption(BaseModel):
    """One choice of a select field."""
    value: str = Field(..., description="Stable key stored in application data")
    label: str = Field(..., description="Display text")
    color: Optional[str] = Field(None, description="Hex color for badges and legends")


class CustomField(BaseModel):
    """A user-configurable column on application records."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Key used in Application.data")
    name: str = Field(..., description="Display label")
    type: FieldType = Field(..., description="Drives form rendering and aggregation")
    required: bool = Field(False, description="Enforced when values are written")
    order: int = Field(..., description="Position in forms and reports, dense from 1")
    show_in_table: bool = Field(True, alias="showInTable")
    options: Optional[List[FieldOption]] = Field(None, description="Only for select fields")
    default_value: Optional[FieldValue] = Field(None, alias="defaultValue")

    def find_option(self, value) -> Optional[FieldOption]:
        for option in self.options or []:
            if option.value == value:
                return option
        return None


class CustomFieldCreate(BaseModel):
    """Request body for adding a field; id and order are assigned by the server."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="Display label")
    type: FieldType
    required: bool = False
    show_in_table: bool = Field(True, alias="showInTable")
    options: Optional[List[FieldOption]] = None
    default_value: Optional[FieldValue] = Field(None, alias="defaultValue")
