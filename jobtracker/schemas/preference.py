"""
Pydantic schemas for user preferences.
"""
from typing import Literal
from pydantic import BaseModel, ConfigDict, Field

Theme = Literal["light", "dark", "system"]


class UserPreference(BaseModel):
    """Singleton settings per user or device."""
    model_config = ConfigDict(populate_by_name=True)

    theme: Theme = Field("light", description="UI theme")
    default_pagination: int = Field(20, ge=1, alias="defaultPagination", description="Table page size")
