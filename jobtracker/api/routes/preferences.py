"""
User preference endpoints.
"""
from fastapi import APIRouter, Depends

from jobtracker.api.deps import ensure_saved, get_data_service
from jobtracker.schemas.preference import UserPreference
from jobtracker.services.data_service import DataService

router = APIRouter(prefix="/preferences", tags=["Preferences"])


@router.get("", response_model=UserPreference)
async def get_preferences(service: DataService = Depends(get_data_service)):
    return await service.load_preferences()


@router.put("", response_model=UserPreference)
async def save_preferences(
    preferences: UserPreference,
    service: DataService = Depends(get_data_service),
):
    ensure_saved(await service.save_preferences(preferences), "Preferences")
    return preferences
