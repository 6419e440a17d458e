"""
Session endpoints: which backend serves this caller, and the first-visit choices.
"""
import logging

from fastapi import APIRouter, Depends

from jobtracker.api.deps import ensure_saved, get_data_service
from jobtracker.services.data_service import DataService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/session", tags=["Session"])


@router.get("")
async def get_session(service: DataService = Depends(get_data_service)):
    mode = await service.get_current_mode()
    return {
        "mode": mode,
        "authenticated": mode == "authenticated",
        "first_visit": await service.is_first_visit(),
        "remote_configured": service.is_remote_configured(),
        "local_storage_available": service.is_local_storage_available(),
    }


@router.post("/demo-data")
async def load_demo_data(service: DataService = Depends(get_data_service)):
    """Seed the active backend with the sample applications and dashboards."""
    ensure_saved(await service.load_demo_data(), "Demo data")
    return {"success": True, "mode": await service.get_current_mode()}


@router.post("/start-fresh")
async def start_fresh(service: DataService = Depends(get_data_service)):
    ensure_saved(await service.start_from_scratch(), "Default data")
    logger.info("Started from scratch")
    return {"success": True, "mode": await service.get_current_mode()}
