"""
Application endpoints.

CRUD for applications and their notes through the data service. Values are
validated against the current field schema before they are written.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from jobtracker.api.deps import ensure_saved, get_data_service
from jobtracker.schemas.application import (
    Application,
    ApplicationCreate,
    ApplicationUpdate,
    Note,
    NoteCreate,
    NoteUpdate,
)
from jobtracker.services.data_service import DataService
from jobtracker.services.validation_service import validate_application_data

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/applications", tags=["Applications"])


async def _validated(service: DataService, data: dict) -> dict:
    fields = await service.load_custom_fields()
    result = validate_application_data(data, fields)
    if not result.is_valid:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": "Invalid application data", "errors": result.errors},
        )
    return data


async def _get_application(service: DataService, application_id: str) -> Application:
    applications = await service.load_applications()
    application = next((app for app in applications if app.id == application_id), None)
    if application is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Application not found",
        )
    return application


@router.get("", response_model=List[Application])
async def list_applications(service: DataService = Depends(get_data_service)):
    return await service.load_applications()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Application)
async def create_application(
    payload: ApplicationCreate,
    service: DataService = Depends(get_data_service),
):
    """
    Create a new application from form values.

    The id and timestamps are assigned here; notes start empty.
    """
    data = await _validated(service, payload.data)
    application = await service.save_application(Application.create(data))
    ensure_saved(service.last_write_ok, "Application")
    logger.info(f"Application created: application_id={application.id}")
    return application


@router.put("", response_model=dict)
async def replace_applications(
    applications: List[Application],
    service: DataService = Depends(get_data_service),
):
    """Replace the whole collection with the given list."""
    ensure_saved(await service.save_applications(applications), "Applications")
    return {"success": True, "count": len(applications)}


@router.put("/{application_id}", response_model=Application)
async def update_application(
    application_id: str,
    payload: ApplicationUpdate,
    service: DataService = Depends(get_data_service),
):
    current = await _get_application(service, application_id)
    data = await _validated(service, payload.data)
    updated = await service.update_application(current.with_data(data))
    ensure_saved(service.last_write_ok, "Application")
    return updated


@router.delete("/{application_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_application(
    application_id: str,
    service: DataService = Depends(get_data_service),
):
    await _get_application(service, application_id)
    await service.delete_application(application_id)
    ensure_saved(service.last_write_ok, "Application deletion")
    logger.info(f"Application deleted: application_id={application_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================
# NOTES
# ============================================

@router.post("/{application_id}/notes", status_code=status.HTTP_201_CREATED, response_model=Application)
async def add_note(
    application_id: str,
    payload: NoteCreate,
    service: DataService = Depends(get_data_service),
):
    current = await _get_application(service, application_id)
    updated = await service.update_application(current.with_note(Note(content=payload.content)))
    ensure_saved(service.last_write_ok, "Note")
    return updated


@router.put("/{application_id}/notes/{note_id}", response_model=Application)
async def update_note(
    application_id: str,
    note_id: str,
    payload: NoteUpdate,
    service: DataService = Depends(get_data_service),
):
    current = await _get_application(service, application_id)
    if current.find_note(note_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
    updated = await service.update_application(current.with_note_content(note_id, payload.content))
    ensure_saved(service.last_write_ok, "Note")
    return updated


@router.delete("/{application_id}/notes/{note_id}", response_model=Application)
async def delete_note(
    application_id: str,
    note_id: str,
    service: DataService = Depends(get_data_service),
):
    current = await _get_application(service, application_id)
    if current.find_note(note_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
    updated = await service.update_application(current.without_note(note_id))
    ensure_saved(service.last_write_ok, "Note deletion")
    return updated
