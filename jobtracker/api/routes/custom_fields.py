"""
Custom field endpoints.

The field list is always written whole; orders are renumbered 1..N before saving.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from jobtracker.api.deps import ensure_saved, get_data_service
from jobtracker.schemas.custom_field import CustomField, CustomFieldCreate
from jobtracker.services import field_service
from jobtracker.services.data_service import DataService
from jobtracker.services.validation_service import validate_custom_field

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/custom-fields", tags=["Custom Fields"])


def _check(name: str, field_type: str, options) -> None:
    result = validate_custom_field(name, field_type, options)
    if not result.is_valid:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": "Invalid field", "errors": result.errors},
        )


@router.get("", response_model=List[CustomField])
async def list_custom_fields(service: DataService = Depends(get_data_service)):
    return await service.load_custom_fields()


@router.put("", response_model=List[CustomField])
async def replace_custom_fields(
    fields: List[CustomField],
    service: DataService = Depends(get_data_service),
):
    for field in fields:
        _check(field.name, field.type, field.options)
    if len({field.id for field in fields}) != len(fields):
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="Duplicate field ids")

    ordered = field_service.renumber_fields(field_service.sort_fields(fields))
    ensure_saved(await service.save_custom_fields(ordered), "Custom fields")
    return ordered


@router.post("", status_code=status.HTTP_201_CREATED, response_model=List[CustomField])
async def add_custom_field(
    payload: CustomFieldCreate,
    service: DataService = Depends(get_data_service),
):
    """Append a new field to the schema and return the updated list."""
    _check(payload.name, payload.type, payload.options)
    fields = await service.load_custom_fields()
    new_field = CustomField(
        id=field_service.generate_field_id(f.id for f in fields),
        name=payload.name.strip(),
        type=payload.type,
        required=payload.required,
        order=len(fields) + 1,
        show_in_table=payload.show_in_table,
        options=payload.options if payload.type == "select" else None,
        default_value=payload.default_value,
    )
    updated = field_service.add_field(fields, new_field)
    ensure_saved(await service.save_custom_fields(updated), "Custom fields")
    logger.info(f"Custom field added: field_id={new_field.id}, type={new_field.type}")
    return updated


@router.delete("/{field_id}", response_model=List[CustomField])
async def delete_custom_field(
    field_id: str,
    service: DataService = Depends(get_data_service),
):
    """Remove a field definition; values already stored under it are kept."""
    fields = await service.load_custom_fields()
    if not any(f.id == field_id for f in fields):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Field not found")
    updated = field_service.delete_field(fields, field_id)
    ensure_saved(await service.save_custom_fields(updated), "Custom fields")
    return updated
