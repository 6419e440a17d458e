"""
Custom fields slice: the field schema, kept densely ordered.
"""
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from jobtracker.schemas.custom_field import CustomField
from jobtracker.services import field_service
from jobtracker.state.slice import Slice


@dataclass(frozen=True)
class CustomFieldsState:
    fields: Tuple[CustomField, ...] = ()
    loading: bool = False
    error: Optional[str] = None


custom_fields_slice = Slice("custom_fields", CustomFieldsState())


def _with_fields(state: CustomFieldsState, fields: List[CustomField]) -> CustomFieldsState:
    return replace(state, fields=tuple(fields))


@custom_fields_slice.case("set_fields")
def set_fields(state: CustomFieldsState, fields) -> CustomFieldsState:
    return _with_fields(state, field_service.sort_fields(list(fields)))


@custom_fields_slice.case("add_field")
def add_field(state: CustomFieldsState, field: CustomField) -> CustomFieldsState:
    if any(existing.id == field.id for existing in state.fields):
        return state
    return _with_fields(state, field_service.add_field(list(state.fields), field))


@custom_fields_slice.case("update_field")
def update_field(state: CustomFieldsState, field: CustomField) -> CustomFieldsState:
    return _with_fields(state, field_service.update_field(list(state.fields), field))


@custom_fields_slice.case("delete_field")
def delete_field(state: CustomFieldsState, field_id: str) -> CustomFieldsState:
    return _with_fields(state, field_service.delete_field(list(state.fields), field_id))


@custom_fields_slice.case("reorder_fields")
def reorder_fields(state: CustomFieldsState, ordered) -> CustomFieldsState:
    """payload: fields in their new order, or their ids"""
    ids = [item if isinstance(item, str) else item.id for item in ordered]
    return _with_fields(state, field_service.reorder_fields(list(state.fields), ids))


@custom_fields_slice.case("move_field_up")
def move_field_up(state: CustomFieldsState, field_id: str) -> CustomFieldsState:
    return _with_fields(state, field_service.move_field_up(list(state.fields), field_id))


@custom_fields_slice.case("move_field_down")
def move_field_down(state: CustomFieldsState, field_id: str) -> CustomFieldsState:
    return _with_fields(state, field_service.move_field_down(list(state.fields), field_id))


@custom_fields_slice.case("set_loading")
def set_loading(state: CustomFieldsState, loading: bool) -> CustomFieldsState:
    return replace(state, loading=loading, error=None if loading else state.error)


@custom_fields_slice.case("set_error")
def set_error(state: CustomFieldsState, error: Optional[str]) -> CustomFieldsState:
    return replace(state, error=error, loading=False)
