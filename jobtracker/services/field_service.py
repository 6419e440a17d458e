"""
Field schema operations.

All functions return new lists; the `order` values of the result always run
1..N in list position.
"""
import logging
import time
from typing import Iterable, List, Optional

from jobtracker.schemas.custom_field import CustomField

logger = logging.getLogger(__name__)


def generate_field_id(existing_ids: Iterable[str] = ()) -> str:
    """Return a `field_<millis>` id not present in `existing_ids`."""
    taken = set(existing_ids)
    stamp = int(time.time() * 1000)
    while f"field_{stamp}" in taken:
        stamp += 1
    return f"field_{stamp}"


def sort_fields(fields: List[CustomField]) -> List[CustomField]:
    return sorted(fields, key=lambda f: f.order)


def renumber_fields(fields: List[CustomField]) -> List[CustomField]:
    """Assign dense orders 1..N following list position."""
    return [
        f if f.order == index else f.model_copy(update={"order": index})
        for index, f in enumerate(fields, start=1)
    ]


def add_field(fields: List[CustomField], new_field: CustomField) -> List[CustomField]:
    """Append a field at the end of the schema."""
    if any(f.id == new_field.id for f in fields):
        raise ValueError(f"Field {new_field.id} already exists")
    return renumber_fields([*sort_fields(fields), new_field])


def update_field(fields: List[CustomField], updated: CustomField) -> List[CustomField]:
    """Replace the field with the same id, keeping its position."""
    return renumber_fields([updated if f.id == updated.id else f for f in sort_fields(fields)])


def delete_field(fields: List[CustomField], field_id: str) -> List[CustomField]:
    """
    Remove a field definition.

    Values stored under this id in application data are left alone.
    """
    remaining = [f for f in sort_fields(fields) if f.id != field_id]
    if len(remaining) == len(fields):
        logger.warning(f"Field {field_id} not found, schema unchanged")
    return renumber_fields(remaining)


def reorder_fields(fields: List[CustomField], ordered_ids: List[str]) -> List[CustomField]:
    """
    Arrange fields in the order of `ordered_ids`.

    Fields missing from `ordered_ids` keep their relative order after the listed ones.
    Repeated ids are placed once, at their first position.
    """
    by_id = {f.id: f for f in fields}
    listed = []
    listed_ids = set()
    for field_id in ordered_ids:
        if field_id in by_id and field_id not in listed_ids:
            listed.append(by_id[field_id])
            listed_ids.add(field_id)
    rest = [f for f in sort_fields(fields) if f.id not in listed_ids]
    return renumber_fields(listed + rest)


def _move(fields: List[CustomField], field_id: str, offset: int) -> List[CustomField]:
    ordered = sort_fields(fields)
    index = _index_of(ordered, field_id)
    target = index + offset if index is not None else None
    if target is None or target < 0 or target >= len(ordered):
        return renumber_fields(ordered)
    ordered[index], ordered[target] = ordered[target], ordered[index]
    return renumber_fields(ordered)


def _index_of(fields: List[CustomField], field_id: str) -> Optional[int]:
    for index, f in enumerate(fields):
        if f.id == field_id:
            return index
    return None


def move_field_up(fields: List[CustomField], field_id: str) -> List[CustomField]:
    return _move(fields, field_id, -1)


def move_field_down(fields: List[CustomField], field_id: str) -> List[CustomField]:
    return _move(fields, field_id, 1)
