"""
Field role resolution.

The field schema is user-defined, so "the application date field" or "the
status field" has no guaranteed id. Every aggregation that needs one of these
roles asks this module, which is the only place the lookup rules live.
"""
from enum import Enum
from typing import Dict, List, Optional, Tuple

from jobtracker.schemas.custom_field import CustomField


class FieldRole(str, Enum):
    APPLICATION_DATE = "application_date"
    RESPONSE_DATE = "response_date"
    STATUS = "status"


# Fixed ids used by older default schemas
LEGACY_FIELD_IDS: Dict[FieldRole, str] = {
    FieldRole.APPLICATION_DATE: "applicationDate",
    FieldRole.RESPONSE_DATE: "responseDate",
    FieldRole.STATUS: "status",
}

# (required type, name substrings) per role; names are matched lowercase
_ROLE_RULES: Dict[FieldRole, Tuple[str, Tuple[str, ...]]] = {
    FieldRole.APPLICATION_DATE: ("date", ("application", "date applied")),
    FieldRole.RESPONSE_DATE: ("date", ("response",)),
    FieldRole.STATUS: ("select", ("status",)),
}


def resolve_field(fields: List[CustomField], role: FieldRole) -> Optional[CustomField]:
    """
    Find the field playing `role`.

    The legacy id wins when present with the right type; otherwise the first
    field (in list order) of the right type whose name contains one of the
    role's keywords. Returns None when nothing matches.
    """
    field_type, keywords = _ROLE_RULES[role]

    legacy_id = LEGACY_FIELD_IDS[role]
    for field in fields:
        if field.id == legacy_id and field.type == field_type:
            return field

    for field in fields:
        if field.type != field_type:
            continue
        name = field.name.lower()
        if any(keyword in name for keyword in keywords):
            return field

    return None


def resolve_field_id(fields: List[CustomField], role: FieldRole) -> Optional[str]:
    field = resolve_field(fields, role)
    return field.id if field else None
