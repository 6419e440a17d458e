"""
Validation service for application data and field definitions.

Checks run when values are written; existing records are never re-validated
after the schema changes.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from jobtracker.core.dates import is_valid_date
from jobtracker.schemas.custom_field import CustomField, FIELD_TYPES


@dataclass
class ValidationResult:
    is_valid: bool
    errors: Dict[str, str] = field(default_factory=dict)


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    try:
        float(str(value).strip())
        return True
    except ValueError:
        return False


def validate_application_data(data: Dict[str, Any], custom_fields: List[CustomField]) -> ValidationResult:
    """
    Validate application values against the field definitions.

    Args:
        data: Values keyed by field id
        custom_fields: Current field definitions

    Returns:
        ValidationResult with one message per failing field id
    """
    errors: Dict[str, str] = {}

    for custom_field in custom_fields:
        value = data.get(custom_field.id)

        if _is_empty(value):
            if custom_field.required:
                errors[custom_field.id] = f"{custom_field.name} is required"
            continue

        if custom_field.type == "number" and not _is_number(value):
            errors[custom_field.id] = f"{custom_field.name} must be a valid number"
        elif custom_field.type == "date" and not is_valid_date(value):
            errors[custom_field.id] = f"{custom_field.name} must be a valid date"
        elif custom_field.type == "select" and custom_field.options and custom_field.find_option(value) is None:
            errors[custom_field.id] = f"{custom_field.name} must be a valid option"

    return ValidationResult(is_valid=not errors, errors=errors)


def validate_custom_field(
    name: Optional[str],
    field_type: Optional[str],
    options: Optional[list] = None,
) -> ValidationResult:
    """Check a field definition before it is added or edited."""
    errors: Dict[str, str] = {}

    if not name or not name.strip():
        errors["name"] = "Field name is required"

    if not field_type:
        errors["type"] = "Field type is required"
    elif field_type not in FIELD_TYPES:
        errors["type"] = f"Unknown field type: {field_type}"

    if field_type == "select" and not options:
        errors["options"] = "Select fields must have at least one option"

    return ValidationResult(is_valid=not errors, errors=errors)
