"""
Unit tests for application and field definition validation.
"""
from jobtracker.core.defaults import default_custom_fields
from jobtracker.schemas.custom_field import CustomField, FieldOption
from jobtracker.services.validation_service import validate_application_data, validate_custom_field


def _valid_data(**overrides):
    data = {
        "companyName": "Acme",
        "jobPosition": "Engineer",
        "applicationDate": "2024-01-15",
        "status": "applied",
    }
    data.update(overrides)
    return data


def test_valid_application():
    result = validate_application_data(_valid_data(), default_custom_fields())

    assert result.is_valid is True
    assert result.errors == {}


def test_required_fields():
    result = validate_application_data(_valid_data(companyName="", status=None), default_custom_fields())

    assert result.is_valid is False
    assert result.errors == {
        "companyName": "Company Name is required",
        "status": "Status is required",
    }


def test_type_checks():
    fields = default_custom_fields() + [CustomField(id="salary", name="Salary", type="number", order=7)]

    result = validate_application_data(
        _valid_data(applicationDate="yesterday", status="ghosted", salary="a lot"),
        fields,
    )

    assert result.errors == {
        "applicationDate": "Application Date must be a valid date",
        "status": "Status must be a valid option",
        "salary": "Salary must be a valid number",
    }


def test_numbers_may_be_strings():
    fields = [CustomField(id="salary", name="Salary", type="number", order=1)]

    assert validate_application_data({"salary": "120000"}, fields).is_valid is True
    assert validate_application_data({"salary": True}, fields).is_valid is False


def test_unknown_keys_are_ignored():
    result = validate_application_data(_valid_data(legacyField="anything"), default_custom_fields())

    assert result.is_valid is True


def test_validate_custom_field():
    assert validate_custom_field("Salary", "number").is_valid is True

    missing = validate_custom_field("  ", None)
    assert set(missing.errors) == {"name", "type"}

    unknown = validate_custom_field("Salary", "money")
    assert unknown.errors["type"] == "Unknown field type: money"

    select = validate_custom_field("Source", "select", [])
    assert select.errors == {"options": "Select fields must have at least one option"}

    assert validate_custom_field("Source", "select", [FieldOption(value="a", label="A")]).is_valid is True
