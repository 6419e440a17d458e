"""
Unit tests for the local (demo) store.
Tests default fallbacks, quota handling and the first-visit flow.
"""
import json

import pytest

from jobtracker.core.defaults import STORAGE_KEYS
from jobtracker.schemas.application import Application, Note
from jobtracker.schemas.custom_field import CustomField
from jobtracker.schemas.preference import UserPreference
from jobtracker.core.demo_data import demo_chart_configs, demo_overview_cards
from jobtracker.services.local_store import (
    QUOTA_EXCEEDED_MESSAGE,
    FileStorage,
    LocalBackend,
    LocalStore,
    MemoryStorage,
)


def test_empty_store_returns_defaults(local_store):
    """Nothing stored yet: empty applications, default schema and preferences."""
    assert local_store.load_applications() == []

    fields = local_store.load_custom_fields()
    assert [f.id for f in fields] == [
        "companyName", "jobPosition", "jobDescription", "applicationDate", "status", "responseDate",
    ]

    preferences = local_store.load_preferences()
    assert preferences.theme == "light"
    assert preferences.default_pagination == 20

    assert local_store.load_chart_configs() is None


def test_malformed_documents_fall_back(storage, local_store):
    storage.set_item(STORAGE_KEYS["applications"], "{not json")
    storage.set_item(STORAGE_KEYS["custom_fields"], json.dumps({"not": "a list"}))
    storage.set_item(STORAGE_KEYS["preferences"], json.dumps({"theme": "purple"}))
    storage.set_item(STORAGE_KEYS["chart_configs"], json.dumps([1, 2, 3]))

    assert local_store.load_applications() == []
    assert len(local_store.load_custom_fields()) == 6
    assert local_store.load_preferences().theme == "light"
    assert local_store.load_chart_configs() is None


def test_fields_without_show_in_table_are_shown(storage, local_store):
    storage.set_item(STORAGE_KEYS["custom_fields"], json.dumps([
        {"id": "companyName", "name": "Company", "type": "text", "required": True, "order": 1},
    ]))

    fields = local_store.load_custom_fields()

    assert fields[0].show_in_table is True


def test_applications_round_trip_with_camel_case_keys(storage, local_store):
    app = Application(
        id="app-1",
        data={"companyName": "Acme", "salary": 100},
        notes=[Note(id="note-1", content="Called back", created_at="2024-01-01T00:00:00.000Z")],
        created_at="2024-01-01T00:00:00.000Z",
        updated_at="2024-01-02T00:00:00.000Z",
    )

    assert local_store.save_applications([app]) is True

    raw = json.loads(storage.get_item(STORAGE_KEYS["applications"]))
    assert raw[0]["createdAt"] == "2024-01-01T00:00:00.000Z"
    assert raw[0]["notes"][0]["createdAt"] == "2024-01-01T00:00:00.000Z"

    loaded = local_store.load_applications()
    assert loaded == [app]


def test_chart_configs_round_trip(local_store):
    assert local_store.save_chart_configs(demo_chart_configs(), demo_overview_cards()) is True

    bundle = local_store.load_chart_configs()

    assert [c.id for c in bundle.charts] == [c.id for c in demo_chart_configs()]
    assert len(bundle.overview_cards) == 4


def test_quota_exceeded_reports_false_and_alerts():
    alerts = []
    store = LocalStore(MemoryStorage(quota_bytes=200), on_quota_exceeded=alerts.append)

    saved = store.save_applications([Application(data={"companyName": "x" * 500})])

    assert saved is False
    assert alerts == [QUOTA_EXCEEDED_MESSAGE]
    assert store.load_applications() == []


def test_first_visit_and_demo_data(local_store):
    assert local_store.is_first_visit() is True

    assert local_store.load_demo_data() is True

    assert local_store.is_first_visit() is False
    assert len(local_store.load_applications()) == 10
    assert len(local_store.load_custom_fields()) == 9
    assert local_store.load_preferences().default_pagination == 10
    assert len(local_store.load_chart_configs().charts) == 4


def test_start_from_scratch(local_store):
    local_store.load_demo_data()

    assert local_store.start_from_scratch() is True

    assert local_store.load_applications() == []
    assert len(local_store.load_custom_fields()) == 6
    bundle = local_store.load_chart_configs()
    assert bundle is not None
    assert bundle.charts == []
    assert bundle.overview_cards == []


def test_clear_all_data_keeps_first_visit_marker(local_store):
    local_store.load_demo_data()

    local_store.clear_all_data()

    assert local_store.load_applications() == []
    assert local_store.load_chart_configs() is None
    assert local_store.is_first_visit() is False


def test_initialize_default_data_does_not_overwrite(local_store):
    custom = [CustomField(id="only", name="Only", type="text", order=1)]
    local_store.save_custom_fields(custom)

    local_store.initialize_default_data()

    assert [f.id for f in local_store.load_custom_fields()] == ["only"]
    assert local_store.load_preferences() == UserPreference()


def test_is_available():
    assert LocalStore(MemoryStorage()).is_available() is True
    assert LocalStore(MemoryStorage(quota_bytes=10)).is_available() is False


def test_file_storage_round_trip(tmp_path):
    store = LocalStore(FileStorage(tmp_path / "data"))

    assert store.save_preferences(UserPreference(theme="dark", default_pagination=50)) is True

    reopened = LocalStore(FileStorage(tmp_path / "data"))
    assert reopened.load_preferences().theme == "dark"
    assert (tmp_path / "data" / f"{STORAGE_KEYS['preferences']}.json").exists()

    reopened.clear_all_data()
    assert reopened.load_preferences().theme == "light"


@pytest.mark.anyio
async def test_local_backend_application_crud(local_backend):
    app = Application(id="app-1", data={"companyName": "Acme"})

    saved = await local_backend.save_application(app)
    assert saved == app
    assert local_backend.last_write_ok is True

    updated = await local_backend.update_application(app.with_data({"companyName": "Acme Corp"}))
    loaded = await local_backend.load_applications()
    assert loaded == [updated]

    await local_backend.delete_application("app-1")
    assert await local_backend.load_applications() == []


@pytest.mark.anyio
async def test_local_backend_echoes_input_when_write_fails():
    backend = LocalBackend(LocalStore(MemoryStorage(quota_bytes=100)))
    app = Application(data={"companyName": "x" * 500})

    saved = await backend.save_application(app)

    assert saved == app
    assert backend.last_write_ok is False
    assert await backend.load_applications() == []


@pytest.mark.anyio
async def test_local_backend_chart_configs_default_to_empty_bundle(local_backend):
    bundle = await local_backend.load_chart_configs()

    assert bundle.charts == []
    assert bundle.overview_cards == []


@pytest.mark.anyio
async def test_local_backend_bulk_replace_is_idempotent(local_backend):
    applications = [
        Application(id="app-1", data={"companyName": "Acme"}),
        Application(id="app-2", data={"companyName": "Globex"}),
    ]

    assert await local_backend.save_applications(applications) is True
    assert await local_backend.load_applications() == applications

    assert await local_backend.save_applications(applications) is True
    assert await local_backend.load_applications() == applications
