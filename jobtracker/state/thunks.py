"""
Async operations that move data between the DataService and the Store.

Each operation marks its slice as loading, calls the service, then dispatches
the result or records the error message in the slice. Nothing is retried; a
caller retries by running the same operation again.
"""
import asyncio
import logging
from typing import Dict, List, Optional

from jobtracker.core.errors import TrackerError
from jobtracker.schemas.application import Application, FieldValue, Note
from jobtracker.schemas.chart_config import (
    ChartConfig,
    ChartConfigBundle,
    OverviewCardConfig,
    get_default_chart_configs,
    get_default_overview_card_configs,
)
from jobtracker.schemas.custom_field import CustomField
from jobtracker.schemas.preference import UserPreference
from jobtracker.services.data_service import DataService
from jobtracker.services.local_store import QUOTA_EXCEEDED_MESSAGE
from jobtracker.state.slices import applications, chart_configs, custom_fields, preferences
from jobtracker.state.store import Store

logger = logging.getLogger(__name__)


def _fail(store: Store, set_error, message: str, error: TrackerError):
    logger.error(f"{message}: {error}")
    store.dispatch(set_error(str(error) or message))


def _not_stored(store: Store, message: str) -> None:
    logger.error(f"{message}: local storage refused the write")
    store.dispatch(applications.set_error(QUOTA_EXCEEDED_MESSAGE))


# ============================================
# APPLICATIONS
# ============================================

async def fetch_applications(store: Store, service: DataService) -> bool:
    store.dispatch(applications.set_loading(True))
    try:
        items = await service.load_applications()
    except TrackerError as e:
        _fail(store, applications.set_error, "Failed to fetch applications", e)
        return False
    store.dispatch(applications.set_applications(items))
    store.dispatch(applications.set_loading(False))
    return True


async def create_application(
    store: Store,
    service: DataService,
    data: Dict[str, FieldValue],
) -> Optional[Application]:
    """Create an application from validated form values and add the persisted copy to the store."""
    store.dispatch(applications.set_loading(True))
    try:
        saved = await service.save_application(Application.create(data))
    except TrackerError as e:
        _fail(store, applications.set_error, "Failed to create application", e)
        return None
    if not service.last_write_ok:
        _not_stored(store, "Failed to create application")
        return None
    store.dispatch(applications.add_application(saved))
    store.dispatch(applications.set_loading(False))
    return saved


async def _persist_application(store: Store, service: DataService, updated: Application, message: str):
    store.dispatch(applications.set_loading(True))
    try:
        saved = await service.update_application(updated)
    except TrackerError as e:
        _fail(store, applications.set_error, message, e)
        return None
    if not service.last_write_ok:
        _not_stored(store, message)
        return None
    store.dispatch(applications.update_application(saved))
    store.dispatch(applications.set_loading(False))
    return saved


def _require_application(store: Store, application_id: str) -> Application:
    application = store.get_state().applications.find(application_id)
    if application is None:
        raise KeyError(f"Application {application_id} is not loaded")
    return application


async def edit_application(
    store: Store,
    service: DataService,
    application_id: str,
    data: Dict[str, FieldValue],
) -> Optional[Application]:
    current = _require_application(store, application_id)
    return await _persist_application(store, service, current.with_data(data), "Failed to update application")


async def remove_application(store: Store, service: DataService, application_id: str) -> bool:
    store.dispatch(applications.set_loading(True))
    try:
        await service.delete_application(application_id)
    except TrackerError as e:
        _fail(store, applications.set_error, "Failed to delete application", e)
        return False
    if not service.last_write_ok:
        _not_stored(store, "Failed to delete application")
        return False
    store.dispatch(applications.delete_application(application_id))
    store.dispatch(applications.set_loading(False))
    return True


async def add_note(store: Store, service: DataService, application_id: str, content: str) -> Optional[Application]:
    current = _require_application(store, application_id)
    updated = current.with_note(Note(content=content))
    return await _persist_application(store, service, updated, "Failed to add note")


async def edit_note(
    store: Store,
    service: DataService,
    application_id: str,
    note_id: str,
    content: str,
) -> Optional[Application]:
    current = _require_application(store, application_id)
    if current.find_note(note_id) is None:
        raise KeyError(f"Note {note_id} not found on application {application_id}")
    updated = current.with_note_content(note_id, content)
    return await _persist_application(store, service, updated, "Failed to update note")


async def remove_note(store: Store, service: DataService, application_id: str, note_id: str) -> Optional[Application]:
    current = _require_application(store, application_id)
    return await _persist_application(store, service, current.without_note(note_id), "Failed to delete note")


# ============================================
# CUSTOM FIELDS
# ============================================

async def fetch_custom_fields(store: Store, service: DataService) -> bool:
    store.dispatch(custom_fields.set_loading(True))
    try:
        fields = await service.load_custom_fields()
    except TrackerError as e:
        _fail(store, custom_fields.set_error, "Failed to fetch custom fields", e)
        return False
    store.dispatch(custom_fields.set_fields(fields))
    store.dispatch(custom_fields.set_loading(False))
    return True


async def persist_custom_fields(store: Store, service: DataService, fields: List[CustomField]) -> bool:
    """Save the complete field list and mirror it in the store when the write succeeded."""
    store.dispatch(custom_fields.set_loading(True))
    try:
        saved = await service.save_custom_fields(fields)
    except TrackerError as e:
        _fail(store, custom_fields.set_error, "Failed to save custom fields", e)
        return False
    if not saved:
        store.dispatch(custom_fields.set_error("Failed to save custom fields"))
        return False
    store.dispatch(custom_fields.set_fields(fields))
    store.dispatch(custom_fields.set_loading(False))
    return True


# ============================================
# PREFERENCES
# ============================================

async def fetch_preferences(store: Store, service: DataService) -> bool:
    store.dispatch(preferences.set_loading(True))
    try:
        loaded = await service.load_preferences()
    except TrackerError as e:
        _fail(store, preferences.set_error, "Failed to fetch preferences", e)
        return False
    store.dispatch(preferences.set_preferences(loaded))
    store.dispatch(preferences.set_loading(False))
    return True


async def persist_preferences(store: Store, service: DataService, updated: UserPreference) -> bool:
    store.dispatch(preferences.set_loading(True))
    try:
        saved = await service.save_preferences(updated)
    except TrackerError as e:
        _fail(store, preferences.set_error, "Failed to save preferences", e)
        return False
    if not saved:
        store.dispatch(preferences.set_error("Failed to save preferences"))
        return False
    store.dispatch(preferences.set_preferences(updated))
    store.dispatch(preferences.set_loading(False))
    return True


# ============================================
# CHART CONFIGS
# ============================================

async def fetch_chart_configs(store: Store, service: DataService) -> bool:
    """Load chart configs; on failure the slice falls back to the default charts."""
    store.dispatch(chart_configs.set_loading(True))
    try:
        bundle = await service.load_chart_configs()
    except TrackerError as e:
        store.dispatch(chart_configs.set_configs(ChartConfigBundle(
            charts=get_default_chart_configs(),
            overview_cards=get_default_overview_card_configs(),
        )))
        _fail(store, chart_configs.set_error, "Failed to fetch chart configs", e)
        return False
    store.dispatch(chart_configs.set_configs(bundle))
    store.dispatch(chart_configs.set_loading(False))
    return True


async def persist_chart_configs(
    store: Store,
    service: DataService,
    charts: List[ChartConfig],
    overview_cards: List[OverviewCardConfig],
) -> bool:
    store.dispatch(chart_configs.set_loading(True))
    try:
        saved = await service.save_chart_configs(charts, overview_cards)
    except TrackerError as e:
        _fail(store, chart_configs.set_error, "Failed to save chart configs", e)
        return False
    if not saved:
        store.dispatch(chart_configs.set_error("Failed to save chart configs"))
        return False
    store.dispatch(chart_configs.set_configs(ChartConfigBundle(charts=charts, overview_cards=overview_cards)))
    store.dispatch(chart_configs.set_loading(False))
    return True


# ============================================
# SESSION
# ============================================

async def bootstrap(store: Store, service: DataService) -> bool:
    """Load all four collections concurrently; True when every load succeeded."""
    results = await asyncio.gather(
        fetch_applications(store, service),
        fetch_custom_fields(store, service),
        fetch_preferences(store, service),
        fetch_chart_configs(store, service),
    )
    return all(results)


async def choose_demo_data(store: Store, service: DataService) -> bool:
    """Seed the active backend with the sample data set, then reload everything."""
    try:
        seeded = await service.load_demo_data()
    except TrackerError as e:
        _fail(store, applications.set_error, "Failed to load demo data", e)
        return False
    loaded = await bootstrap(store, service)
    return seeded and loaded


async def choose_empty_start(store: Store, service: DataService) -> bool:
    """Start with the default schema and no applications, then reload everything."""
    try:
        started = await service.start_from_scratch()
    except TrackerError as e:
        _fail(store, applications.set_error, "Failed to start from scratch", e)
        return False
    loaded = await bootstrap(store, service)
    return started and loaded
