"""
Local (demo) persistence.

Stores the four tracker collections as JSON documents in a key-value medium on
this device. Reads never fail: missing or malformed documents fall back to the
documented defaults. Writes report failure as a boolean result.
"""
import errno
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from pydantic import TypeAdapter, ValidationError

from jobtracker.core.defaults import STORAGE_KEYS, default_custom_fields, default_preferences
from jobtracker.core.demo_data import (
    demo_applications,
    demo_chart_configs,
    demo_custom_fields,
    demo_overview_cards,
)
from jobtracker.core.errors import MalformedDataError, StorageQuotaExceeded
from jobtracker.schemas.application import Application
from jobtracker.schemas.custom_field import CustomField
from jobtracker.schemas.preference import UserPreference
from jobtracker.schemas.chart_config import ChartConfig, ChartConfigBundle, OverviewCardConfig
from jobtracker.services.backend import DataBackend

logger = logging.getLogger(__name__)

QUOTA_EXCEEDED_MESSAGE = "Storage limit reached. Please delete some applications or export your data."

_applications_adapter = TypeAdapter(List[Application])
_custom_fields_adapter = TypeAdapter(List[CustomField])


class KeyValueStorage(ABC):
    """Synchronous string key-value medium."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store `value`; raises StorageQuotaExceeded when the medium is full."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        ...


class MemoryStorage(KeyValueStorage):
    """In-process storage with an optional byte quota."""

    def __init__(self, quota_bytes: Optional[int] = None):
        self.quota_bytes = quota_bytes
        self._items: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.quota_bytes is not None:
            used = sum(len(k) + len(v) for k, v in self._items.items() if k != key)
            if used + len(key) + len(value) > self.quota_bytes:
                raise StorageQuotaExceeded(f"Writing {key} would exceed {self.quota_bytes} bytes")
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileStorage(KeyValueStorage):
    """One JSON file per key inside a directory."""

    def __init__(self, directory, quota_bytes: Optional[int] = None):
        self.directory = Path(directory)
        self.quota_bytes = quota_bytes

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        try:
            return self._path(key).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set_item(self, key: str, value: str) -> None:
        encoded = value.encode("utf-8")
        self.directory.mkdir(parents=True, exist_ok=True)

        if self.quota_bytes is not None:
            used = sum(
                path.stat().st_size
                for path in self.directory.glob("*.json")
                if path != self._path(key)
            )
            if used + len(encoded) > self.quota_bytes:
                raise StorageQuotaExceeded(f"Writing {key} would exceed {self.quota_bytes} bytes")

        fd, tmp_path = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(encoded)
            os.replace(tmp_path, self._path(key))
        except OSError as e:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            if e.errno in (errno.ENOSPC, getattr(errno, "EDQUOT", errno.ENOSPC)):
                raise StorageQuotaExceeded(str(e)) from e
            raise

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class LocalStore:
    """
    Synchronous record store for the demo (unauthenticated) mode.

    Args:
        storage: Key-value medium
        on_quota_exceeded: Called with a user-facing message when a write hits the quota
    """

    def __init__(self, storage: KeyValueStorage, on_quota_exceeded: Optional[Callable[[str], None]] = None):
        self.storage = storage
        self.on_quota_exceeded = on_quota_exceeded

    # ------------------------------------------------------------------
    # Raw document access
    # ------------------------------------------------------------------

    def _read(self, key: str) -> Optional[Any]:
        raw = self.storage.get_item(key)
        if raw is None or raw == "":
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise MalformedDataError(f"{key} does not hold valid JSON: {e}") from e

    def _write(self, key: str, document: Any) -> bool:
        try:
            self.storage.set_item(key, json.dumps(document))
            return True
        except StorageQuotaExceeded as e:
            logger.error(f"Local storage quota exceeded while saving {key}: {e}")
            if self.on_quota_exceeded:
                self.on_quota_exceeded(QUOTA_EXCEEDED_MESSAGE)
            return False
        except OSError as e:
            logger.error(f"Error saving {key} to local storage: {e}", exc_info=True)
            return False

    # ------------------------------------------------------------------
    # Applications
    # ------------------------------------------------------------------

    def load_applications(self) -> List[Application]:
        try:
            records = self._read(STORAGE_KEYS["applications"])
            if records is None:
                return []
            return _applications_adapter.validate_python(records)
        except (MalformedDataError, ValidationError) as e:
            logger.error(f"Error loading applications from local storage: {e}")
            return []

    def save_applications(self, applications: List[Application]) -> bool:
        documents = [app.model_dump(mode="json", by_alias=True, exclude_none=True) for app in applications]
        return self._write(STORAGE_KEYS["applications"], documents)

    # ------------------------------------------------------------------
    # Custom fields
    # ------------------------------------------------------------------

    def load_custom_fields(self) -> List[CustomField]:
        """Load field definitions, falling back to the default schema."""
        try:
            records = self._read(STORAGE_KEYS["custom_fields"])
            if records is None:
                return default_custom_fields()
            if not isinstance(records, list):
                raise MalformedDataError("custom fields document is not a list")
            # Records written before showInTable existed are shown in the table
            migrated = [
                {**record, "showInTable": record.get("showInTable", True)}
                if isinstance(record, dict) else record
                for record in records
            ]
            return _custom_fields_adapter.validate_python(migrated)
        except (MalformedDataError, ValidationError) as e:
            logger.error(f"Error loading custom fields from local storage: {e}")
            return default_custom_fields()

    def save_custom_fields(self, fields: List[CustomField]) -> bool:
        documents = [field.model_dump(mode="json", by_alias=True, exclude_none=True) for field in fields]
        return self._write(STORAGE_KEYS["custom_fields"], documents)

    # ------------------------------------------------------------------
    # Preferences
    # ------------------------------------------------------------------

    def load_preferences(self) -> UserPreference:
        try:
            record = self._read(STORAGE_KEYS["preferences"])
            if record is None:
                return default_preferences()
            return UserPreference.model_validate(record)
        except (MalformedDataError, ValidationError) as e:
            logger.error(f"Error loading preferences from local storage: {e}")
            return default_preferences()

    def save_preferences(self, preferences: UserPreference) -> bool:
        return self._write(STORAGE_KEYS["preferences"], preferences.model_dump(mode="json", by_alias=True))

    # ------------------------------------------------------------------
    # Chart configs
    # ------------------------------------------------------------------

    def load_chart_configs(self) -> Optional[ChartConfigBundle]:
        """Load charts and overview cards, or None if none were ever saved."""
        try:
            record = self._read(STORAGE_KEYS["chart_configs"])
            if record is None:
                return None
            if not isinstance(record, dict):
                raise MalformedDataError("chart configs document is not an object")
            return ChartConfigBundle.model_validate({
                "charts": record.get("charts") or [],
                "overviewCards": record.get("overviewCards") or [],
            })
        except (MalformedDataError, ValidationError) as e:
            logger.error(f"Error loading chart configs from local storage: {e}")
            return None

    def save_chart_configs(self, charts: List[ChartConfig], overview_cards: List[OverviewCardConfig]) -> bool:
        bundle = ChartConfigBundle(charts=charts, overview_cards=overview_cards)
        return self._write(
            STORAGE_KEYS["chart_configs"],
            bundle.model_dump(mode="json", by_alias=True, exclude_none=True),
        )

    # ------------------------------------------------------------------
    # First visit and seeding
    # ------------------------------------------------------------------

    def initialize_default_data(self):
        """Seed default fields and preferences when they are not stored yet."""
        if self.storage.get_item(STORAGE_KEYS["custom_fields"]) is None:
            self.save_custom_fields(default_custom_fields())
        if self.storage.get_item(STORAGE_KEYS["preferences"]) is None:
            self.save_preferences(default_preferences())

    def is_first_visit(self) -> bool:
        return self.storage.get_item(STORAGE_KEYS["first_visit"]) is None

    def mark_first_visit_complete(self):
        self._write(STORAGE_KEYS["first_visit"], True)

    def load_demo_data(self) -> bool:
        """Populate every collection with the sample data set."""
        results = [
            self.save_applications(demo_applications()),
            self.save_custom_fields(demo_custom_fields()),
            self.save_chart_configs(demo_chart_configs(), demo_overview_cards()),
            self.save_preferences(UserPreference(theme="light", default_pagination=10)),
        ]
        self.mark_first_visit_complete()
        return all(results)

    def start_from_scratch(self) -> bool:
        """Start with default fields and preferences but no applications or charts."""
        results = [
            self.save_applications([]),
            self.save_custom_fields(default_custom_fields()),
            self.save_chart_configs([], []),
            self.save_preferences(default_preferences()),
        ]
        self.mark_first_visit_complete()
        return all(results)

    def clear_all_data(self):
        """Remove every collection. The first-visit marker is kept."""
        for name in ("applications", "custom_fields", "preferences", "chart_configs"):
            self.storage.remove_item(STORAGE_KEYS[name])

    def is_available(self) -> bool:
        """Probe the medium with a throwaway key."""
        probe = "__storage_test__"
        try:
            self.storage.set_item(probe, probe)
            self.storage.remove_item(probe)
            return True
        except (StorageQuotaExceeded, OSError):
            return False


class LocalBackend(DataBackend):
    """DataBackend over a LocalStore; every write echoes its input."""

    name = "local"

    def __init__(self, store: LocalStore):
        self.store = store
        self.last_write_ok = True

    def _replace_applications(self, applications: List[Application], what: str) -> bool:
        self.last_write_ok = self.store.save_applications(applications)
        if not self.last_write_ok:
            logger.warning(f"{what} was not persisted locally")
        return self.last_write_ok

    async def load_applications(self) -> List[Application]:
        return self.store.load_applications()

    async def save_application(self, application: Application) -> Application:
        existing = self.store.load_applications()
        self._replace_applications([*existing, application], f"Application {application.id}")
        return application

    async def update_application(self, application: Application) -> Application:
        existing = self.store.load_applications()
        updated = [application if app.id == application.id else app for app in existing]
        self._replace_applications(updated, f"Application {application.id} update")
        return application

    async def delete_application(self, application_id: str) -> None:
        existing = self.store.load_applications()
        self._replace_applications(
            [app for app in existing if app.id != application_id],
            f"Deletion of application {application_id}",
        )

    async def save_applications(self, applications: List[Application]) -> bool:
        return self.store.save_applications(applications)

    async def load_custom_fields(self) -> List[CustomField]:
        return self.store.load_custom_fields()

    async def save_custom_fields(self, fields: List[CustomField]) -> bool:
        return self.store.save_custom_fields(fields)

    async def load_preferences(self) -> UserPreference:
        return self.store.load_preferences()

    async def save_preferences(self, preferences: UserPreference) -> bool:
        return self.store.save_preferences(preferences)

    async def load_chart_configs(self) -> ChartConfigBundle:
        return self.store.load_chart_configs() or ChartConfigBundle()

    async def save_chart_configs(
        self,
        charts: List[ChartConfig],
        overview_cards: List[OverviewCardConfig],
    ) -> bool:
        return self.store.save_chart_configs(charts, overview_cards)

    async def is_first_visit(self) -> bool:
        return self.store.is_first_visit()

    async def load_demo_data(self) -> bool:
        return self.store.load_demo_data()
