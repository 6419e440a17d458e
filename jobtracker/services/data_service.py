"""
Data service: routes every tracker operation to the local or remote backend.

Authentication is probed on each call, so signing in or out between two calls
switches the backend for the second one. Errors from the chosen backend are
passed through unchanged.
"""
import logging
from typing import List, Literal, Optional

from jobtracker.core.auth import AuthProvider
from jobtracker.core.defaults import default_custom_fields, default_preferences
from jobtracker.schemas.application import Application
from jobtracker.schemas.custom_field import CustomField
from jobtracker.schemas.preference import UserPreference
from jobtracker.schemas.chart_config import ChartConfig, ChartConfigBundle, OverviewCardConfig
from jobtracker.services.backend import DataBackend
from jobtracker.services.local_store import LocalBackend

logger = logging.getLogger(__name__)

Mode = Literal["authenticated", "demo"]


class DataService:
    """
    Single async API over both backends.

    Args:
        local: Backend used when nobody is signed in
        remote: Backend used for a signed-in identity (None when not configured)
        auth: Identity provider probed before every call

    `last_write_ok` reports whether the last single-application write of this
    service actually reached storage; the local backend echoes its input either way.
    """

    def __init__(
        self,
        local: LocalBackend,
        remote: Optional[DataBackend] = None,
        auth: Optional[AuthProvider] = None,
    ):
        self.local = local
        self.remote = remote
        self.auth = auth
        self.last_write_ok = True

    def is_remote_configured(self) -> bool:
        return self.remote is not None and self.auth is not None

    async def is_authenticated(self) -> bool:
        if not self.is_remote_configured():
            return False
        try:
            session = await self.auth.get_session()
        except Exception as e:
            logger.error(f"Error checking authentication: {e}", exc_info=True)
            return False
        return session is not None

    async def get_current_mode(self) -> Mode:
        return "authenticated" if await self.is_authenticated() else "demo"

    async def _backend(self) -> DataBackend:
        if await self.is_authenticated():
            return self.remote
        return self.local

    # ============================================
    # APPLICATIONS
    # ============================================

    async def load_applications(self) -> List[Application]:
        backend = await self._backend()
        return await backend.load_applications()

    async def save_application(self, application: Application) -> Application:
        backend = await self._backend()
        saved = await backend.save_application(application)
        self.last_write_ok = backend.last_write_ok
        return saved

    async def update_application(self, application: Application) -> Application:
        backend = await self._backend()
        saved = await backend.update_application(application)
        self.last_write_ok = backend.last_write_ok
        return saved

    async def delete_application(self, application_id: str) -> None:
        backend = await self._backend()
        await backend.delete_application(application_id)
        self.last_write_ok = backend.last_write_ok

    async def save_applications(self, applications: List[Application]) -> bool:
        backend = await self._backend()
        return await backend.save_applications(applications)

    # ============================================
    # CUSTOM FIELDS
    # ============================================

    async def load_custom_fields(self) -> List[CustomField]:
        backend = await self._backend()
        return await backend.load_custom_fields()

    async def save_custom_fields(self, fields: List[CustomField]) -> bool:
        backend = await self._backend()
        return await backend.save_custom_fields(fields)

    # ============================================
    # PREFERENCES
    # ============================================

    async def load_preferences(self) -> UserPreference:
        backend = await self._backend()
        return await backend.load_preferences()

    async def save_preferences(self, preferences: UserPreference) -> bool:
        backend = await self._backend()
        return await backend.save_preferences(preferences)

    # ============================================
    # CHART CONFIGS
    # ============================================

    async def load_chart_configs(self) -> ChartConfigBundle:
        backend = await self._backend()
        return await backend.load_chart_configs()

    async def save_chart_configs(
        self,
        charts: List[ChartConfig],
        overview_cards: List[OverviewCardConfig],
    ) -> bool:
        backend = await self._backend()
        return await backend.save_chart_configs(charts, overview_cards)

    # ============================================
    # FIRST VISIT
    # ============================================

    async def is_first_visit(self) -> bool:
        backend = await self._backend()
        return await backend.is_first_visit()

    async def load_demo_data(self) -> bool:
        backend = await self._backend()
        logger.info(f"Loading demo data via {backend.name} backend")
        return await backend.load_demo_data()

    # ============================================
    # LOCAL-ONLY UTILITIES
    # ============================================

    def initialize_default_data(self):
        self.local.store.initialize_default_data()

    def mark_first_visit_complete(self):
        self.local.store.mark_first_visit_complete()

    async def start_from_scratch(self) -> bool:
        """
        Begin with the default schema and no applications.

        Remotely this writes the defaults through the backend; the remote
        first-visit check then sees the stored fields.
        """
        if not await self.is_authenticated():
            return self.local.store.start_from_scratch()

        results = [
            await self.remote.save_applications([]),
            await self.remote.save_custom_fields(default_custom_fields()),
            await self.remote.save_chart_configs([], []),
            await self.remote.save_preferences(default_preferences()),
        ]
        return all(results)

    def clear_all_data(self):
        self.local.store.clear_all_data()

    def is_local_storage_available(self) -> bool:
        return self.local.store.is_available()
