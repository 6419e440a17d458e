"""
Contract shared by the local and remote persistence backends.

The data service picks one implementation per call; callers never branch on
which backend is active.
"""
from abc import ABC, abstractmethod
from typing import List

from jobtracker.schemas.application import Application
from jobtracker.schemas.custom_field import CustomField
from jobtracker.schemas.preference import UserPreference
from jobtracker.schemas.chart_config import ChartConfig, ChartConfigBundle, OverviewCardConfig


class DataBackend(ABC):
    """Asynchronous persistence for the four tracker collections."""

    name: str = "backend"

    # Outcome of the most recent single-record write. Backends that raise on
    # failure never clear it.
    last_write_ok: bool = True

    @abstractmethod
    async def load_applications(self) -> List[Application]:
        ...

    @abstractmethod
    async def save_application(self, application: Application) -> Application:
        ...

    @abstractmethod
    async def update_application(self, application: Application) -> Application:
        ...

    @abstractmethod
    async def delete_application(self, application_id: str) -> None:
        ...

    @abstractmethod
    async def save_applications(self, applications: List[Application]) -> bool:
        """Replace the whole collection with `applications`."""

    @abstractmethod
    async def load_custom_fields(self) -> List[CustomField]:
        ...

    @abstractmethod
    async def save_custom_fields(self, fields: List[CustomField]) -> bool:
        ...

    @abstractmethod
    async def load_preferences(self) -> UserPreference:
        ...

    @abstractmethod
    async def save_preferences(self, preferences: UserPreference) -> bool:
        ...

    @abstractmethod
    async def load_chart_configs(self) -> ChartConfigBundle:
        ...

    @abstractmethod
    async def save_chart_configs(
        self,
        charts: List[ChartConfig],
        overview_cards: List[OverviewCardConfig],
    ) -> bool:
        ...

    @abstractmethod
    async def is_first_visit(self) -> bool:
        ...

    @abstractmethod
    async def load_demo_data(self) -> bool:
        ...
