"""
Application state container.

One Store is built at startup and lives for the whole session. State is only
changed by dispatching actions; reducers return new state objects and never
modify the old ones, so a snapshot taken with get_state() stays valid.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from jobtracker.state.slice import Action
from jobtracker.state.slices.applications import ApplicationsState, applications_slice
from jobtracker.state.slices.chart_configs import ChartConfigsState, chart_configs_slice
from jobtracker.state.slices.custom_fields import CustomFieldsState, custom_fields_slice
from jobtracker.state.slices.preferences import PreferencesState, preferences_slice

Listener = Callable[[], None]


@dataclass(frozen=True)
class RootState:
    applications: ApplicationsState = field(default_factory=ApplicationsState)
    custom_fields: CustomFieldsState = field(default_factory=CustomFieldsState)
    preferences: PreferencesState = field(default_factory=PreferencesState)
    chart_configs: ChartConfigsState = field(default_factory=ChartConfigsState)


def root_reducer(state: Optional[RootState], action: Action) -> RootState:
    """Run every slice reducer; keep the old root object when no slice changed."""
    state = state or RootState()
    updated = RootState(
        applications=applications_slice.reducer(state.applications, action),
        custom_fields=custom_fields_slice.reducer(state.custom_fields, action),
        preferences=preferences_slice.reducer(state.preferences, action),
        chart_configs=chart_configs_slice.reducer(state.chart_configs, action),
    )
    if (
        updated.applications is state.applications
        and updated.custom_fields is state.custom_fields
        and updated.preferences is state.preferences
        and updated.chart_configs is state.chart_configs
    ):
        return state
    return updated


class Store:
    """
    Holds the current state and notifies subscribers after each change.

    Args:
        reducer: `(state, action) -> state`
        initial_state: Starting state; the reducer's initial state when omitted
    """

    def __init__(self, reducer: Callable[[Any, Action], Any], initial_state: Any = None):
        self._reducer = reducer
        self._state = initial_state if initial_state is not None else reducer(None, Action("@@init"))
        self._listeners: List[Listener] = []

    def get_state(self) -> Any:
        return self._state

    def dispatch(self, action: Action) -> Action:
        new_state = self._reducer(self._state, action)
        if new_state is self._state:
            return action
        self._state = new_state
        for listener in list(self._listeners):
            listener()
        return action

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener`; the returned function removes it again."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe


def create_store(initial_state: Optional[RootState] = None) -> Store:
    return Store(root_reducer, initial_state)
