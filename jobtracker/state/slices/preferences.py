"""
Preferences slice.
"""
from dataclasses import dataclass, field, replace
from typing import Optional

from jobtracker.core.defaults import default_preferences
from jobtracker.schemas.preference import UserPreference
from jobtracker.state.slice import Slice


@dataclass(frozen=True)
class PreferencesState:
    preferences: UserPreference = field(default_factory=default_preferences)
    loading: bool = False
    error: Optional[str] = None


preferences_slice = Slice("preferences", PreferencesState())


@preferences_slice.case("set_theme")
def set_theme(state: PreferencesState, theme: str) -> PreferencesState:
    return replace(state, preferences=state.preferences.model_copy(update={"theme": theme}))


@preferences_slice.case("set_default_pagination")
def set_default_pagination(state: PreferencesState, page_size: int) -> PreferencesState:
    return replace(state, preferences=state.preferences.model_copy(update={"default_pagination": page_size}))


@preferences_slice.case("set_preferences")
def set_preferences(state: PreferencesState, preferences: UserPreference) -> PreferencesState:
    return replace(state, preferences=preferences)


@preferences_slice.case("set_loading")
def set_loading(state: PreferencesState, loading: bool) -> PreferencesState:
    return replace(state, loading=loading, error=None if loading else state.error)


@preferences_slice.case("set_error")
def set_error(state: PreferencesState, error: Optional[str]) -> PreferencesState:
    return replace(state, error=error, loading=False)
