"""
Applications slice: the loaded applications and their notes.
"""
import logging
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from jobtracker.schemas.application import Application
from jobtracker.state.slice import Slice

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApplicationsState:
    items: Tuple[Application, ...] = ()
    loading: bool = False
    error: Optional[str] = None

    def find(self, application_id: str) -> Optional[Application]:
        return next((app for app in self.items if app.id == application_id), None)


applications_slice = Slice("applications", ApplicationsState())


def _replace_item(state: ApplicationsState, application_id: str, transform) -> ApplicationsState:
    if state.find(application_id) is None:
        logger.warning(f"Application {application_id} not in state")
        return state
    return replace(state, items=tuple(
        transform(app) if app.id == application_id else app for app in state.items
    ))


@applications_slice.case("set_applications")
def set_applications(state: ApplicationsState, items) -> ApplicationsState:
    return replace(state, items=tuple(items))


@applications_slice.case("add_application")
def add_application(state: ApplicationsState, application: Application) -> ApplicationsState:
    return replace(state, items=(*state.items, application))


@applications_slice.case("update_application")
def update_application(state: ApplicationsState, application: Application) -> ApplicationsState:
    return _replace_item(state, application.id, lambda _: application)


@applications_slice.case("delete_application")
def delete_application(state: ApplicationsState, application_id: str) -> ApplicationsState:
    return replace(state, items=tuple(app for app in state.items if app.id != application_id))


@applications_slice.case("add_note")
def add_note(state: ApplicationsState, payload: dict) -> ApplicationsState:
    """payload: application_id, note, optional now"""
    application = state.find(payload["application_id"])
    if application is not None and application.find_note(payload["note"].id) is not None:
        logger.warning(f"Note {payload['note'].id} already exists on application {application.id}")
        return state
    return _replace_item(
        state,
        payload["application_id"],
        lambda app: app.with_note(payload["note"], payload.get("now")),
    )


@applications_slice.case("update_note")
def update_note(state: ApplicationsState, payload: dict) -> ApplicationsState:
    """payload: application_id, note_id, content, optional now"""
    return _replace_item(
        state,
        payload["application_id"],
        lambda app: app.with_note_content(payload["note_id"], payload["content"], payload.get("now")),
    )


@applications_slice.case("delete_note")
def delete_note(state: ApplicationsState, payload: dict) -> ApplicationsState:
    """payload: application_id, note_id, optional now"""
    return _replace_item(
        state,
        payload["application_id"],
        lambda app: app.without_note(payload["note_id"], payload.get("now")),
    )


@applications_slice.case("set_loading")
def set_loading(state: ApplicationsState, loading: bool) -> ApplicationsState:
    return replace(state, loading=loading, error=None if loading else state.error)


@applications_slice.case("set_error")
def set_error(state: ApplicationsState, error: Optional[str]) -> ApplicationsState:
    return replace(state, error=error, loading=False)
