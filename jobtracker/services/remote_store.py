"""
Remote (authenticated) persistence.

Stores the tracker collections in the relational database, scoped by the
signed-in identity. Every query filters by user_id and every write stamps it.
Notes are flattened into their own table here and re-embedded on load.
"""
import logging
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from jobtracker.core.auth import AuthProvider
from jobtracker.core.dates import parse_date, to_iso_timestamp
from jobtracker.core.defaults import default_preferences
from jobtracker.core.demo_data import (
    demo_applications,
    demo_chart_configs,
    demo_custom_fields,
    demo_overview_cards,
)
from jobtracker.core.errors import BackendError, RecordNotFound
from jobtracker.db.models.application import ApplicationRecord
from jobtracker.db.models.chart_config import ChartConfigRecord
from jobtracker.db.models.custom_field import CustomFieldRecord
from jobtracker.db.models.note import NoteRecord
from jobtracker.db.models.user_preference import UserPreferenceRecord
from jobtracker.schemas.application import Application, Note, generate_application_id, generate_note_id
from jobtracker.schemas.custom_field import CustomField
from jobtracker.schemas.preference import UserPreference
from jobtracker.schemas.chart_config import ChartConfig, ChartConfigBundle, OverviewCardConfig
from jobtracker.services.backend import DataBackend

logger = logging.getLogger(__name__)


def _to_datetime(value: Optional[str]) -> datetime:
    return parse_date(value) or datetime.now(timezone.utc)


def _note_to_domain(row: NoteRecord) -> Note:
    return Note(
        id=row.id,
        content=row.content,
        created_at=to_iso_timestamp(row.created_at),
        updated_at=to_iso_timestamp(row.updated_at) if row.updated_at else None,
    )


def _application_to_domain(row: ApplicationRecord, notes: List[Note]) -> Application:
    return Application(
        id=row.id,
        data=dict(row.data or {}),
        notes=notes,
        created_at=to_iso_timestamp(row.created_at),
        updated_at=to_iso_timestamp(row.updated_at),
    )


def _field_to_domain(row: CustomFieldRecord) -> CustomField:
    return CustomField(
        id=row.field_id,
        name=row.name,
        type=row.type,
        required=bool(row.required),
        order=row.order,
        show_in_table=True if row.show_in_table is None else bool(row.show_in_table),
        options=row.options,
        default_value=row.default_value,
    )


class RemoteBackend(DataBackend):
    """
    DataBackend over the relational store.

    Args:
        session_factory: SQLAlchemy sessionmaker
        auth: Identity provider; an operation without a session fails before any query
    """

    name = "remote"

    def __init__(self, session_factory: Callable[[], Session], auth: AuthProvider):
        self.session_factory = session_factory
        self.auth = auth

    async def _run(self, operation: str, fn: Callable, *args):
        """Resolve the identity, then run `fn(db, user_id, *args)` in one transaction off the event loop."""
        user_id = await self.auth.get_user_id()
        try:
            return await run_in_threadpool(self._transaction, fn, user_id, *args)
        except SQLAlchemyError as e:
            logger.error(f"Remote {operation} failed: user_id={user_id}, error={e}", exc_info=True)
            raise BackendError(f"Failed to {operation}") from e

    def _transaction(self, fn: Callable, user_id: str, *args):
        db = self.session_factory()
        try:
            result = fn(db, user_id, *args)
            db.commit()
            return result
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    # ============================================
    # APPLICATIONS
    # ============================================

    async def load_applications(self) -> List[Application]:
        return await self._run("load applications", self._load_applications)

    def _load_applications(self, db: Session, user_id: str) -> List[Application]:
        rows = (
            db.query(ApplicationRecord)
            .filter(ApplicationRecord.user_id == user_id)
            .order_by(ApplicationRecord.created_at.desc())
            .all()
        )
        if not rows:
            return []

        applications = [_application_to_domain(row, []) for row in rows]

        try:
            notes_by_app = self._fetch_notes(db, user_id, [app.id for app in applications])
        except SQLAlchemyError as e:
            # Notes are supplementary; the applications are still returned
            db.rollback()
            logger.error(f"Error loading notes, returning applications without notes: {e}")
            notes_by_app = {}

        return [
            app.model_copy(update={"notes": notes_by_app.get(app.id, [])})
            for app in applications
        ]

    def _fetch_notes(self, db: Session, user_id: str, application_ids: List[str]) -> Dict[str, List[Note]]:
        note_rows = (
            db.query(NoteRecord)
            .filter(NoteRecord.user_id == user_id, NoteRecord.application_id.in_(application_ids))
            .order_by(NoteRecord.application_id, NoteRecord.position)
            .all()
        )
        notes_by_app: Dict[str, List[Note]] = {}
        for row in note_rows:
            notes_by_app.setdefault(row.application_id, []).append(_note_to_domain(row))
        return notes_by_app

    async def save_application(self, application: Application) -> Application:
        return await self._run("save application", self._insert_application, application)

    def _insert_application(self, db: Session, user_id: str, application: Application) -> Application:
        record = ApplicationRecord(
            id=application.id or generate_application_id(),
            user_id=user_id,
            created_at=_to_datetime(application.created_at),
            updated_at=_to_datetime(application.updated_at),
            data=dict(application.data),
        )
        db.add(record)
        db.flush()
        self._insert_notes(db, user_id, record.id, application.notes)
        logger.info(f"Application saved: application_id={record.id}, user_id={user_id}")
        return _application_to_domain(record, list(application.notes))

    def _insert_notes(self, db: Session, user_id: str, application_id: str, notes: List[Note]):
        for position, note in enumerate(notes):
            db.add(NoteRecord(
                id=note.id,
                application_id=application_id,
                user_id=user_id,
                content=note.content,
                position=position,
                created_at=_to_datetime(note.created_at),
                updated_at=parse_date(note.updated_at),
            ))
        db.flush()

    async def update_application(self, application: Application) -> Application:
        return await self._run("update application", self._update_application, application)

    def _update_application(self, db: Session, user_id: str, application: Application) -> Application:
        record = (
            db.query(ApplicationRecord)
            .filter(ApplicationRecord.id == application.id, ApplicationRecord.user_id == user_id)
            .first()
        )
        if record is None:
            raise RecordNotFound(f"Application {application.id} not found")

        record.data = dict(application.data)
        record.updated_at = _to_datetime(application.updated_at)

        # Replace the note list wholesale rather than diffing it
        db.query(NoteRecord).filter(
            NoteRecord.application_id == application.id,
            NoteRecord.user_id == user_id,
        ).delete(synchronize_session=False)
        self._insert_notes(db, user_id, application.id, application.notes)

        logger.info(f"Application updated: application_id={application.id}, user_id={user_id}")
        return _application_to_domain(record, list(application.notes))

    async def delete_application(self, application_id: str) -> None:
        await self._run("delete application", self._delete_application, application_id)

    def _delete_application(self, db: Session, user_id: str, application_id: str):
        db.query(NoteRecord).filter(
            NoteRecord.application_id == application_id,
            NoteRecord.user_id == user_id,
        ).delete(synchronize_session=False)
        deleted = db.query(ApplicationRecord).filter(
            ApplicationRecord.id == application_id,
            ApplicationRecord.user_id == user_id,
        ).delete(synchronize_session=False)
        logger.info(f"Application deleted: application_id={application_id}, user_id={user_id}, rows={deleted}")

    async def save_applications(self, applications: List[Application]) -> bool:
        return await self._run("save applications", self._replace_applications, applications)

    def _replace_applications(self, db: Session, user_id: str, applications: List[Application]) -> bool:
        db.query(NoteRecord).filter(NoteRecord.user_id == user_id).delete(synchronize_session=False)
        db.query(ApplicationRecord).filter(ApplicationRecord.user_id == user_id).delete(synchronize_session=False)
        for application in applications:
            self._insert_application(db, user_id, application)
        logger.info(f"Applications replaced: user_id={user_id}, count={len(applications)}")
        return True

    # ============================================
    # CUSTOM FIELDS
    # ============================================

    async def load_custom_fields(self) -> List[CustomField]:
        return await self._run("load custom fields", self._load_custom_fields)

    def _load_custom_fields(self, db: Session, user_id: str) -> List[CustomField]:
        rows = (
            db.query(CustomFieldRecord)
            .filter(CustomFieldRecord.user_id == user_id)
            .order_by(CustomFieldRecord.order.asc())
            .all()
        )
        return [_field_to_domain(row) for row in rows]

    async def save_custom_fields(self, fields: List[CustomField]) -> bool:
        return await self._run("save custom fields", self._replace_custom_fields, fields)

    def _replace_custom_fields(self, db: Session, user_id: str, fields: List[CustomField]) -> bool:
        db.query(CustomFieldRecord).filter(CustomFieldRecord.user_id == user_id).delete(synchronize_session=False)
        for field in fields:
            db.add(CustomFieldRecord(
                user_id=user_id,
                field_id=field.id,
                name=field.name,
                type=field.type,
                required=field.required,
                order=field.order,
                show_in_table=field.show_in_table,
                options=[option.model_dump(mode="json", exclude_none=True) for option in field.options]
                if field.options is not None else None,
                default_value=field.default_value,
            ))
        return True

    # ============================================
    # PREFERENCES
    # ============================================

    async def load_preferences(self) -> UserPreference:
        return await self._run("load preferences", self._load_preferences)

    def _load_preferences(self, db: Session, user_id: str) -> UserPreference:
        row = db.query(UserPreferenceRecord).filter(UserPreferenceRecord.user_id == user_id).first()
        if row is None:
            return default_preferences()
        return UserPreference(theme=row.theme, default_pagination=row.default_pagination)

    async def save_preferences(self, preferences: UserPreference) -> bool:
        return await self._run("save preferences", self._upsert_preferences, preferences)

    def _upsert_preferences(self, db: Session, user_id: str, preferences: UserPreference) -> bool:
        row = db.query(UserPreferenceRecord).filter(UserPreferenceRecord.user_id == user_id).first()
        if row is None:
            row = UserPreferenceRecord(user_id=user_id)
            db.add(row)
        row.theme = preferences.theme
        row.default_pagination = preferences.default_pagination
        return True

    # ============================================
    # CHART CONFIGS
    # ============================================

    async def load_chart_configs(self) -> ChartConfigBundle:
        return await self._run("load chart configs", self._load_chart_configs)

    def _load_chart_configs(self, db: Session, user_id: str) -> ChartConfigBundle:
        row = db.query(ChartConfigRecord).filter(ChartConfigRecord.user_id == user_id).first()
        if row is None:
            return ChartConfigBundle()
        return ChartConfigBundle.model_validate({
            "charts": row.charts or [],
            "overviewCards": row.overview_cards or [],
        })

    async def save_chart_configs(
        self,
        charts: List[ChartConfig],
        overview_cards: List[OverviewCardConfig],
    ) -> bool:
        return await self._run("save chart configs", self._upsert_chart_configs, charts, overview_cards)

    def _upsert_chart_configs(
        self,
        db: Session,
        user_id: str,
        charts: List[ChartConfig],
        overview_cards: List[OverviewCardConfig],
    ) -> bool:
        row = db.query(ChartConfigRecord).filter(ChartConfigRecord.user_id == user_id).first()
        if row is None:
            row = ChartConfigRecord(user_id=user_id)
            db.add(row)
        row.charts = [chart.model_dump(mode="json", by_alias=True, exclude_none=True) for chart in charts]
        row.overview_cards = [card.model_dump(mode="json", by_alias=True, exclude_none=True) for card in overview_cards]
        return True

    # ============================================
    # FIRST VISIT & DEMO DATA
    # ============================================

    async def is_first_visit(self) -> bool:
        return await self._run("check first visit", self._is_first_visit)

    def _is_first_visit(self, db: Session, user_id: str) -> bool:
        """No stored flag remotely: a user with no data at all is on their first visit."""
        apps = db.query(ApplicationRecord).filter(ApplicationRecord.user_id == user_id).count()
        fields = db.query(CustomFieldRecord).filter(CustomFieldRecord.user_id == user_id).count()
        configs = db.query(ChartConfigRecord).filter(ChartConfigRecord.user_id == user_id).count()
        return apps == 0 and fields == 0 and configs == 0

    async def load_demo_data(self) -> bool:
        return await self._run("load demo data", self._load_demo_data)

    def _load_demo_data(self, db: Session, user_id: str) -> bool:
        # Demo ids are shared by every user, so rows get fresh ones
        for application in demo_applications():
            notes = [note.model_copy(update={"id": generate_note_id()}) for note in application.notes]
            self._insert_application(
                db,
                user_id,
                application.model_copy(update={"id": generate_application_id(), "notes": notes}),
            )
        self._replace_custom_fields(db, user_id, demo_custom_fields())
        self._upsert_chart_configs(db, user_id, demo_chart_configs(), demo_overview_cards())
        self._upsert_preferences(db, user_id, UserPreference(theme="system", default_pagination=20))
        logger.info(f"Demo data loaded: user_id={user_id}")
        return True
