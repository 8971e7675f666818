from __future__ import annotations

import logging
import uuid

from sqlalchemy.orm import Session

from jobwizard.config import Settings, get_settings
from jobwizard.core import codec
from jobwizard.db.models import FormState
from jobwizard.db.repositories import FormStateRepository
from jobwizard.errors import ValidationError
from jobwizard.types import FormData, FormStateRecord

logger = logging.getLogger(__name__)

SESSION_ID_MAX_LENGTH = 100


def resolve_session_id(session_id: str | None = None) -> str:
    """Return the caller's session id, or mint a new one when none was given."""
    if session_id and session_id.strip():
        return session_id.strip()
    return uuid.uuid4().hex


class FormStateService:
    """Draft persistence for the application wizard, one row per client session."""

    def __init__(self, session: Session, *, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.repo = FormStateRepository(session)

    def _require_session_id(self, session_id: str) -> str:
        cleaned = (session_id or "").strip()
        if not cleaned:
            raise ValidationError("sessionId is required")
        if len(cleaned) > SESSION_ID_MAX_LENGTH:
            raise ValidationError(f"sessionId must be at most {SESSION_ID_MAX_LENGTH} characters")
        return cleaned

    def _require_step(self, step: int) -> int:
        low, high = self.settings.form_min_step, self.settings.form_max_step
        if step < low or step > high:
            raise ValidationError(f"currentStep must be between {low} and {high}")
        return step

    def _to_record(self, row: FormState) -> FormStateRecord:
        return FormStateRecord(
            id=row.id,
            session_id=row.session_id,
            form_data=codec.decode(row.form_data_xml),
            current_step=row.current_step,
            is_completed=row.is_completed,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def save_state(self, session_id: str, form_data: FormData, current_step: int) -> FormStateRecord:
        session_id = self._require_session_id(session_id)
        current_step = self._require_step(current_step)
        # encoding rejects unstorable input, so it must happen before the write
        document = codec.encode(form_data)

        row = self.repo.upsert(session_id=session_id, form_data_xml=document, current_step=current_step)
        logger.info("Saved form state session_id=%s step=%s", session_id, current_step)
        return self._to_record(row)

    def get_state(self, session_id: str) -> FormStateRecord | None:
        row = self.repo.get(self._require_session_id(session_id))
        if row is None:
            return None
        return self._to_record(row)

    def update_step(self, session_id: str, current_step: int) -> bool:
        session_id = self._require_session_id(session_id)
        updated = self.repo.update_step(session_id, self._require_step(current_step))
        if updated:
            logger.info("Moved form session_id=%s to step=%s", session_id, current_step)
        return updated

    def mark_completed(self, session_id: str) -> bool:
        session_id = self._require_session_id(session_id)
        updated = self.repo.mark_completed(session_id)
        if updated:
            logger.info("Form submitted session_id=%s", session_id)
        return updated

    def delete_state(self, session_id: str) -> bool:
        session_id = self._require_session_id(session_id)
        deleted = self.repo.delete(session_id)
        if deleted:
            logger.info("Deleted form state session_id=%s", session_id)
        return deleted
