from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy import Select, delete, insert, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from jobwizard.db.base import new_uuid, utcnow
from jobwizard.db.models import Category, FormState, Location, Role, Skill, SkillsCategory
from jobwizard.errors import StorageError

logger = logging.getLogger(__name__)

_NATIVE_UPSERT: dict[str, Callable[..., Any]] = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class FormStateRepository:
    def __init__(self, session: Session):
        self.session = session

    def get(self, session_id: str) -> FormState | None:
        statement = (
            select(FormState)
            .where(FormState.session_id == session_id)
            .execution_options(populate_existing=True)
        )
        try:
            return self.session.scalar(statement)
        except SQLAlchemyError as exc:
            raise StorageError(f"failed to load form state for session '{session_id}'") from exc

    def upsert(self, *, session_id: str, form_data_xml: str, current_step: int) -> FormState:
        """Insert the session's row or overwrite its payload and step in one statement.

        ``id``, ``created_at`` and ``is_completed`` are only written on insert.
        """
        now = utcnow()
        insert_values = {
            "id": new_uuid(),
            "session_id": session_id,
            "form_data_xml": form_data_xml,
            "current_step": current_step,
            "is_completed": False,
            "created_at": now,
            "updated_at": now,
        }
        update_values = {
            "form_data_xml": form_data_xml,
            "current_step": current_step,
            "updated_at": now,
        }

        dialect = self.session.get_bind().dialect.name
        try:
            native_insert = _NATIVE_UPSERT.get(dialect)
            if native_insert is not None:
                statement = (
                    native_insert(FormState)
                    .values(**insert_values)
                    .on_conflict_do_update(index_elements=[FormState.session_id], set_=update_values)
                )
                self.session.execute(statement)
            else:
                self._insert_or_update(session_id, insert_values, update_values)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.warning("Form state upsert failed session_id=%s error=%s", session_id, exc)
            raise StorageError(f"failed to save form state for session '{session_id}'") from exc

        row = self.get(session_id)
        if row is None:
            raise StorageError(f"form state for session '{session_id}' vanished after save")
        return row

    def _insert_or_update(
        self,
        session_id: str,
        insert_values: dict[str, Any],
        update_values: dict[str, Any],
    ) -> None:
        try:
            with self.session.begin_nested():
                self.session.execute(insert(FormState).values(**insert_values))
        except IntegrityError:
            self.session.execute(
                update(FormState).where(FormState.session_id == session_id).values(**update_values)
            )

    def update_step(self, session_id: str, current_step: int) -> bool:
        return self._update(session_id, current_step=current_step)

    def mark_completed(self, session_id: str) -> bool:
        return self._update(session_id, is_completed=True)

    def _update(self, session_id: str, **values: Any) -> bool:
        statement = (
            update(FormState)
            .where(FormState.session_id == session_id)
            .values(updated_at=utcnow(), **values)
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.session.execute(statement)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StorageError(f"failed to update form state for session '{session_id}'") from exc
        return result.rowcount > 0

    def delete(self, session_id: str) -> bool:
        try:
            result = self.session.execute(delete(FormState).where(FormState.session_id == session_id))
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StorageError(f"failed to delete form state for session '{session_id}'") from exc
        return result.rowcount > 0


class ReferenceRepository:
    def __init__(self, session: Session):
        self.session = session

    def _all(self, statement: Select) -> list[Any]:
        try:
            return list(self.session.scalars(statement).all())
        except SQLAlchemyError as exc:
            raise StorageError("failed to load reference data") from exc

    def list_categories(self) -> list[Category]:
        return self._all(select(Category).order_by(Category.name))

    def list_roles(self, category_id: str | None = None) -> list[Role]:
        statement = select(Role)
        if category_id:
            statement = statement.where(Role.category_id == category_id)
        return self._all(statement.order_by(Role.name))

    def list_locations(self, search: str | None = None) -> list[Location]:
        statement = select(Location)
        if search:
            statement = statement.where(Location.name.icontains(search, autoescape=True))
        return self._all(statement.order_by(Location.name))

    def list_skills(
        self,
        *,
        category_id: str | None = None,
        search: str | None = None,
        limit: int | None = None,
    ) -> list[Skill]:
        statement = select(Skill)
        if category_id:
            statement = statement.where(Skill.skills_category_id == category_id)
        if search:
            statement = statement.where(Skill.name.icontains(search, autoescape=True))
        statement = statement.order_by(Skill.name)
        if limit:
            statement = statement.limit(limit)
        return self._all(statement)

    def list_skills_categories(self) -> list[SkillsCategory]:
        return self._all(select(SkillsCategory).order_by(SkillsCategory.name))
