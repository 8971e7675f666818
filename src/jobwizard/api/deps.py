from __future__ import annotations

from collections.abc import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from jobwizard.core.form_state import FormStateService
from jobwizard.core.reference_data import ReferenceDataService
from jobwizard.db.session import get_db_session


def get_db() -> Generator[Session, None, None]:
    yield from get_db_session()


def get_form_service(db: Session = Depends(get_db)) -> FormStateService:
    return FormStateService(db)


def get_reference_service(request: Request) -> ReferenceDataService:
    return request.app.state.reference_data
