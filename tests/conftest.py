from __future__ import annotations

import os

os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["APP_ENV"] = "test"

import pytest  # noqa: E402

from jobwizard.db.base import Base  # noqa: E402
from jobwizard.db import models  # noqa: E402,F401
from jobwizard.db.seed import seed_reference_data  # noqa: E402
from jobwizard.db.session import SessionLocal, engine  # noqa: E402


@pytest.fixture(autouse=True)
def reset_db() -> None:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as session:
        seed_reference_data(session)
    yield
