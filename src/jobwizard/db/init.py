from __future__ import annotations

from jobwizard.config import get_settings
from jobwizard.db.base import Base
from jobwizard.db.session import SessionLocal, engine
from jobwizard.db import models  # noqa: F401
from jobwizard.db.seed import seed_reference_data


def ensure_data_directories() -> None:
    settings = get_settings()
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def init_database() -> dict[str, int]:
    ensure_data_directories()
    Base.metadata.create_all(bind=engine)

    if not get_settings().seed_reference_data:
        return {}
    with SessionLocal() as session:
        inserted = seed_reference_data(session)
    return {f"seeded_{name}": count for name, count in inserted.items()}
