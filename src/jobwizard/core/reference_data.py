from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from typing import Protocol

from sqlalchemy.orm import Session

from jobwizard.config import Settings, get_settings
from jobwizard.core.reference_cache import TTLCache
from jobwizard.db.repositories import ReferenceRepository
from jobwizard.db.session import SessionLocal
from jobwizard.types import (
    CategoryItem,
    LocationItem,
    ReferenceBundle,
    RoleItem,
    SkillItem,
    SkillsCategoryItem,
)

logger = logging.getLogger(__name__)

CATEGORIES_KEY = "categories"
ROLES_KEY = "roles"
LOCATIONS_KEY = "locations"
SKILLS_KEY = "skills"
SKILLS_CATEGORIES_KEY = "skills_categories"


class ReferenceStore(Protocol):
    def list_categories(self) -> list[CategoryItem]: ...

    def list_roles(self, category_id: str | None = None) -> list[RoleItem]: ...

    def list_locations(self, search: str | None = None) -> list[LocationItem]: ...

    def list_skills(
        self,
        *,
        category_id: str | None = None,
        search: str | None = None,
        limit: int | None = None,
    ) -> list[SkillItem]: ...

    def list_skills_categories(self) -> list[SkillsCategoryItem]: ...


class SqlReferenceStore:
    """Reads reference tables, one short-lived session per query."""

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self.session_factory = session_factory

    def list_categories(self) -> list[CategoryItem]:
        with self.session_factory() as session:
            rows = ReferenceRepository(session).list_categories()
            return [CategoryItem(id=row.id, name=row.name) for row in rows]

    def list_roles(self, category_id: str | None = None) -> list[RoleItem]:
        with self.session_factory() as session:
            rows = ReferenceRepository(session).list_roles(category_id)
            return [RoleItem(id=row.id, category_id=row.category_id, name=row.name) for row in rows]

    def list_locations(self, search: str | None = None) -> list[LocationItem]:
        with self.session_factory() as session:
            rows = ReferenceRepository(session).list_locations(search)
            return [LocationItem(id=row.id, name=row.name) for row in rows]

    def list_skills(
        self,
        *,
        category_id: str | None = None,
        search: str | None = None,
        limit: int | None = None,
    ) -> list[SkillItem]:
        with self.session_factory() as session:
            rows = ReferenceRepository(session).list_skills(
                category_id=category_id, search=search, limit=limit
            )
            return [
                SkillItem(
                    id=row.id,
                    name=row.name,
                    skill_category_id=row.skills_category_id,
                    skill_type=row.skill_type,
                )
                for row in rows
            ]

    def list_skills_categories(self) -> list[SkillsCategoryItem]:
        with self.session_factory() as session:
            rows = ReferenceRepository(session).list_skills_categories()
            return [SkillsCategoryItem(id=row.id, name=row.name) for row in rows]


def _key(*parts: object) -> str:
    return ":".join("*" if part in (None, "") else str(part) for part in parts)


class ReferenceDataService:
    """Cached access to categories, roles, locations and skills.

    Built once per process and shared; every list read goes through the cache,
    keyed by the list name plus its filter arguments.
    """

    def __init__(
        self,
        store: ReferenceStore | None = None,
        *,
        settings: Settings | None = None,
        cache: TTLCache | None = None,
    ):
        self.settings = settings or get_settings()
        self.store = store or SqlReferenceStore()
        self.cache = cache or TTLCache(self.settings.reference_cache_ttl_sec)

    def get_categories(self) -> list[CategoryItem]:
        return list(self.cache.get_or_load(CATEGORIES_KEY, self.store.list_categories))

    def get_category(self, category_id: str) -> CategoryItem | None:
        return next((item for item in self.get_categories() if item.id == category_id), None)

    def get_roles(self, category_id: str | None = None) -> list[RoleItem]:
        return list(
            self.cache.get_or_load(
                _key(ROLES_KEY, category_id),
                lambda: self.store.list_roles(category_id),
            )
        )

    def get_role(self, role_id: str) -> RoleItem | None:
        return next((item for item in self.get_roles() if item.id == role_id), None)

    def search_roles(
        self,
        category_ids: Sequence[str],
        search_text: str = "",
        limit: int | None = None,
    ) -> list[RoleItem]:
        """Roles in any of ``category_ids`` whose name contains ``search_text``."""
        wanted = {item.strip() for item in category_ids if item and item.strip()}
        if not wanted:
            return []
        cap = min(limit or self.settings.role_search_limit, self.settings.role_search_limit)
        needle = search_text.strip().lower()

        matches = [
            role
            for role in self.get_roles()
            if role.category_id in wanted and needle in role.name.lower()
        ]
        return matches[:cap]

    def get_locations(self, search: str | None = None) -> list[LocationItem]:
        search = (search or "").strip().lower() or None
        return list(
            self.cache.get_or_load(
                _key(LOCATIONS_KEY, search),
                lambda: self.store.list_locations(search),
            )
        )

    def get_location(self, location_id: str) -> LocationItem | None:
        return next((item for item in self.get_locations() if item.id == location_id), None)

    def get_skills(
        self,
        category_id: str | None = None,
        search: str | None = None,
        limit: int | None = None,
    ) -> list[SkillItem]:
        search = (search or "").strip().lower() or None
        if limit is not None:
            limit = max(1, min(limit, self.settings.skill_search_limit))
        return list(
            self.cache.get_or_load(
                _key(SKILLS_KEY, category_id, search, limit),
                lambda: self.store.list_skills(category_id=category_id, search=search, limit=limit),
            )
        )

    def get_skill(self, skill_id: str) -> SkillItem | None:
        return next((item for item in self.get_skills() if item.id == skill_id), None)

    def get_skills_categories(self) -> list[SkillsCategoryItem]:
        return list(self.cache.get_or_load(SKILLS_CATEGORIES_KEY, self.store.list_skills_categories))

    def get_all(self) -> ReferenceBundle:
        return ReferenceBundle(
            categories=self.get_categories(),
            roles=self.get_roles(),
            locations=self.get_locations(),
            skills=self.get_skills(),
            skills_categories=self.get_skills_categories(),
            last_updated=datetime.now(UTC),
        )

    def clear_cache(self) -> int:
        evicted = self.cache.clear()
        logger.info("Reference cache cleared evicted=%s", evicted)
        return evicted

    def refresh_cache(self) -> int:
        """Drop every cached list and reload the unfiltered ones."""
        self.clear_cache()
        self.get_categories()
        self.get_roles()
        self.get_locations()
        self.get_skills()
        self.get_skills_categories()
        return len(self.cache)
