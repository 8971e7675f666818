from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from jobwizard.db.models import Category, Location, Role, Skill, SkillsCategory

CATEGORY_ROLES: dict[str, list[str]] = {
    "Software Development": [
        "Backend Developer",
        "Frontend Developer",
        "Full Stack Developer",
        "Mobile Developer",
        "DevOps Engineer",
        "QA Automation Engineer",
    ],
    "Data & Analytics": [
        "Data Analyst",
        "Data Engineer",
        "Data Scientist",
        "BI Developer",
    ],
    "Product & Design": [
        "Product Manager",
        "UX Designer",
        "UI Designer",
    ],
    "Marketing": [
        "Digital Marketing Specialist",
        "Content Writer",
        "SEO Specialist",
    ],
    "Sales & Support": [
        "Account Executive",
        "Customer Success Manager",
        "Technical Support Representative",
    ],
    "Student": [
        "Student Developer",
        "Research Assistant",
        "Intern",
    ],
    "No Experience": [
        "Junior Developer",
        "Trainee Analyst",
        "Entry Level Support",
    ],
}

LOCATIONS: list[str] = [
    "Tel Aviv",
    "Jerusalem",
    "Haifa",
    "Be'er Sheva",
    "Herzliya",
    "Petah Tikva",
    "Remote",
]

SKILLS: dict[str, list[tuple[str, str]]] = {
    "Programming": [
        ("Python", "mandatory"),
        ("JavaScript", "mandatory"),
        ("TypeScript", "mandatory"),
        ("Java", "mandatory"),
        ("C#", "mandatory"),
        ("Go", "advantage"),
        ("Rust", "advantage"),
    ],
    "Data": [
        ("SQL", "mandatory"),
        ("Pandas", "advantage"),
        ("Power BI", "advantage"),
        ("Machine Learning", "advantage"),
    ],
    "Tools": [
        ("Git", "mandatory"),
        ("Docker", "advantage"),
        ("Kubernetes", "advantage"),
        ("AWS", "advantage"),
    ],
    "Soft Skills": [
        ("Communication", "mandatory"),
        ("Teamwork", "mandatory"),
        ("Leadership", "advantage"),
    ],
}


def _get_or_create(session: Session, model: type, name: str, **values: object) -> tuple[object, bool]:
    existing = session.scalar(select(model).where(model.name == name))
    if existing:
        return existing, False
    item = model(name=name, **values)
    session.add(item)
    session.flush()
    return item, True


def seed_reference_data(session: Session) -> dict[str, int]:
    inserted = {"categories": 0, "roles": 0, "locations": 0, "skills_categories": 0, "skills": 0}

    for category_name, role_names in CATEGORY_ROLES.items():
        category, created = _get_or_create(session, Category, category_name)
        inserted["categories"] += int(created)
        for role_name in role_names:
            existing = session.scalar(
                select(Role).where(Role.category_id == category.id, Role.name == role_name)
            )
            if existing:
                continue
            session.add(Role(category_id=category.id, name=role_name))
            inserted["roles"] += 1

    for location_name in LOCATIONS:
        _, created = _get_or_create(session, Location, location_name)
        inserted["locations"] += int(created)

    for group_name, skills in SKILLS.items():
        group, created = _get_or_create(session, SkillsCategory, group_name)
        inserted["skills_categories"] += int(created)
        for skill_name, skill_type in skills:
            existing = session.scalar(
                select(Skill).where(Skill.skills_category_id == group.id, Skill.name == skill_name)
            )
            if existing:
                continue
            session.add(Skill(skills_category_id=group.id, name=skill_name, skill_type=skill_type))
            inserted["skills"] += 1

    session.commit()
    return inserted
