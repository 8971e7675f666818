"""Job-interest selection caps.

Categories: up to two regular categories, or three when one of the special
"Student" / "No Experience" categories is among them; the two special
categories exclude each other. Roles: the allowance grows with the number of
selected categories. Skills: ten slots shared by mandatory and advantage picks,
and a skill cannot sit in both lists.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

MAX_REGULAR_CATEGORIES = 2
MAX_CATEGORIES = 3
MAX_SKILLS = 10

_ROLE_LIMITS = {0: 0, 1: 3, 2: 4, 3: 4}


@dataclass(slots=True, frozen=True)
class SelectionDecision:
    accepted: bool
    reason: str = ""


@dataclass(slots=True, frozen=True)
class SpecialCategories:
    student_id: str | None = None
    no_experience_id: str | None = None

    @property
    def ids(self) -> set[str]:
        return {item for item in (self.student_id, self.no_experience_id) if item}


def find_special_categories(categories: Iterable[tuple[str, str]]) -> SpecialCategories:
    """Locate the special categories among ``(id, name)`` pairs by name."""
    student_id: str | None = None
    no_experience_id: str | None = None
    for category_id, name in categories:
        label = name.lower()
        if student_id is None and "student" in label:
            student_id = category_id
        elif no_experience_id is None and "no" in label and "experience" in label:
            no_experience_id = category_id
    return SpecialCategories(student_id=student_id, no_experience_id=no_experience_id)


def category_limit(selected: Sequence[str], special: SpecialCategories) -> int:
    if special.ids & set(selected):
        return MAX_CATEGORIES
    if len(selected) >= MAX_REGULAR_CATEGORIES:
        # a special category may still be added as the third pick
        return MAX_CATEGORIES
    return MAX_REGULAR_CATEGORIES


def can_add_category(
    selected: Sequence[str],
    candidate: str,
    special: SpecialCategories,
) -> SelectionDecision:
    if candidate in selected:
        return SelectionDecision(False, "Category already selected")

    if candidate in special.ids:
        other = special.no_experience_id if candidate == special.student_id else special.student_id
        if other and other in selected:
            return SelectionDecision(False, "Cannot select both 'Student' and 'No Experience'")
        if len(selected) >= MAX_CATEGORIES:
            return SelectionDecision(False, "Maximum 3 categories allowed")
        return SelectionDecision(True)

    if special.ids & set(selected):
        if len(selected) >= MAX_CATEGORIES:
            return SelectionDecision(False, "Maximum 3 categories allowed with Student/No Experience")
    elif len(selected) >= MAX_REGULAR_CATEGORIES:
        return SelectionDecision(
            False,
            "Maximum 2 regular categories (you can still add Student/No Experience as 3rd)",
        )
    return SelectionDecision(True)


def role_limit(category_count: int) -> int:
    if category_count < 0:
        raise ValueError("category_count cannot be negative")
    return _ROLE_LIMITS.get(category_count, _ROLE_LIMITS[MAX_CATEGORIES])


def check_role_count(category_count: int, role_count: int) -> SelectionDecision:
    limit = role_limit(category_count)
    if role_count <= limit:
        return SelectionDecision(True)
    if category_count == 0:
        return SelectionDecision(False, "Select a category before choosing roles")
    if category_count == 1:
        return SelectionDecision(
            False,
            f"With 1 category selected, you can choose up to 3 roles (currently {role_count})",
        )
    if category_count == 2:
        return SelectionDecision(
            False,
            "With 2 categories selected, you can choose up to 2 roles from each category "
            f"(max 4 total, currently {role_count})",
        )
    return SelectionDecision(
        False,
        f"You can select up to {limit} roles with your current categories (currently {role_count})",
    )


def can_add_role(category_count: int, selected: Sequence[str], candidate: str) -> SelectionDecision:
    if candidate in selected:
        return SelectionDecision(False, "Role already selected")
    return check_role_count(category_count, len(selected) + 1)


def can_add_skill(
    mandatory: Sequence[str],
    advantage: Sequence[str],
    candidate: str,
    *,
    as_mandatory: bool,
) -> SelectionDecision:
    target, other = (mandatory, advantage) if as_mandatory else (advantage, mandatory)
    if candidate in target:
        return SelectionDecision(False, "Skill already selected")
    if candidate in other:
        label = "advantage" if as_mandatory else "mandatory"
        return SelectionDecision(False, f"Skill is already listed under {label} skills")
    if len(mandatory) + len(advantage) >= MAX_SKILLS:
        return SelectionDecision(False, f"Please select up to {MAX_SKILLS} most relevant skills")
    return SelectionDecision(True)
