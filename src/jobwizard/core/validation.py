"""Per-step checks the wizard runs before letting the applicant move on.

Saving a draft only needs a structurally valid payload; these rules are the
stricter ones a finished step has to meet.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from jobwizard.core.phone import is_valid_mobile
from jobwizard.core.selection_rules import MAX_SKILLS, check_role_count
from jobwizard.types import FormData, JobInterest, NotificationSettings, PersonalInfo, WizardStep

NAME_PATTERN = re.compile(r"^[A-Za-z\s'-]+$")
EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)
TEMPORARY_EMAIL_DOMAINS = ("10minutemail.com", "tempmail.org", "guerrillamail.com")

_STEP_MODELS: dict[str, type[BaseModel]] = {
    "personal": PersonalInfo,
    "job": JobInterest,
    "notifications": NotificationSettings,
}


def _check_name(label: str, value: str) -> list[str]:
    if not value:
        return [f"{label} is required"]
    errors: list[str] = []
    if not 2 <= len(value) <= 50:
        errors.append(f"{label} must be between 2-50 characters")
    if not NAME_PATTERN.match(value):
        errors.append(f"{label} must use English letters only (A-Z, spaces, hyphens, apostrophes)")
    if "  " in value:
        errors.append(f"{label} must not contain multiple spaces")
    return errors


def check_personal_info(info: PersonalInfo) -> list[str]:
    errors = _check_name("First name", info.first_name)
    errors += _check_name("Last name", info.last_name)

    if not info.phone:
        errors.append("Phone number is required")
    elif not is_valid_mobile(info.phone):
        errors.append("Please enter a valid Israeli mobile number (050-1234567)")

    if not info.email:
        errors.append("Email address is required")
    elif not EMAIL_PATTERN.match(info.email):
        errors.append("Please enter a valid email address")
    elif info.email.endswith(TEMPORARY_EMAIL_DOMAINS):
        errors.append("Please use a permanent email address")
    return errors


def check_job_interest(interest: JobInterest) -> list[str]:
    errors: list[str] = []
    if not interest.category_ids:
        errors.append("Please select a job category")
    if not interest.role_ids:
        errors.append("Please select at least one job role")
    else:
        decision = check_role_count(len(interest.category_ids), len(interest.role_ids))
        if not decision.accepted:
            errors.append(decision.reason)
    if not interest.location_id:
        errors.append("Please choose a preferred location")
    if not interest.mandatory_skills:
        errors.append("Please add at least one skill")
    if len(interest.mandatory_skills) + len(interest.advantage_skills) > MAX_SKILLS:
        errors.append(f"Please select up to {MAX_SKILLS} most relevant skills")
    return errors


def check_notifications(settings: NotificationSettings) -> list[str]:
    if not settings.any_enabled:
        return ["Please enable at least one notification method"]
    return []


_STEP_CHECKS = {
    "personal": check_personal_info,
    "job": check_job_interest,
    "notifications": check_notifications,
}


def format_errors(errors: Sequence[Mapping[str, Any]]) -> list[str]:
    """Flatten pydantic error dicts into ``"loc.path: message"`` strings."""
    messages = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return messages


def validate_step(step: WizardStep, data: dict[str, Any]) -> list[str]:
    """Return the problems with ``data`` for ``step``; an empty list means it passes."""
    model = _STEP_MODELS.get(step)
    if model is None:
        return [f"Invalid step '{step}'"]
    try:
        parsed = model.model_validate(data)
    except PydanticValidationError as exc:
        return format_errors(exc.errors())
    return _STEP_CHECKS[step](parsed)


def validate_form(form_data: FormData) -> dict[str, list[str]]:
    results = {
        "personal": check_personal_info(form_data.personal_info),
        "job": check_job_interest(form_data.job_interest),
        "notifications": check_notifications(form_data.notifications),
    }
    return {step: errors for step, errors in results.items() if errors}
