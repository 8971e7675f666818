"""XML encoding of the wizard payload stored in ``form_state.form_data_xml``.

Layout::

    <FormData>
      <PersonalInfo><FirstName/><LastName/><Phone/><Email/></PersonalInfo>
      <JobInterest>
        <CategoryIds><CategoryId/>...</CategoryIds>
        <RoleIds><RoleId/>...</RoleIds>
        <LocationId/>
        <MandatorySkills><Skill/>...</MandatorySkills>
        <AdvantageSkills><Skill/>...</AdvantageSkills>
        <ExperienceLevel/><SalaryExpectation/>
      </JobInterest>
      <Notifications><Email/><Phone/><Call/><SMS/><WhatsApp/></Notifications>
    </FormData>

Optional values are written as empty elements. On decode a missing element
falls back to the field's zero value; only a document that does not parse at
all is an error.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from typing import get_args

from pydantic import ValidationError as PydanticValidationError

from jobwizard.errors import FormDataDecodeError, ValidationError
from jobwizard.types import (
    ExperienceLevel,
    FormData,
    JobInterest,
    NotificationSettings,
    PersonalInfo,
)

logger = logging.getLogger(__name__)

ROOT_TAG = "FormData"

_PERSONAL_FIELDS = (
    ("first_name", "FirstName"),
    ("last_name", "LastName"),
    ("phone", "Phone"),
    ("email", "Email"),
)
_JOB_LIST_FIELDS = (
    ("category_ids", "CategoryIds", "CategoryId"),
    ("role_ids", "RoleIds", "RoleId"),
    ("mandatory_skills", "MandatorySkills", "Skill"),
    ("advantage_skills", "AdvantageSkills", "Skill"),
)
_NOTIFICATION_FIELDS = (
    ("email", "Email"),
    ("phone", "Phone"),
    ("call", "Call"),
    ("sms", "SMS"),
    ("whatsapp", "WhatsApp"),
)

# code points XML 1.0 cannot carry, even as character references
_UNSTORABLE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")
_EXPERIENCE_LEVELS = frozenset(get_args(ExperienceLevel))


def _text_child(parent: ET.Element, tag: str, value: str | None) -> None:
    if value and _UNSTORABLE.search(value):
        raise ValidationError(
            f"{tag} contains control characters that cannot be stored",
            errors=[f"{tag}: control characters are not allowed"],
        )
    ET.SubElement(parent, tag).text = value or ""


def _format_number(value: float | None) -> str:
    if value is None:
        return ""
    return repr(float(value))


def encode(form_data: FormData) -> str:
    root = ET.Element(ROOT_TAG)

    personal = ET.SubElement(root, "PersonalInfo")
    for field, tag in _PERSONAL_FIELDS:
        _text_child(personal, tag, getattr(form_data.personal_info, field))

    job = form_data.job_interest
    job_el = ET.SubElement(root, "JobInterest")
    for field, container_tag, item_tag in _JOB_LIST_FIELDS[:2]:
        container = ET.SubElement(job_el, container_tag)
        for item in getattr(job, field):
            _text_child(container, item_tag, item)
    _text_child(job_el, "LocationId", job.location_id)
    for field, container_tag, item_tag in _JOB_LIST_FIELDS[2:]:
        container = ET.SubElement(job_el, container_tag)
        for item in getattr(job, field):
            _text_child(container, item_tag, item)
    _text_child(job_el, "ExperienceLevel", job.experience_level)
    _text_child(job_el, "SalaryExpectation", _format_number(job.salary_expectation))

    notifications = ET.SubElement(root, "Notifications")
    for field, tag in _NOTIFICATION_FIELDS:
        _text_child(notifications, tag, "true" if getattr(form_data.notifications, field) else "false")

    # a literal CR would be folded into LF by the parser
    return ET.tostring(root, encoding="unicode").replace("\r", "&#13;")


def _child_text(parent: ET.Element | None, tag: str) -> str:
    if parent is None:
        return ""
    element = parent.find(tag)
    if element is None or element.text is None:
        return ""
    return element.text


def _child_list(parent: ET.Element | None, container_tag: str, item_tag: str) -> list[str] | None:
    if parent is None:
        return None
    container = parent.find(container_tag)
    if container is None:
        return None
    return [item.text or "" for item in container.findall(item_tag)]


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() in {"true", "1"}


def _parse_number(raw: str) -> float | None:
    raw = raw.strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring unparseable salary expectation %r", raw)
        return None


def _parse_experience_level(raw: str) -> str | None:
    raw = raw.strip()
    if not raw:
        return None
    if raw not in _EXPERIENCE_LEVELS:
        logger.warning("Ignoring unknown experience level %r", raw)
        return None
    return raw


def _decode_job_interest(job_el: ET.Element | None) -> JobInterest:
    values: dict[str, object] = {}
    for field, container_tag, item_tag in _JOB_LIST_FIELDS:
        items = _child_list(job_el, container_tag, item_tag)
        if items is not None:
            values[field] = items

    # rows written before multi-category support carry a single CategoryId / Skills list
    if "category_ids" not in values:
        legacy_category = _child_text(job_el, "CategoryId").strip()
        if legacy_category:
            values["category_ids"] = [legacy_category]
    if "mandatory_skills" not in values:
        legacy_skills = _child_list(job_el, "Skills", "Skill")
        if legacy_skills:
            values["mandatory_skills"] = legacy_skills

    values["location_id"] = _child_text(job_el, "LocationId")
    values["experience_level"] = _parse_experience_level(_child_text(job_el, "ExperienceLevel"))
    values["salary_expectation"] = _parse_number(_child_text(job_el, "SalaryExpectation"))
    return JobInterest(**values)


def decode(document: str) -> FormData:
    try:
        root = ET.fromstring(document)
    except ET.ParseError as exc:
        raise FormDataDecodeError(f"stored form data is not valid XML: {exc}") from exc

    if root.tag != ROOT_TAG:
        raise FormDataDecodeError(f"unexpected root element <{root.tag}>, expected <{ROOT_TAG}>")

    personal_el = root.find("PersonalInfo")
    notifications_el = root.find("Notifications")

    try:
        return FormData(
            personal_info=PersonalInfo(
                **{field: _child_text(personal_el, tag) for field, tag in _PERSONAL_FIELDS}
            ),
            job_interest=_decode_job_interest(root.find("JobInterest")),
            notifications=NotificationSettings(
                **{
                    field: _parse_bool(_child_text(notifications_el, tag))
                    for field, tag in _NOTIFICATION_FIELDS
                }
            ),
        )
    except PydanticValidationError as exc:
        raise FormDataDecodeError(f"stored form data violates the form schema: {exc}") from exc
