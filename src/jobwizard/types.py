from __future__ import annotations

from datetime import UTC, datetime
from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from jobwizard.core.phone import normalize_phone
from jobwizard.core.selection_rules import MAX_CATEGORIES, MAX_SKILLS, check_role_count

ExperienceLevel = Literal["entry", "junior", "mid", "senior", "expert"]
SkillType = Literal["mandatory", "advantage"]
WizardStep = Literal["personal", "job", "notifications"]


class WireModel(BaseModel):
    """Base for payloads exchanged with the wizard client (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _clean_ids(values: list[str]) -> list[str]:
    cleaned = [value.strip() for value in values if value and value.strip()]
    if len(set(cleaned)) != len(cleaned):
        raise ValueError("duplicate identifiers are not allowed")
    return cleaned


class PersonalInfo(WireModel):
    first_name: str = ""
    last_name: str = ""
    phone: str = ""
    email: str = Field(default="", max_length=254)

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def strip_text(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("phone", mode="before")
    @classmethod
    def normalize_phone_number(cls, value: object) -> object:
        return normalize_phone(value.strip()) if isinstance(value, str) else value

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value: object) -> object:
        return value.strip().lower() if isinstance(value, str) else value


class JobInterest(WireModel):
    category_ids: list[str] = Field(default_factory=list, max_length=MAX_CATEGORIES)
    role_ids: list[str] = Field(default_factory=list)
    location_id: str | None = None
    mandatory_skills: list[str] = Field(default_factory=list, max_length=MAX_SKILLS)
    advantage_skills: list[str] = Field(default_factory=list, max_length=MAX_SKILLS)
    experience_level: ExperienceLevel | None = None
    salary_expectation: float | None = Field(default=None, ge=0, le=100000)

    @field_validator("category_ids", "role_ids", "mandatory_skills", "advantage_skills")
    @classmethod
    def validate_ids(cls, value: list[str]) -> list[str]:
        return _clean_ids(value)

    @field_validator("location_id", "experience_level", mode="before")
    @classmethod
    def blank_to_none(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @model_validator(mode="after")
    def validate_selection(self) -> "JobInterest":
        decision = check_role_count(len(self.category_ids), len(self.role_ids))
        if not decision.accepted:
            raise ValueError(decision.reason)
        overlap = set(self.mandatory_skills) & set(self.advantage_skills)
        if overlap:
            raise ValueError(
                f"skills cannot be both mandatory and advantage: {', '.join(sorted(overlap))}"
            )
        return self


class NotificationSettings(WireModel):
    email: bool = Field(default=False, validation_alias=AliasChoices("email", "isEmailEnabled"))
    phone: bool = Field(default=False, validation_alias=AliasChoices("phone", "isPhoneEnabled"))
    call: bool = Field(default=False, validation_alias=AliasChoices("call", "isCallEnabled"))
    sms: bool = Field(default=False, validation_alias=AliasChoices("sms", "isSmsEnabled"))
    whatsapp: bool = Field(
        default=False, validation_alias=AliasChoices("whatsapp", "isWhatsappEnabled")
    )

    @model_validator(mode="after")
    def clear_phone_channels(self) -> "NotificationSettings":
        # call/sms/whatsapp ride on the phone channel
        if not self.phone:
            self.call = False
            self.sms = False
            self.whatsapp = False
        return self

    @property
    def any_enabled(self) -> bool:
        return self.email or self.phone


def toggle_phone(settings: NotificationSettings, enabled: bool) -> NotificationSettings:
    """Switch the phone channel, cascading to its sub-channels."""
    return settings.model_copy(
        update={"phone": enabled, "call": enabled, "sms": enabled, "whatsapp": enabled}
    )


class FormData(WireModel):
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    job_interest: JobInterest = Field(default_factory=JobInterest)
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)


class FormStateRecord(WireModel):
    id: str
    session_id: str
    form_data: FormData
    current_step: int
    is_completed: bool
    created_at: datetime
    updated_at: datetime


class CategoryItem(WireModel):
    id: str
    name: str


class RoleItem(WireModel):
    id: str
    category_id: str
    name: str


class LocationItem(WireModel):
    id: str
    name: str


class SkillsCategoryItem(WireModel):
    id: str
    name: str


class SkillItem(WireModel):
    id: str
    name: str
    skill_category_id: str | None = None
    skill_type: SkillType = Field(default="advantage", alias="category")


class ReferenceBundle(WireModel):
    categories: list[CategoryItem] = Field(default_factory=list)
    roles: list[RoleItem] = Field(default_factory=list)
    locations: list[LocationItem] = Field(default_factory=list)
    skills: list[SkillItem] = Field(default_factory=list)
    skills_categories: list[SkillsCategoryItem] = Field(default_factory=list)
    last_updated: datetime = Field(default_factory=lambda: datetime.now(UTC))
