from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import Field

from jobwizard.types import FormData, WireModel, WizardStep

T = TypeVar("T")


class ApiResponse(WireModel, Generic[T]):
    success: bool
    message: str = ""
    data: T | None = None
    errors: list[str] = Field(default_factory=list)


class SaveFormStateRequest(WireModel):
    session_id: str = ""
    form_data: FormData = Field(default_factory=FormData)
    current_step: int = 1


class UpdateStepRequest(WireModel):
    session_id: str = ""
    current_step: int


class SubmitFormRequest(WireModel):
    session_id: str = ""


class SessionResponse(WireModel):
    session_id: str


class ValidateStepRequest(WireModel):
    step: WizardStep
    data: dict[str, Any] = Field(default_factory=dict)


class ValidateStepResponse(WireModel):
    step: WizardStep
    valid: bool
    errors: list[str] = Field(default_factory=list)


class RoleSearchRequest(WireModel):
    category_ids: list[str] = Field(default_factory=list)
    search_text: str = ""
    limit: int | None = Field(default=None, ge=1)
