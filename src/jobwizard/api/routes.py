from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from jobwizard.api.deps import get_form_service, get_reference_service
from jobwizard.api.schemas import (
    ApiResponse,
    RoleSearchRequest,
    SaveFormStateRequest,
    SessionResponse,
    SubmitFormRequest,
    UpdateStepRequest,
    ValidateStepRequest,
    ValidateStepResponse,
)
from jobwizard.core.form_state import FormStateService, resolve_session_id
from jobwizard.core.reference_data import ReferenceDataService
from jobwizard.core.validation import validate_step
from jobwizard.errors import NotFoundError
from jobwizard.types import (
    CategoryItem,
    FormStateRecord,
    LocationItem,
    ReferenceBundle,
    RoleItem,
    SkillItem,
    SkillsCategoryItem,
)

form_router = APIRouter(prefix="/form", tags=["form"])
reference_router = APIRouter(prefix="/reference", tags=["reference"])


def _session_not_found(session_id: str) -> NotFoundError:
    return NotFoundError("Form state not found", errors=[f"No form state for session '{session_id}'"])


@form_router.post("/session", response_model=ApiResponse[SessionResponse])
def create_session() -> ApiResponse[SessionResponse]:
    return ApiResponse(
        success=True,
        message="Session created",
        data=SessionResponse(session_id=resolve_session_id()),
    )


@form_router.post("/save-state", response_model=ApiResponse[FormStateRecord])
def save_form_state(
    payload: SaveFormStateRequest,
    service: FormStateService = Depends(get_form_service),
) -> ApiResponse[FormStateRecord]:
    record = service.save_state(payload.session_id, payload.form_data, payload.current_step)
    return ApiResponse(success=True, message="Form state saved successfully", data=record)


@form_router.get("/state/{session_id}", response_model=ApiResponse[FormStateRecord])
def get_form_state(
    session_id: str,
    service: FormStateService = Depends(get_form_service),
) -> ApiResponse[FormStateRecord]:
    record = service.get_state(session_id)
    if record is None:
        raise _session_not_found(session_id)
    return ApiResponse(success=True, message="Form state retrieved successfully", data=record)


@form_router.put("/update-step", response_model=ApiResponse[bool])
def update_step(
    payload: UpdateStepRequest,
    service: FormStateService = Depends(get_form_service),
) -> ApiResponse[bool]:
    if not service.update_step(payload.session_id, payload.current_step):
        raise _session_not_found(payload.session_id)
    return ApiResponse(success=True, message="Current step updated", data=True)


@form_router.post("/submit", response_model=ApiResponse[bool])
def submit_form(
    payload: SubmitFormRequest,
    service: FormStateService = Depends(get_form_service),
) -> ApiResponse[bool]:
    if not service.mark_completed(payload.session_id):
        raise _session_not_found(payload.session_id)
    return ApiResponse(success=True, message="Form submitted successfully", data=True)


@form_router.delete("/state/{session_id}", response_model=ApiResponse[bool])
def delete_form_state(
    session_id: str,
    service: FormStateService = Depends(get_form_service),
) -> ApiResponse[bool]:
    if not service.delete_state(session_id):
        raise _session_not_found(session_id)
    return ApiResponse(success=True, message="Form state deleted", data=True)


@form_router.post("/validate", response_model=ApiResponse[ValidateStepResponse])
def validate_form_step(payload: ValidateStepRequest) -> ApiResponse[ValidateStepResponse]:
    errors = validate_step(payload.step, payload.data)
    result = ValidateStepResponse(step=payload.step, valid=not errors, errors=errors)
    return ApiResponse(
        success=True,
        message="Step is valid" if not errors else "Step has validation errors",
        data=result,
    )


@reference_router.get("/categories", response_model=ApiResponse[list[CategoryItem]])
def get_categories(
    service: ReferenceDataService = Depends(get_reference_service),
) -> ApiResponse[list[CategoryItem]]:
    return ApiResponse(
        success=True,
        message="Categories retrieved successfully",
        data=service.get_categories(),
    )


@reference_router.get("/roles", response_model=ApiResponse[list[RoleItem]])
def get_roles(
    category_id: str | None = Query(default=None, alias="categoryId"),
    service: ReferenceDataService = Depends(get_reference_service),
) -> ApiResponse[list[RoleItem]]:
    return ApiResponse(
        success=True,
        message="Roles retrieved successfully",
        data=service.get_roles(category_id),
    )


@reference_router.get("/roles/{category_id}", response_model=ApiResponse[list[RoleItem]])
def get_roles_by_category(
    category_id: str,
    service: ReferenceDataService = Depends(get_reference_service),
) -> ApiResponse[list[RoleItem]]:
    return ApiResponse(
        success=True,
        message="Roles retrieved successfully",
        data=service.get_roles(category_id),
    )


@reference_router.post("/roles/search", response_model=ApiResponse[list[RoleItem]])
def search_roles(
    payload: RoleSearchRequest,
    service: ReferenceDataService = Depends(get_reference_service),
) -> ApiResponse[list[RoleItem]]:
    roles = service.search_roles(payload.category_ids, payload.search_text, payload.limit)
    return ApiResponse(success=True, message="Roles retrieved successfully", data=roles)


@reference_router.get("/locations", response_model=ApiResponse[list[LocationItem]])
def get_locations(
    search: str | None = Query(default=None),
    service: ReferenceDataService = Depends(get_reference_service),
) -> ApiResponse[list[LocationItem]]:
    return ApiResponse(
        success=True,
        message="Locations retrieved successfully",
        data=service.get_locations(search),
    )


@reference_router.get("/skills", response_model=ApiResponse[list[SkillItem]])
def get_skills(
    category_id: str | None = Query(default=None, alias="categoryId"),
    search: str | None = Query(default=None),
    limit: int | None = Query(default=None, ge=1),
    service: ReferenceDataService = Depends(get_reference_service),
) -> ApiResponse[list[SkillItem]]:
    return ApiResponse(
        success=True,
        message="Skills retrieved successfully",
        data=service.get_skills(category_id, search, limit),
    )


@reference_router.get("/skills/{category_id}", response_model=ApiResponse[list[SkillItem]])
def get_skills_by_category(
    category_id: str,
    service: ReferenceDataService = Depends(get_reference_service),
) -> ApiResponse[list[SkillItem]]:
    return ApiResponse(
        success=True,
        message="Skills retrieved successfully",
        data=service.get_skills(category_id),
    )


@reference_router.get("/skills-categories", response_model=ApiResponse[list[SkillsCategoryItem]])
def get_skills_categories(
    service: ReferenceDataService = Depends(get_reference_service),
) -> ApiResponse[list[SkillsCategoryItem]]:
    return ApiResponse(
        success=True,
        message="Skills categories retrieved successfully",
        data=service.get_skills_categories(),
    )


@reference_router.get("/all", response_model=ApiResponse[ReferenceBundle])
def get_all_reference_data(
    service: ReferenceDataService = Depends(get_reference_service),
) -> ApiResponse[ReferenceBundle]:
    return ApiResponse(
        success=True,
        message="Reference data retrieved successfully",
        data=service.get_all(),
    )


@reference_router.post("/refresh-cache", response_model=ApiResponse[bool])
def refresh_cache(
    service: ReferenceDataService = Depends(get_reference_service),
) -> ApiResponse[bool]:
    service.refresh_cache()
    return ApiResponse(success=True, message="Cache refreshed successfully", data=True)
