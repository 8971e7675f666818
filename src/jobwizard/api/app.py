from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobwizard.api.routes import form_router, reference_router
from jobwizard.api.schemas import ApiResponse
from jobwizard.config import Settings, get_settings
from jobwizard.core.reference_data import ReferenceDataService
from jobwizard.core.validation import format_errors
from jobwizard.db.init import init_database
from jobwizard.errors import FormWizardError

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, errors: list[str] | None = None) -> JSONResponse:
    body = ApiResponse[None](success=False, message=message, errors=errors or [])
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


def create_app(
    settings: Settings | None = None,
    *,
    reference_data: ReferenceDataService | None = None,
) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(title=settings.app_name)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.reference_data = reference_data or ReferenceDataService(settings=settings)

    @app.on_event("startup")
    def _startup() -> None:
        init_database()

    @app.exception_handler(FormWizardError)
    async def _form_wizard_error(request: Request, exc: FormWizardError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return error_response(exc.status_code, exc.message, exc.errors or [exc.message])

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return error_response(400, "Invalid request payload", format_errors(exc.errors()))

    @app.get("/health")
    def health() -> JSONResponse:
        return JSONResponse({"status": "ok"})

    app.include_router(form_router, prefix=settings.api_prefix)
    app.include_router(reference_router, prefix=settings.api_prefix)
    return app
