from __future__ import annotations

import json

import typer
import uvicorn

from jobwizard.api.app import create_app
from jobwizard.config import get_settings
from jobwizard.core.form_state import FormStateService
from jobwizard.core.reference_data import ReferenceDataService
from jobwizard.db.init import init_database
from jobwizard.db.session import SessionLocal
from jobwizard.errors import FormWizardError
from jobwizard.logging_config import configure_logging

app = typer.Typer(help="JobWizard CLI")
form_app = typer.Typer(help="Inspect and manage saved wizard sessions")
reference_app = typer.Typer(help="Reference data lookups")

app.add_typer(form_app, name="form")
app.add_typer(reference_app, name="reference")

REFERENCE_KINDS = ("categories", "roles", "locations", "skills", "skills-categories")

_INITIALIZED = False


def ensure_initialized() -> None:
    global _INITIALIZED
    if _INITIALIZED:
        return
    init_database()
    _INITIALIZED = True


def _echo(payload: object) -> None:
    typer.echo(json.dumps(payload, indent=2, default=str))


@app.command("init")
def init_cmd() -> None:
    """Create the schema and seed reference data."""
    configure_logging()
    result = init_database()
    _echo({"ok": True, **result})


@form_app.command("show")
def form_show(session_id: str = typer.Option(..., "--session-id")) -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        try:
            record = FormStateService(db).get_state(session_id)
        except FormWizardError as exc:
            raise typer.BadParameter(exc.message) from exc
        if record is None:
            raise typer.BadParameter(f"session {session_id} not found")
        _echo(record.model_dump(mode="json", by_alias=True))


@form_app.command("submit")
def form_submit(session_id: str = typer.Option(..., "--session-id")) -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        if not FormStateService(db).mark_completed(session_id):
            raise typer.BadParameter(f"session {session_id} not found")
        _echo({"session_id": session_id, "is_completed": True})


@form_app.command("delete")
def form_delete(session_id: str = typer.Option(..., "--session-id")) -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        if not FormStateService(db).delete_state(session_id):
            raise typer.BadParameter(f"session {session_id} not found")
        _echo({"session_id": session_id, "deleted": True})


@reference_app.command("list")
def reference_list(
    kind: str = typer.Argument(..., help=f"One of: {', '.join(REFERENCE_KINDS)}"),
    category_id: str | None = typer.Option(None, "--category-id"),
    search: str | None = typer.Option(None, "--search"),
) -> None:
    configure_logging()
    ensure_initialized()
    service = ReferenceDataService()
    if kind == "categories":
        items = service.get_categories()
    elif kind == "roles":
        items = service.get_roles(category_id)
    elif kind == "locations":
        items = service.get_locations(search)
    elif kind == "skills":
        items = service.get_skills(category_id, search)
    elif kind == "skills-categories":
        items = service.get_skills_categories()
    else:
        raise typer.BadParameter(f"unknown reference kind '{kind}'")
    _echo([item.model_dump(mode="json", by_alias=True) for item in items])


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, "--host"),
    port: int | None = typer.Option(None, "--port"),
    log_level: str | None = typer.Option(None, "--log-level"),
) -> None:
    configure_logging(log_level)
    ensure_initialized()
    settings = get_settings()
    app_instance = create_app(settings)
    uvicorn.run(
        app_instance,
        host=host or settings.app_host,
        port=port or settings.app_port,
        log_level=(log_level or settings.log_level).lower(),
    )
