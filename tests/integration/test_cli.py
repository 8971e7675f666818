import json

import pytest
from typer.testing import CliRunner

from jobwizard.cli import app as cli
from jobwizard.core.form_state import FormStateService
from jobwizard.db.session import SessionLocal
from jobwizard.types import FormData, PersonalInfo

runner = CliRunner()


@pytest.fixture(autouse=True)
def skip_init(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "_INITIALIZED", True)
    monkeypatch.setattr(cli, "configure_logging", lambda: None)


def test_reference_list_categories() -> None:
    result = runner.invoke(cli.app, ["reference", "list", "categories"])
    assert result.exit_code == 0
    names = [item["name"] for item in json.loads(result.output)]
    assert "Software Development" in names


def test_reference_list_rejects_unknown_kind() -> None:
    result = runner.invoke(cli.app, ["reference", "list", "planets"])
    assert result.exit_code != 0


def test_form_show_submit_delete() -> None:
    with SessionLocal() as db:
        FormStateService(db).save_state("cli-1", FormData(personal_info=PersonalInfo(first_name="Jane")), 2)

    shown = runner.invoke(cli.app, ["form", "show", "--session-id", "cli-1"])
    assert shown.exit_code == 0
    assert json.loads(shown.output)["formData"]["personalInfo"]["firstName"] == "Jane"

    submitted = runner.invoke(cli.app, ["form", "submit", "--session-id", "cli-1"])
    assert submitted.exit_code == 0
    assert json.loads(submitted.output)["is_completed"] is True

    deleted = runner.invoke(cli.app, ["form", "delete", "--session-id", "cli-1"])
    assert deleted.exit_code == 0

    missing = runner.invoke(cli.app, ["form", "show", "--session-id", "cli-1"])
    assert missing.exit_code != 0
