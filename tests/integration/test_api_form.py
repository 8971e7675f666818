from fastapi.testclient import TestClient

from jobwizard.api.app import create_app
from jobwizard.config import Settings
from jobwizard.db.base import Base
from jobwizard.db.models import FormState
from jobwizard.db.session import SessionLocal, engine


def _payload(session_id: str, step: int = 1) -> dict:
    return {
        "sessionId": session_id,
        "currentStep": step,
        "formData": {
            "personalInfo": {"firstName": "Jane", "lastName": "Doe", "phone": "0501234567", "email": "Jane@Example.com"},
            "jobInterest": {"categoryIds": ["c1"], "roleIds": ["r1", "r2"], "mandatorySkills": ["python"]},
            "notifications": {"email": True},
        },
    }


def test_save_and_get_state_api() -> None:
    client = TestClient(create_app())

    save_resp = client.post("/form/save-state", json=_payload("api-1"))
    assert save_resp.status_code == 200
    body = save_resp.json()
    assert body["success"] is True
    assert body["message"] == "Form state saved successfully"
    assert body["data"]["sessionId"] == "api-1"
    assert body["data"]["isCompleted"] is False

    get_resp = client.get("/form/state/api-1")
    assert get_resp.status_code == 200
    data = get_resp.json()["data"]
    assert data["formData"]["personalInfo"]["phone"] == "050-1234567"
    assert data["formData"]["personalInfo"]["email"] == "jane@example.com"
    assert data["formData"]["jobInterest"]["roleIds"] == ["r1", "r2"]
    assert data["formData"]["jobInterest"]["locationId"] is None


def test_unknown_session_is_404_envelope() -> None:
    client = TestClient(create_app())

    for resp in (
        client.get("/form/state/nobody"),
        client.put("/form/update-step", json={"sessionId": "nobody", "currentStep": 2}),
        client.post("/form/submit", json={"sessionId": "nobody"}),
        client.delete("/form/state/nobody"),
    ):
        assert resp.status_code == 404
        body = resp.json()
        assert body["success"] is False
        assert body["message"] == "Form state not found"
        assert body["errors"]
        assert "data" not in body


def test_missing_session_id_is_400() -> None:
    client = TestClient(create_app())

    resp = client.post("/form/save-state", json={"formData": {}, "currentStep": 1})
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "message": "sessionId is required", "errors": ["sessionId is required"]}

    resp = client.post("/form/submit", json={"sessionId": "  "})
    assert resp.status_code == 400


def test_malformed_payload_is_400() -> None:
    client = TestClient(create_app())

    resp = client.put("/form/update-step", json={"sessionId": "x"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Invalid request payload"
    assert any("currentStep" in error for error in body["errors"])

    too_many_roles = _payload("x")
    too_many_roles["formData"]["jobInterest"]["roleIds"] = ["r1", "r2", "r3", "r4"]
    assert client.post("/form/save-state", json=too_many_roles).status_code == 400


def test_step_out_of_range_is_400() -> None:
    client = TestClient(create_app())
    client.post("/form/save-state", json=_payload("range"))

    resp = client.put("/form/update-step", json={"sessionId": "range", "currentStep": 9})
    assert resp.status_code == 400
    assert resp.json()["message"] == "currentStep must be between 1 and 4"


def test_delete_state_api() -> None:
    client = TestClient(create_app())
    client.post("/form/save-state", json=_payload("gone"))

    resp = client.delete("/form/state/gone")
    assert resp.status_code == 200
    assert resp.json()["data"] is True
    assert client.get("/form/state/gone").status_code == 404


def test_storage_failures_are_500_envelope() -> None:
    client = TestClient(create_app())

    with SessionLocal() as db:
        db.add(FormState(session_id="corrupt", form_data_xml="not xml"))
        db.commit()
    resp = client.get("/form/state/corrupt")
    assert resp.status_code == 500
    assert resp.json()["success"] is False

    Base.metadata.drop_all(bind=engine)
    resp = client.post("/form/save-state", json=_payload("down"))
    assert resp.status_code == 500
    assert resp.json()["message"] == "failed to save form state for session 'down'"


def test_new_session_endpoint() -> None:
    client = TestClient(create_app())
    first = client.post("/form/session").json()["data"]["sessionId"]
    second = client.post("/form/session").json()["data"]["sessionId"]
    assert first and second and first != second


def test_validate_step_endpoint() -> None:
    client = TestClient(create_app())

    ok = client.post("/form/validate", json={"step": "notifications", "data": {"phone": True}})
    assert ok.status_code == 200
    assert ok.json()["data"] == {"step": "notifications", "valid": True, "errors": []}

    bad = client.post("/form/validate", json={"step": "personal", "data": {"firstName": "Jane"}})
    data = bad.json()["data"]
    assert data["valid"] is False
    assert "Email address is required" in data["errors"]

    unknown = client.post("/form/validate", json={"step": "billing", "data": {}})
    assert unknown.status_code == 400


def test_api_prefix_mounts_routers() -> None:
    client = TestClient(create_app(Settings(api_prefix="api")))
    assert client.post("/api/form/session").status_code == 200
    assert client.get("/api/reference/categories").status_code == 200
    assert client.get("/health").json() == {"status": "ok"}


def test_unstorable_text_is_rejected_without_writing() -> None:
    client = TestClient(create_app())

    payload = _payload("ctrl")
    payload["formData"]["personalInfo"]["firstName"] = "Ann\u0001"
    resp = client.post("/form/save-state", json=payload)
    assert resp.status_code == 400
    assert resp.json()["errors"] == ["FirstName: control characters are not allowed"]

    assert client.get("/form/state/ctrl").status_code == 404


def test_carriage_return_is_returned_unchanged() -> None:
    client = TestClient(create_app())

    payload = _payload("cr")
    payload["formData"]["personalInfo"]["lastName"] = "Doe\rSmith"
    assert client.post("/form/save-state", json=payload).status_code == 200
    assert client.get("/form/state/cr").json()["data"]["formData"]["personalInfo"]["lastName"] == "Doe\rSmith"
