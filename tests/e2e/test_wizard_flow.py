from fastapi.testclient import TestClient

from jobwizard.api.app import create_app


def test_save_resume_advance_and_submit() -> None:
    client = TestClient(create_app())

    personal = {"firstName": "Jane", "lastName": "Doe", "phone": "050-1234567", "email": "jane@example.com"}
    save_resp = client.post(
        "/form/save-state",
        json={"sessionId": "s1", "formData": {"personalInfo": personal}, "currentStep": 1},
    )
    assert save_resp.status_code == 200

    state = client.get("/form/state/s1").json()["data"]
    assert state["currentStep"] == 1
    assert state["formData"]["personalInfo"]["firstName"] == "Jane"

    step_resp = client.put("/form/update-step", json={"sessionId": "s1", "currentStep": 2})
    assert step_resp.status_code == 200
    assert step_resp.json()["data"] is True

    state = client.get("/form/state/s1").json()["data"]
    assert state["currentStep"] == 2
    assert state["formData"]["personalInfo"] == personal
    assert state["isCompleted"] is False

    submit_resp = client.post("/form/submit", json={"sessionId": "s1"})
    assert submit_resp.status_code == 200
    assert submit_resp.json()["message"] == "Form submitted successfully"

    state = client.get("/form/state/s1").json()["data"]
    assert state["isCompleted"] is True

    again = client.post("/form/submit", json={"sessionId": "s1"})
    assert again.status_code == 200
    assert client.get("/form/state/s1").json()["data"]["isCompleted"] is True


def test_full_wizard_with_reference_lookups() -> None:
    client = TestClient(create_app())

    session_id = client.post("/form/session").json()["data"]["sessionId"]

    personal = {"firstName": "Avi", "lastName": "Cohen", "phone": "0521112233", "email": "avi@example.com"}
    assert client.post("/form/validate", json={"step": "personal", "data": personal}).json()["data"]["valid"]
    client.post(
        "/form/save-state",
        json={"sessionId": session_id, "formData": {"personalInfo": personal}, "currentStep": 2},
    )

    categories = client.get("/reference/categories").json()["data"]
    software = next(item["id"] for item in categories if item["name"] == "Software Development")
    student = next(item["id"] for item in categories if item["name"] == "Student")
    roles = client.post(
        "/reference/roles/search", json={"categoryIds": [software, student], "searchText": "developer"}
    ).json()["data"]
    location = client.get("/reference/locations", params={"search": "remote"}).json()["data"][0]
    skills = client.get("/reference/skills", params={"search": "py"}).json()["data"]

    job = {
        "categoryIds": [software, student],
        "roleIds": [role["id"] for role in roles[:4]],
        "locationId": location["id"],
        "mandatorySkills": [skill["id"] for skill in skills],
        "experienceLevel": "junior",
        "salaryExpectation": 14000,
    }
    assert client.post("/form/validate", json={"step": "job", "data": job}).json()["data"]["errors"] == []

    notifications = {"email": True, "phone": True, "whatsapp": True}
    form_data = {"personalInfo": personal, "jobInterest": job, "notifications": notifications}
    saved = client.post(
        "/form/save-state",
        json={"sessionId": session_id, "formData": form_data, "currentStep": 4},
    ).json()["data"]

    assert saved["currentStep"] == 4
    assert saved["formData"]["jobInterest"]["roleIds"] == job["roleIds"]
    assert saved["formData"]["jobInterest"]["salaryExpectation"] == 14000.0
    assert saved["formData"]["notifications"] == {
        "email": True,
        "phone": True,
        "call": False,
        "sms": False,
        "whatsapp": True,
    }

    assert client.post("/form/submit", json={"sessionId": session_id}).status_code == 200
    assert client.get(f"/form/state/{session_id}").json()["data"]["isCompleted"] is True
