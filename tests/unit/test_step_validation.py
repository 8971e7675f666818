from jobwizard.core.validation import validate_form, validate_step
from jobwizard.types import FormData, JobInterest, NotificationSettings, PersonalInfo


def test_valid_personal_step() -> None:
    errors = validate_step(
        "personal",
        {"firstName": "Jane", "lastName": "O'Neil", "phone": "052 765 4321", "email": "jane@example.com"},
    )
    assert errors == []


def test_personal_step_reports_every_problem() -> None:
    errors = validate_step(
        "personal",
        {"firstName": "J", "lastName": "D0e", "phone": "0401234567", "email": "x@tempmail.org"},
    )
    assert "First name must be between 2-50 characters" in errors
    assert any(error.startswith("Last name must use English letters") for error in errors)
    assert "Please enter a valid Israeli mobile number (050-1234567)" in errors
    assert "Please use a permanent email address" in errors


def test_missing_personal_fields_are_required() -> None:
    errors = validate_step("personal", {})
    assert errors == [
        "First name is required",
        "Last name is required",
        "Phone number is required",
        "Email address is required",
    ]


def test_job_step_requires_selection() -> None:
    errors = validate_step("job", {})
    assert "Please select a job category" in errors
    assert "Please select at least one job role" in errors
    assert "Please choose a preferred location" in errors
    assert "Please add at least one skill" in errors


def test_job_step_schema_errors_are_flattened() -> None:
    errors = validate_step("job", {"categoryIds": ["c1"], "roleIds": ["r1", "r2", "r3", "r4"]})
    assert len(errors) == 1
    assert "up to 3 roles" in errors[0]


def test_notifications_need_a_channel() -> None:
    assert validate_step("notifications", {}) == ["Please enable at least one notification method"]
    assert validate_step("notifications", {"email": True}) == []


def test_unknown_step() -> None:
    assert validate_step("billing", {}) == ["Invalid step 'billing'"]


def test_validate_form_only_lists_failing_steps() -> None:
    form = FormData(
        personal_info=PersonalInfo(first_name="Jane", last_name="Doe", phone="0501234567", email="jane@example.com"),
        job_interest=JobInterest(),
        notifications=NotificationSettings(email=True),
    )
    result = validate_form(form)
    assert list(result) == ["job"]
