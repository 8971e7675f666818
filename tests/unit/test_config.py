import pytest
from pydantic import ValidationError

from jobwizard.config import Settings


def test_api_prefix_is_normalised() -> None:
    assert Settings(api_prefix="api/").api_prefix == "/api"
    assert Settings(api_prefix="/api").api_prefix == "/api"
    assert Settings(api_prefix="").api_prefix == ""


def test_unknown_environment_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(app_env="qa")


def test_limits_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        Settings(reference_cache_ttl_sec=0)
    with pytest.raises(ValidationError):
        Settings(role_search_limit=-5)


def test_step_range_must_be_ordered() -> None:
    with pytest.raises(ValidationError):
        Settings(form_min_step=3, form_max_step=2)
    with pytest.raises(ValidationError):
        Settings(form_min_step=0)


def test_cors_origin_list() -> None:
    settings = Settings(cors_origins="http://a.test, http://b.test ,")
    assert settings.cors_origin_list == ["http://a.test", "http://b.test"]
