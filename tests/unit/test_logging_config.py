import logging

import pytest

from jobwizard import logging_config


@pytest.fixture()
def fresh_logging(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(logging_config, "_LOG_CONFIGURED", False)
    yield
    logging.getLogger("sqlalchemy.engine").setLevel(logging.NOTSET)
    logging.getLogger("uvicorn.access").setLevel(logging.NOTSET)


def test_sqlalchemy_echo_follows_debug(fresh_logging: None) -> None:
    logging_config.configure_logging("debug")
    assert logging.getLogger("sqlalchemy.engine").level == logging.INFO
    assert logging.getLogger("uvicorn.access").level == logging.INFO


def test_quiet_levels_hold_sqlalchemy_back(fresh_logging: None) -> None:
    logging_config.configure_logging("ERROR")
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
    assert logging.getLogger("uvicorn.access").level == logging.ERROR


def test_configure_runs_once(fresh_logging: None) -> None:
    logging_config.configure_logging("ERROR")
    logging_config.configure_logging("DEBUG")
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_unknown_level_falls_back_to_info() -> None:
    assert logging_config._resolve_level("chatty") == logging.INFO
    assert logging_config._resolve_level(" warning ") == logging.WARNING
