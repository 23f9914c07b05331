from __future__ import annotations

import logging

import pytest

from toggl_api.config import APIKeyMissingError
from toggl_api.config import Config
from toggl_api.config import ConfigError
from toggl_api.config import DEFAULT_API_URL
from toggl_api.config import DEFAULT_REPORTS_API_URL


def test_defaults() -> None:
    config = Config({"TOGGL_API_KEY": "abc"})
    assert config.API_KEY == "abc"
    assert config.API_URL == DEFAULT_API_URL
    assert config.REPORTS_API_URL == DEFAULT_REPORTS_API_URL
    assert config.USER_AGENT == "toggl-api"
    assert config.TIMEOUT is None


@pytest.mark.parametrize("env", [{}, {"TOGGL_API_KEY": ""}])
def test_missing_api_key(env: dict[str, str]) -> None:
    with pytest.raises(APIKeyMissingError, match="TOGGL_API_KEY"):
        Config(env)


def test_missing_api_key_is_config_error() -> None:
    assert issubclass(APIKeyMissingError, ConfigError)


def test_invalid_timeout() -> None:
    with pytest.raises(ConfigError, match="Invalid timeout"):
        Config({"TOGGL_API_KEY": "abc", "TOGGL_TIMEOUT": "soon"})


def test_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TOGGL_API_KEY", "from-env")
    monkeypatch.setenv("TOGGL_USER_AGENT", "me@example.com")
    config = Config()
    assert config.API_KEY == "from-env"
    assert config.USER_AGENT == "me@example.com"


def test_log_level() -> None:
    assert Config({"TOGGL_API_KEY": "abc"}).LOG_LEVEL == logging.INFO
    config = Config({"TOGGL_API_KEY": "abc", "TOGGL_LOG_LEVEL": "debug"})
    assert config.LOG_LEVEL == logging.DEBUG


def test_invalid_log_level() -> None:
    with pytest.raises(ConfigError, match="Invalid log level: CHATTY"):
        Config({"TOGGL_API_KEY": "abc", "TOGGL_LOG_LEVEL": "chatty"})
