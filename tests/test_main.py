from __future__ import annotations

import json
import logging
from unittest.mock import MagicMock
from unittest.mock import patch

import pytest
import requests

from toggl_api import main
from toggl_api.api import TogglSession
from tests.test_api import PROJECT
from tests.test_api import REPORT
from tests.test_api import WORKSPACE


def _response(status_code: int, body: object) -> MagicMock:
    res = MagicMock(spec=requests.Response)
    res.status_code = status_code
    res.text = json.dumps(body)
    return res


@pytest.fixture
def http(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    monkeypatch.setenv("TOGGL_API_KEY", "secret-token")
    http = MagicMock(spec=requests.Session)
    session = TogglSession("secret-token", session=http)
    with patch.object(TogglSession, "from_config", return_value=session):
        yield http


def test_missing_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TOGGL_API_KEY", raising=False)
    assert main.main() == 1


def test_prints_first_workspace(
    http: MagicMock,
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("TOGGL_LOG_LEVEL", "debug")
    http.request.side_effect = [
        _response(200, [WORKSPACE]),
        _response(200, [PROJECT]),
        _response(200, [{"id": 1, "name": "design", "wid": 42}]),
        _response(200, REPORT),
    ]
    assert main.main() == 0
    out = capsys.readouterr().out
    assert "Workspace: Acme (42)" in out
    assert "Tracked in the last 7 days: 1.00h" in out
    assert "Website" in out
    assert "design" in out
    assert main.logger.level == logging.DEBUG
    http.close.assert_called_once()


def test_no_workspaces(http: MagicMock) -> None:
    http.request.return_value = _response(200, [])
    assert main.main() == 1


def test_service_error_is_reported(
    http: MagicMock, caplog: pytest.LogCaptureFixture
) -> None:
    http.request.return_value = _response(403, ["Incorrect username and/or password"])
    assert main.main() == 1
    assert "Incorrect username and/or password" in caplog.text


def test_transport_error_is_reported(http: MagicMock) -> None:
    http.request.side_effect = requests.ConnectionError("Connection refused")
    assert main.main() == 1


def test_invalid_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TOGGL_API_KEY", "secret-token")
    monkeypatch.setenv("TOGGL_LOG_LEVEL", "chatty")
    assert main.main() == 1
