from __future__ import annotations

import logging
from datetime import datetime
from types import TracebackType
from typing import Any
from typing import Literal

import requests
from requests.auth import HTTPBasicAuth

from toggl_api.config import Config
from toggl_api.config import DEFAULT_API_URL
from toggl_api.config import DEFAULT_REPORTS_API_URL
from toggl_api.result import ApiResult
from toggl_api.result import classify
from toggl_api.result import HTTPResponse
from toggl_api.result import Outcome
from toggl_api.result import TransportFailure
from toggl_api.schemas import DefaultErrorJson
from toggl_api.schemas import DetailedReport
from toggl_api.schemas import Project
from toggl_api.schemas import ReportsDetailedParams
from toggl_api.schemas import ReportsErrorJson
from toggl_api.schemas import Tag
from toggl_api.schemas import TimeEntry
from toggl_api.schemas import TimeEntryRequest
from toggl_api.schemas import TimeEntryResponse
from toggl_api.schemas import TogglModel
from toggl_api.schemas import UserResponse
from toggl_api.schemas import Workspace
from toggl_api.utils import to_query_params
from toggl_api.utils import to_unix_timestamp

logger = logging.getLogger("toggl-api")


class TogglTokenAuth(HTTPBasicAuth):
    """Basic auth with the fixed ``api_token`` username and the API token as password."""

    USERNAME = "api_token"

    def __init__(self, api_key: str) -> None:
        super().__init__(self.USERNAME, api_key)


class TogglSession:
    def __init__(
        self,
        api_key: str,
        api_url: str = DEFAULT_API_URL,
        reports_api_url: str = DEFAULT_REPORTS_API_URL,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.reports_api_url = reports_api_url
        self.timeout = timeout
        self.auth = TogglTokenAuth(api_key)
        self.session = session if session is not None else requests.Session()
        self.headers = {"content-type": "application/json"}

    @classmethod
    def from_config(cls, config: Config) -> TogglSession:
        return cls(
            config.API_KEY,
            api_url=config.API_URL,
            reports_api_url=config.REPORTS_API_URL,
            timeout=config.TIMEOUT,
        )

    def __enter__(self) -> TogglSession:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_traceback: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def _request(
        self,
        method: Literal["GET", "POST"],
        url: str,
        params: dict[str, str] | None = None,
        body: TogglModel | None = None,
    ) -> Outcome:
        logger.debug(f"Requesting: {method} {url}")
        try:
            res = self.session.request(
                method,
                url,
                params=params,
                json=body.to_json() if body is not None else None,
                headers=self.headers,
                auth=self.auth,
                timeout=self.timeout,
                # body is read below, after the status line and headers
                stream=True,
            )
        except requests.RequestException as e:
            logger.warning(f"{method} {url} failed before a response: {e}")
            return TransportFailure(e)

        try:
            text: str | None = res.text
        except (requests.RequestException, UnicodeDecodeError) as e:
            logger.warning(f"Unable to read response body of {method} {url}: {e}")
            text = None
        finally:
            res.close()
        return HTTPResponse(res.status_code, text)

    def _dispatch(
        self,
        method: Literal["GET", "POST"],
        url: str,
        payload_shape: Any,
        error_shape: Any,
        params: dict[str, str] | None = None,
        body: TogglModel | None = None,
    ) -> ApiResult[Any, Any]:
        outcome = self._request(method, url, params=params, body=body)
        result = classify(outcome, payload_shape, error_shape)
        if not result.ok:
            logger.debug(f"{method} {url} returned {type(result).__name__}")
        return result

    def get(
        self,
        url: str,
        payload_shape: Any,
        error_shape: Any = DefaultErrorJson,
        params: dict[str, str] | None = None,
    ) -> ApiResult[Any, Any]:
        """Performs a GET request and classifies the response."""
        return self._dispatch("GET", url, payload_shape, error_shape, params=params)

    def post(
        self,
        url: str,
        body: TogglModel,
        payload_shape: Any,
        error_shape: Any = DefaultErrorJson,
    ) -> ApiResult[Any, Any]:
        """Performs a POST request with a JSON body and classifies the response."""
        return self._dispatch("POST", url, payload_shape, error_shape, body=body)


class TogglClient:
    def __init__(self, session: TogglSession) -> None:
        self.session = session

    def _url(self, path: str) -> str:
        return f"{self.session.api_url}/{path}"

    def create_time_entry(
        self, time_entry: TimeEntry
    ) -> ApiResult[TimeEntryResponse, DefaultErrorJson]:
        """Create a time entry. ``start``, ``duration`` and ``created_with`` are required."""
        return self.session.post(
            self._url("time_entries"),
            TimeEntryRequest(time_entry=time_entry),
            TimeEntryResponse,
            DefaultErrorJson,
        )

    def get_workspaces(self) -> ApiResult[list[Workspace], DefaultErrorJson]:
        return self.session.get(self._url("workspaces"), list[Workspace])

    def get_workspace_tags(self, wid: int) -> ApiResult[list[Tag], DefaultErrorJson]:
        return self.session.get(self._url(f"workspaces/{wid}/tags"), list[Tag])

    def get_workspace_projects(
        self, wid: int
    ) -> ApiResult[list[Project], DefaultErrorJson]:
        return self.session.get(self._url(f"workspaces/{wid}/projects"), list[Project])

    def get_detailed_report(
        self, params: ReportsDetailedParams
    ) -> ApiResult[DetailedReport, ReportsErrorJson]:
        return self.session.get(
            self.session.reports_api_url,
            DetailedReport,
            ReportsErrorJson,
            params=to_query_params(params),
        )

    def get_current_user(
        self,
        with_related_data: bool | None = None,
        since: datetime | None = None,
    ) -> ApiResult[UserResponse, DefaultErrorJson]:
        params: dict[str, str] = {}
        if with_related_data is not None:
            params["with_related_data"] = "true" if with_related_data else "false"
        if since is not None:
            params["since"] = str(to_unix_timestamp(since))
        return self.session.get(self._url("me"), UserResponse, params=params or None)
