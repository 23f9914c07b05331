"""
Request and response shapes for the Toggl Track v8 API and the v2 reports API.

https://github.com/toggl/toggl_api_docs
"""
from __future__ import annotations

from datetime import date
from datetime import datetime
from typing import Any
from typing import Generic
from typing import TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT")


class TogglModel(BaseModel):
    def to_json(self) -> dict[str, Any]:
        """JSON-ready dict with every unset optional field left out."""
        return self.model_dump(mode="json", exclude_none=True)


class TimeEntry(TogglModel):
    # not needed when creating a time entry
    id: int | None = None
    description: str | None = None
    # workspace id, required if pid or tid is not supplied
    wid: int | None = None
    pid: int | None = None
    tid: int | None = None
    billable: bool | None = None
    start: datetime
    stop: datetime | None = None
    # seconds. Negative while running: -(start as unix timestamp)
    duration: int
    # name of the client app, required on create but missing from some responses
    created_with: str | None = None
    tags: list[str] | None = None
    # hide start and stop time, show duration only
    duronly: bool | None = None
    # last update, response only
    at: datetime | None = None


class TimeEntryRequest(TogglModel):
    time_entry: TimeEntry


class TimeEntryResponse(TogglModel):
    data: TimeEntry


class Workspace(TogglModel):
    id: int | None = None
    name: str
    premium: bool
    admin: bool
    default_hourly_rate: float
    default_currency: str
    only_admins_may_create_projects: bool
    only_admins_see_billable_rates: bool
    rounding: int
    rounding_minutes: int
    at: datetime
    # omitted by the API when no logo is set
    logo_url: str | None = None


class Tag(TogglModel):
    id: int | None = None
    # unique in workspace
    name: str
    wid: int


class Project(TogglModel):
    id: int | None = None
    name: str
    wid: int
    cid: int | None = None
    active: bool
    is_private: bool
    template: bool | None = None
    template_id: int | None = None
    billable: bool
    auto_estimates: bool | None = None
    estimated_hours: int | None = None
    at: datetime
    color: str
    rate: float | None = None
    created_at: datetime


class TotalCurrency(TogglModel):
    currency: str | None = None
    amount: float | None = None


class Report(TogglModel, Generic[DataT]):
    # milliseconds, null when there is nothing to total
    total_grand: int | None = None
    total_billable: int | None = None
    total_count: int
    per_page: int
    total_currencies: list[TotalCurrency]
    data: DataT


class ReportTimeEntry(TogglModel):
    id: int
    pid: int | None = None
    # project name
    project: str | None = None
    # client name
    client: str | None = None
    tid: int | None = None
    task: str | None = None
    uid: int
    # full name of the user
    user: str
    description: str | None = None
    start: datetime
    end: datetime | None = None
    # milliseconds
    dur: int
    updated: datetime
    # whether the stop time is saved, depends on the user's settings
    use_stop: bool
    is_billable: bool
    billable: float | None = None
    cur: str | None = None
    tags: list[str]
    project_color: str | None = None
    project_hex_color: str | None = None


DetailedReport = Report[list[ReportTimeEntry]]


class ReportsParams(TogglModel):
    """
    Filters shared by every reports endpoint. ``user_agent`` and
    ``workspace_id`` are required by the API, everything else is optional
    and left out of the query string when unset.
    """

    user_agent: str
    workspace_id: int
    # defaults to today - 6 days
    since: date | None = None
    # max span (until - since) is one year
    until: date | None = None
    # "yes", "no" or "both"
    billable: str | None = None
    # "0" filters out entries without a client, same for projects, tags, tasks
    client_ids: list[int] | None = None
    project_ids: list[int] | None = None
    user_ids: list[int] | None = None
    # limits user_ids to members of these groups
    members_of_group_ids: list[int] | None = None
    # extends user_ids with members of these groups
    or_members_of_group_ids: list[int] | None = None
    tag_ids: list[int] | None = None
    task_ids: list[int] | None = None
    time_entry_ids: list[int] | None = None
    description: str | None = None
    without_description: bool | None = None
    # "date", "description", "duration" or "user" for detailed reports
    order_field: str | None = None
    # "on" for descending, "off" for ascending
    order_desc: str | None = None
    distinct_rates: str | None = None
    rounding: str | None = None
    # "decimal" or "minutes"
    display_hours: str | None = None


class ReportsDetailedParams(TogglModel):
    reports_params: ReportsParams
    # 1-based page number
    page: int | None = None
    total_count: int | None = None
    per_page: int | None = None

    @classmethod
    def new(
        cls,
        user_agent: str,
        workspace_id: int,
        **kwargs: Any,
    ) -> ReportsDetailedParams:
        return cls(
            reports_params=ReportsParams(
                user_agent=user_agent, workspace_id=workspace_id
            ),
            **kwargs,
        )


class ReportsErrorDetail(TogglModel):
    message: str
    tip: str
    code: int


class ReportsErrorJson(TogglModel):
    error: ReportsErrorDetail


# Toggl's v8 error bodies are a plain array of messages
DefaultErrorJson = list[str]


class User(TogglModel):
    id: int
    api_token: str | None = None
    default_wid: int | None = None
    email: str
    fullname: str
    jquery_timeofday_format: str | None = None
    jquery_date_format: str | None = None
    timeofday_format: str | None = None
    date_format: str | None = None
    store_start_and_stop_time: bool | None = None
    beginning_of_week: int | None = None
    language: str | None = None
    image_url: str | None = None
    timezone: str | None = None
    at: datetime | None = None
    created_at: datetime | None = None
    # only present with with_related_data=true
    workspaces: list[Workspace] | None = None
    projects: list[Project] | None = None
    tags: list[Tag] | None = None
    time_entries: list[TimeEntry] | None = None


class UserResponse(TogglModel):
    # unix timestamp of the request, for the next incremental fetch
    since: int | None = None
    data: User
