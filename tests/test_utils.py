from __future__ import annotations

from datetime import datetime
from datetime import timedelta
from datetime import timezone

import pytest
from pydantic import BaseModel

from toggl_api.schemas import ReportsDetailedParams
from toggl_api.schemas import ReportsParams
from toggl_api.utils import to_query_params
from toggl_api.utils import to_unix_timestamp


class _Nested(BaseModel):
    items: list[dict[str, int]]


class TestToQueryParams:
    def test_required_only(self) -> None:
        params = ReportsDetailedParams.new("agent", 1)
        assert to_query_params(params) == {"user_agent": "agent", "workspace_id": "1"}

    def test_lists_are_comma_joined(self) -> None:
        params = ReportsParams(
            user_agent="agent",
            workspace_id=1,
            tag_ids=[0, 5, 6],
            user_ids=[9],
        )
        query = to_query_params(params)
        assert query["tag_ids"] == "0,5,6"
        assert query["user_ids"] == "9"

    def test_nested_groups_are_flattened(self) -> None:
        params = ReportsDetailedParams(
            reports_params=ReportsParams(
                user_agent="agent",
                workspace_id=1,
                order_desc="on",
                without_description=True,
            ),
            page=3,
            per_page=50,
        )
        assert to_query_params(params) == {
            "user_agent": "agent",
            "workspace_id": "1",
            "order_desc": "on",
            "without_description": "true",
            "page": "3",
            "per_page": "50",
        }

    def test_nested_values_in_lists_are_rejected(self) -> None:
        with pytest.raises(ValueError, match="items"):
            to_query_params(_Nested(items=[{"a": 1}]))


class TestToUnixTimestamp:
    def test_aware(self) -> None:
        tz = timezone(timedelta(hours=2))
        assert to_unix_timestamp(datetime(2024, 1, 1, 2, tzinfo=tz)) == 1704067200

    def test_naive_is_utc(self) -> None:
        assert to_unix_timestamp(datetime(2024, 1, 1)) == 1704067200
