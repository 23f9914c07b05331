from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any

DEFAULT_API_URL = "https://api.track.toggl.com/api/v8"
DEFAULT_REPORTS_API_URL = "https://api.track.toggl.com/reports/api/v2/details"
DEFAULT_USER_AGENT = "toggl-api"


class ConfigError(Exception):
    pass


class APIKeyMissingError(ConfigError):
    pass


class Config:
    """
    Settings read once from the environment (or any mapping of the same
    keys). Only the API key is required.
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env: Mapping[str, str] = os.environ if env is None else env

        self.API_KEY = self._get_api_key()
        self.API_URL = self._get_setting("TOGGL_API_URL", DEFAULT_API_URL)
        self.REPORTS_API_URL = self._get_setting(
            "TOGGL_REPORTS_API_URL", DEFAULT_REPORTS_API_URL
        )
        self.USER_AGENT = self._get_setting("TOGGL_USER_AGENT", DEFAULT_USER_AGENT)
        self.TIMEOUT = self._load_timeout()
        self.LOG_LEVEL = self._load_log_level()

    def _get_setting(
        self,
        setting: str,
        default: Any | None = None,
        required: bool = True,
    ) -> Any:
        val = self._env.get(setting) or default
        if required and val is None:
            raise ConfigError(f"Setting is required: {setting}")
        return val

    def _get_api_key(self) -> str:
        env_var = "TOGGL_API_KEY"
        api_key = self._env.get(env_var)
        if not api_key:
            raise APIKeyMissingError(
                f"'{env_var}' environment variable not set.\n"
                "Connection to Toggl's API requires an API token which can "
                "be found in your profile settings."
            )
        return api_key

    def _load_timeout(self) -> float | None:
        timeout = self._get_setting("TOGGL_TIMEOUT", required=False)
        if timeout is None:
            return None
        try:
            return float(timeout)
        except ValueError as e:
            raise ConfigError(f"Invalid timeout: {e}")

    def _load_log_level(self) -> int:
        name = str(self._get_setting("TOGGL_LOG_LEVEL", "INFO")).upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ConfigError(f"Invalid log level: {name}")
        return level
