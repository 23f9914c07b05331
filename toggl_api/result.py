from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import Any
from typing import Generic
from typing import NamedTuple
from typing import TypeVar
from typing import Union

from pydantic import TypeAdapter
from pydantic import ValidationError

logger = logging.getLogger("toggl-api")

P = TypeVar("P")
E = TypeVar("E")

NO_TEXT_MESSAGE = "Couldn't fetch response text."


class TransportFailure(NamedTuple):
    """The request never got a response (DNS, connect, timeout, socket)."""

    cause: BaseException


class HTTPResponse(NamedTuple):
    """A response was received. ``text`` is None if the body could not be read."""

    status_code: int
    text: str | None


Outcome = Union[TransportFailure, HTTPResponse]


@dataclass(frozen=True)
class Success(Generic[P]):
    payload: P

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> P:
        return self.payload


@dataclass(frozen=True)
class ServiceError(Generic[E]):
    """
    The server replied with an error. ``parsed`` holds the body validated
    against the endpoint's error shape, or None when only ``text`` survived.
    """

    status_code: int
    text: str | None = None
    parsed: E | None = None

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> Any:
        detail = self.parsed if self.parsed is not None else self.text
        raise APIServerException(f"{self.status_code}: {detail}")


@dataclass(frozen=True)
class TransportError:
    cause: BaseException

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> Any:
        raise APINetworkException(str(self.cause)) from self.cause


@dataclass(frozen=True)
class ParsingError:
    text: str
    payload_error: str | None = None
    error_error: str | None = None

    @property
    def ok(self) -> bool:
        return False

    @property
    def diagnostic(self) -> str:
        if self.payload_error is None and self.error_error is None:
            return self.text
        return (
            f"Response matched neither the payload shape ({self.payload_error}) "
            f"nor the error shape ({self.error_error})"
        )

    def unwrap(self) -> Any:
        raise APIResponseParseException(
            f"Unable to parse response: '{self.text}'\n{self.diagnostic}"
        )


ApiResult = Union[Success[P], ServiceError[E], TransportError, ParsingError]


@functools.lru_cache(maxsize=None)
def _adapter(shape: Any) -> TypeAdapter[Any]:
    return TypeAdapter(shape)


def _validate(shape: Any, text: str) -> tuple[Any, str | None]:
    """Returns (value, None) on success or (None, error message) on failure."""
    try:
        return _adapter(shape).validate_json(text), None
    except ValidationError as e:
        return None, str(e)


def classify(
    outcome: Outcome,
    payload_shape: Any,
    error_shape: Any,
) -> ApiResult[Any, Any]:
    """
    Map one send attempt to exactly one result.

    Non-200 responses are never a Success: the body is validated against
    ``error_shape`` and kept as raw text if that fails. A 200 body is tried
    as ``payload_shape`` first, then as ``error_shape``; if both fail the
    ParsingError carries both validation messages.
    """
    if isinstance(outcome, TransportFailure):
        return TransportError(outcome.cause)

    status_code, text = outcome
    if text is None:
        if status_code != 200:
            return ServiceError(status_code)
        return ParsingError(NO_TEXT_MESSAGE)

    if status_code != 200:
        parsed, err = _validate(error_shape, text)
        if err is not None:
            logger.debug(f"Error body did not match the error shape: {err}")
        return ServiceError(status_code, text, parsed)

    payload, payload_err = _validate(payload_shape, text)
    if payload_err is None:
        return Success(payload)

    parsed, error_err = _validate(error_shape, text)
    if error_err is None:
        return ServiceError(status_code, text, parsed)

    return ParsingError(text, payload_err, error_err)


class TogglAPIException(Exception):
    pass


class APIServerException(TogglAPIException):
    pass


class APINetworkException(TogglAPIException):
    pass


class APIResponseParseException(TogglAPIException):
    pass
