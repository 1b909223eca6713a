"""
Management API errors.

The underlying client library (now, ``aiohttp``) can be replaced in the future.
We cannot rely on embedding its exceptions all over the code of the client.
Hence, we have our own hierarchy of exceptions for the API errors.

Low-level errors, such as the network connectivity issues, SSL/HTTPS issues,
timeouts, etc, are escalated from the client library as is, since they are
related not to the domain of the API, but rather to the networking.

The original errors of the client library are chained as the causes of our own
specialised errors -- for better explainability of errors in the stack traces.

Unlike the underlying client library's errors, the API errors contain more
information about the reasons -- as provided by the API in its fault bodies,
not guessed only by HTTP statuses alone. A fault body looks like this::

    {"itemNotFound": {"code": 404, "message": "Not found", "details": "..."}}

Some selected statuses are made into their own classes, so that they could be
intercepted and handled by the callers (e.g. over-limits, conflicts).
All other statuses are raised as the base error class and are indistinguishable
from each other (except via the exception's fields).
"""
import collections.abc
import json
from typing import Any

import aiohttp

from rackctl._cogs.structs import bodies


class APIError(Exception):

    def __init__(
            self,
            payload: bodies.RawFaultBody | None,
            *,
            status: int,
    ) -> None:
        fault, details = _unwrap(payload)
        message = details.get('message') if details else None
        super().__init__(message, payload)
        self._status = status
        self._payload = payload
        self._fault = fault
        self._details = details

    def __str__(self) -> str:
        message = self.message or "no details"
        return f"({self._status}) {self._fault or 'fault'}: {message}"

    @property
    def status(self) -> int:
        return self._status

    @property
    def payload(self) -> bodies.RawFaultBody | None:
        return self._payload

    @property
    def fault(self) -> str | None:
        return self._fault

    @property
    def code(self) -> int | None:
        return self._details.get('code') if self._details else None

    @property
    def message(self) -> str | None:
        return self._details.get('message') if self._details else None

    @property
    def details(self) -> str | None:
        return self._details.get('details') if self._details else None

    @property
    def retry_after(self) -> str | None:
        return self._details.get('retryAfter') if self._details else None


class APIBadRequestError(APIError):
    pass


class APIUnauthorizedError(APIError):
    pass


class APIForbiddenError(APIError):
    pass


class APINotFoundError(APIError):
    pass


class APIConflictError(APIError):
    """ E.g. ``buildInProgress`` or ``backupOrResizeInProgress``. """


class APIOverLimitError(APIError):
    """ The rate or absolute limits are hit; see ``retry_after``. """


class APIServerError(APIError):
    pass


async def check_response(
        response: aiohttp.ClientResponse,
) -> None:
    """
    Check for the API faults, and raise with extended information.
    """
    if response.status >= 400:

        # Read the response's body before it is closed by raise_for_status().
        payload: bodies.RawFaultBody | None
        try:
            payload = await response.json(content_type=None)
        except (json.JSONDecodeError, UnicodeDecodeError, aiohttp.ClientConnectionError):
            payload = None

        # Better be safe: who knows what can be dumped unless it looks like a fault.
        if not _is_fault(payload):
            payload = None

        cls = (
            APIBadRequestError if response.status == 400 else
            APIUnauthorizedError if response.status == 401 else
            APIForbiddenError if response.status == 403 else
            APINotFoundError if response.status == 404 else
            APIConflictError if response.status == 409 else
            APIOverLimitError if response.status == 413 else
            APIServerError if 500 <= response.status < 600 else
            APIError
        )

        # Raise the client-specific error while keeping the original error in scope.
        # This call also closes the response's body, so it cannot be read afterwards.
        try:
            response.raise_for_status()
        except aiohttp.ClientResponseError as e:
            raise cls(payload, status=response.status) from e


def _is_fault(payload: Any) -> bool:
    return (
        isinstance(payload, collections.abc.Mapping) and
        len(payload) == 1 and
        all(isinstance(val, collections.abc.Mapping) for val in payload.values())
    )


def _unwrap(payload: bodies.RawFaultBody | None) -> tuple[str | None, bodies.RawFault | None]:
    if not payload:
        return None, None
    fault, details = next(iter(payload.items()))
    return fault, details
