"""Failure kinds shared by the catalog client, the favorites store and the API.

Every error raised on purpose by :mod:`movieshelf.services` is a
:class:`ServiceError` carrying an :class:`~movieshelf.enums.ErrorKind`, a
human-readable message and, where one exists, the underlying cause. Anything
else that escapes a service is wrapped as :class:`InternalError` by
:func:`wrap_unexpected` so callers never see raw library exceptions.
"""

from __future__ import annotations

from typing import Any

from movieshelf.enums import ErrorKind


class ServiceError(Exception):
    kind: ErrorKind = ErrorKind.internal

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    def to_detail(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "message": self.message}


class InvalidArgumentError(ServiceError, ValueError):
    kind = ErrorKind.invalid_argument


class AlreadyExistsError(ServiceError):
    kind = ErrorKind.already_exists


class NotFoundError(ServiceError):
    kind = ErrorKind.not_found


class IOFailureError(ServiceError):
    kind = ErrorKind.io_failure


class UpstreamTimeoutError(ServiceError):
    kind = ErrorKind.upstream_timeout


class UpstreamUnavailableError(ServiceError):
    kind = ErrorKind.upstream_unavailable


class UpstreamAuthFailureError(ServiceError):
    kind = ErrorKind.upstream_auth_failure


class UpstreamError(ServiceError):
    kind = ErrorKind.upstream_error

    def __init__(self, message: str, *, status: int | None = None, cause: BaseException | None = None) -> None:
        super().__init__(message, cause=cause)
        self.status = status

    def to_detail(self) -> dict[str, Any]:
        detail = super().to_detail()
        if self.status is not None:
            detail["status"] = self.status
        return detail


class InternalError(ServiceError):
    kind = ErrorKind.internal


_HTTP_STATUS = {
    ErrorKind.invalid_argument: 400,
    ErrorKind.not_found: 404,
    ErrorKind.already_exists: 409,
    ErrorKind.io_failure: 500,
    ErrorKind.upstream_auth_failure: 502,
    ErrorKind.upstream_error: 502,
    ErrorKind.upstream_unavailable: 503,
    ErrorKind.upstream_timeout: 504,
    ErrorKind.internal: 500,
}


def http_status_for(error: ServiceError) -> int:
    return _HTTP_STATUS.get(error.kind, 500)


def wrap_unexpected(exc: BaseException, message: str = "Unexpected internal error") -> ServiceError:
    if isinstance(exc, ServiceError):
        return exc
    return InternalError(message, cause=exc)
