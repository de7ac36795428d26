"""Custom exception hierarchy."""

from __future__ import annotations

from typing import Any


class ReportingError(Exception):
    """Base exception for all library errors."""

    pass


class ProviderError(ReportingError):
    """Error from the remote reporting API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidQueryError(ProviderError):
    """The reporting API rejected a request with a non-success status.

    The upstream reason phrase is kept on ``reason`` so callers can diagnose
    the failure without inspecting the transport.
    """

    def __init__(self, reason: str, status_code: int | None = None) -> None:
        message = f"Invalid query: {reason}"
        if status_code is not None:
            message = f"{message} (status: {status_code})"
        super().__init__(message, status_code=status_code)
        self.reason = reason


class MalformedResponseError(ReportingError):
    """Response body could not be decoded into a report page."""

    def __init__(self, message: str, payload: Any = None) -> None:
        super().__init__(message)
        self.payload = payload
