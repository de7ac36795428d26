"""Core primitives: exceptions and the clock port."""

from .clock import Clock, MonotonicClock
from .exceptions import (
    InvalidQueryError,
    MalformedResponseError,
    ProviderError,
    ReportingError,
)

__all__ = [
    "Clock",
    "MonotonicClock",
    "ReportingError",
    "ProviderError",
    "InvalidQueryError",
    "MalformedResponseError",
]
