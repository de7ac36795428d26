"""High-level API for fetching reports."""

from .report_api import ReportAPI, TokenProvider

__all__ = ["ReportAPI", "TokenProvider"]
