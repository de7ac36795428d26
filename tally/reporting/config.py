"""Shared reporting endpoint constants.

This module centralizes the URL, namespace marker and the limits imposed by
the remote reporting API so the planner and fetcher can stay small and
focused.
"""

from __future__ import annotations

# Core Reporting API (v3) data endpoint
BASE_URL_API = "https://www.googleapis.com/analytics/v3/data/ga"

# Every account id is sent as "<marker><id>", e.g. "ga:12345"
IDS_PREFIX = "ga:"

# Request URL limits
# - URL_LENGTH_LIMIT: hard limit enforced by the API on the full request URL
# - BASE_URL_OVERHEAD: estimate for protocol/header bytes not in the query string
URL_LENGTH_LIMIT = 2000
BASE_URL_OVERHEAD = 300

# Per identity key quota: QUOTA_MAX_REQUESTS requests per QUOTA_WINDOW_SECONDS
QUOTA_MAX_REQUESTS = 10
QUOTA_WINDOW_SECONDS = 1.0

# Query defaults
DEFAULT_METRICS = ("ga:pageviews",)
DEFAULT_START_INDEX = 1
DEFAULT_MAX_RESULTS = 10000
DEFAULT_FILTERS_SEPARATOR = ","
DEFAULT_LOOKBACK_MONTHS = 1

DATE_FORMAT = "%Y-%m-%d"
