"""Shared query parameter parsing utilities for framework adapters.

This module provides utilities for parsing and validating query parameters
that are common across the read endpoints.
"""

from vitalwatch.core.engine import EXPORT_RECENT_LIMIT


def _parse_limit_param(
    params: dict[str, list[str]], default: int = EXPORT_RECENT_LIMIT
) -> int:
    """Parse and validate the 'limit' query parameter.

    Args:
        params: Parsed query string parameters (as returned by urllib.parse.parse_qs).
        default: Value used when the parameter is missing or invalid.

    Returns:
        A non-negative integer. Negative or non-numeric values fall back to
        ``default``.
    """
    # @tra: Adapter.QueryParameter.Limit
    try:
        value = int(params.get("limit", [str(default)])[0])
    except ValueError:
        return default
    if value < 0:
        return default
    return value


def _parse_name_param(params: dict[str, list[str]]) -> str | None:
    """Parse the 'name' query parameter.

    Returns:
        The metric name, upper-cased, or None if missing or blank.
    """
    # @tra: Adapter.QueryParameter.Name
    name_list = params.get("name", [None])
    name_raw = name_list[0] if name_list else None
    if name_raw and name_raw.strip():
        return name_raw.strip().upper()
    return None
