"""Tests for query parameter parsing helpers.

This module tests the internal helper functions that parse query strings for
the read endpoints, including handling of invalid UTF-8 bytes.
"""

from __future__ import annotations

from urllib.parse import parse_qs

import pytest

from vitalwatch.adapters.frameworks.asgi import Scope, _parse_query_params
from vitalwatch.adapters.frameworks.query_params import (
    _parse_limit_param,
    _parse_name_param,
)


@pytest.mark.tier(1)
@pytest.mark.tra("Adapter.QueryParameter.Limit")
@pytest.mark.parametrize(
    ("query", "expected"),
    [
        ("", 100),
        ("limit=5", 5),
        ("limit=0", 0),
        ("limit=-3", 100),
        ("limit=abc", 100),
        ("limit=��", 100),
    ],
)
def test_parse_limit_param(query: str, expected: int) -> None:
    """_parse_limit_param should fall back to the default on bad input."""
    assert _parse_limit_param(parse_qs(query)) == expected


@pytest.mark.tier(1)
@pytest.mark.tra("Adapter.QueryParameter.Limit")
def test_parse_limit_param_custom_default() -> None:
    """The default is configurable."""
    assert _parse_limit_param({}, default=10) == 10


@pytest.mark.tier(1)
@pytest.mark.tra("Adapter.QueryParameter.Name")
@pytest.mark.parametrize(
    ("query", "expected"),
    [
        ("name=lcp", "LCP"),
        ("name=%20resource_image%20", "RESOURCE_IMAGE"),
        ("name=", None),
        ("", None),
    ],
)
def test_parse_name_param(query: str, expected: str | None) -> None:
    """_parse_name_param should upper-case and strip the metric name."""
    assert _parse_name_param(parse_qs(query)) == expected


@pytest.mark.tier(1)
@pytest.mark.tra("Adapter.ASGI.QueryParameter.Parser")
def test_parse_query_params_extracts_all_params() -> None:
    """_parse_query_params should extract all parameters from scope query_string."""

    # Arrange: Create scope with query string
    scope: Scope = {
        "type": "http",
        "method": "GET",
        "path": "/metrics",
        "query_string": b"name=LCP&limit=5&other=value",
        "headers": [],
    }

    # Act: Parse query parameters
    result = _parse_query_params(scope)

    # Assert: Should return dict with all parameters
    assert result == {"name": ["LCP"], "limit": ["5"], "other": ["value"]}


@pytest.mark.tier(1)
@pytest.mark.tra("Adapter.ASGI.QueryParameter.InvalidUTF8")
def test_parse_query_params_handles_invalid_utf8() -> None:
    """Invalid UTF-8 bytes are replaced rather than raising."""
    scope: Scope = {
        "type": "http",
        "method": "GET",
        "path": "/metrics",
        "query_string": b"limit=\xff\xfe",
        "headers": [],
    }

    params = _parse_query_params(scope)

    assert _parse_limit_param(params) == 100
