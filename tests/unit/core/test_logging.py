"""Tests for log format selection."""

import pytest

from chattools.core.logging import resolve_log_format

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "configured,override,expected",
    [
        ("auto", None, "auto"),
        ("json", None, "json"),
        ("JSON", None, "json"),
        ("json", "plain", "plain"),
        ("xml", None, "auto"),
        ("plain", "bogus", "auto"),
        ("", None, "auto"),
    ],
)
def test_resolve_log_format(configured, override, expected):
    assert resolve_log_format(configured, override) == expected
