"""Shared fixtures: a fixed reference instant in New York."""

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from fuzzydate import parse

NEW_YORK = ZoneInfo("America/New_York")


@pytest.fixture
def ny():
    return NEW_YORK


@pytest.fixture
def reference():
    """Friday 2021-04-30 07:15:17 EDT."""
    return datetime(2021, 4, 30, 7, 15, 17, tzinfo=NEW_YORK)


@pytest.fixture
def resolve_at(reference):
    """Parse a phrase relative to the reference instant, or another one."""

    def _resolve(text, ref=None):
        return parse(text, relative_to=ref or reference)

    return _resolve
