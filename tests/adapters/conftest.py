"""Adapter test fixtures -- parameterized for conformance testing."""

from __future__ import annotations

import pytest
from drivers import AsyncDriver, BlockingDriver, Driver


@pytest.fixture(params=["blocking", "async"])
def driver(request: pytest.FixtureRequest) -> Driver:
    """Parameterized driver fixture. Add new adapters here."""
    if request.param == "blocking":
        return BlockingDriver()
    return AsyncDriver()
