"""Shared test fixtures and marker registration."""

from __future__ import annotations

import pytest

from ini_splice import IniEditor, ParserConfig


def pytest_configure(config: object) -> None:
    """Register custom markers."""
    if isinstance(config, pytest.Config):
        config.addinivalue_line("markers", "integration: uses real files or asyncio streams instead of doubles")


@pytest.fixture
def editor() -> IniEditor:
    return IniEditor(ParserConfig())
