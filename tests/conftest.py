"""Pytest configuration and shared fixtures for plankcut tests."""

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES_PATH = Path(__file__).parent / "fixtures"


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


@pytest.fixture
def fixtures_path() -> Path:
    """Directory holding fixture files."""
    return FIXTURES_PATH
