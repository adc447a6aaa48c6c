"""Pytest configuration and shared fixtures for nesting tests."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from cabinet_nesting.application.factory import reset_factory
from cabinet_nesting.domain.value_objects import Board, Panel

FIXTURES_PATH = Path(__file__).parent / "fixtures" / "configs"


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: end-to-end tests through the CLI and REST API"
    )


# =============================================================================
# Shared fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_factory(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Give every test a fresh default ServiceFactory backed by memory."""
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_SERVICE_KEY", raising=False)
    reset_factory()
    yield
    reset_factory()


@pytest.fixture
def fixtures_path() -> Path:
    return FIXTURES_PATH


@pytest.fixture
def large_board() -> Board:
    """A 2000x1000mm board with one sheet in stock."""
    return Board(
        id="board-large",
        name="Large melamine",
        width=2000.0,
        height=1000.0,
        material="melamine white",
        cost=85.0,
        stock=1,
    )


@pytest.fixture
def square_board() -> Board:
    """A 1000x1000mm board with one sheet in stock."""
    return Board(id="board-square", name="Square", width=1000.0, height=1000.0)


@pytest.fixture
def small_panel() -> Panel:
    """A 500x500mm panel with no edges taped."""
    return Panel(id="panel-small", name="Small", width=500.0, height=500.0)
