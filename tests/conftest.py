"""Shared pytest fixtures."""

from pathlib import Path

import pytest

from .fakes import scenario_source

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def scenario():
    return scenario_source()
