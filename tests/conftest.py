"""Shared test fixtures for sourcegen."""

from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Pin the project root to a scratch dir and drop CI/config overrides."""
    monkeypatch.setenv("SOURCEGEN_PROJECT_ROOT", str(tmp_path))
    monkeypatch.delenv("SOURCEGEN_CONFIG", raising=False)
    monkeypatch.delenv("CI", raising=False)
    return tmp_path


@pytest.fixture
def sample_source():
    return (FIXTURES / "sample.rs").read_text()
