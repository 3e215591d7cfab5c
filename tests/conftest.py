"""
Pytest configuration and shared fixtures.
"""

import os
import tempfile
from pathlib import Path

import pytest
from invariant_text.core.bridge import ConverterRegistry
from invariant_text.core.config import reset_settings
from invariant_text.models.options import RenderOptions

from tests.support import Person, PersonConverter


@pytest.fixture
def registry():
    """Fresh converter registry with the Person converter."""
    registry = ConverterRegistry()
    registry.register(Person, PersonConverter())
    return registry


@pytest.fixture
def person():
    return Person("Max Mustermann", 42)


@pytest.fixture
def no_count_options():
    """Default options without item counts."""
    return RenderOptions(show_collection_count=False)


@pytest.fixture
def temp_dir():
    """Temporary directory for test files"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def clean_settings(monkeypatch, tmp_path):
    """
    Settings isolated from the developer environment: no INVARIANT_TEXT_*
    variables, and a working directory without .env or pyproject.toml.
    """
    for key in list(os.environ):
        if key.startswith("INVARIANT_TEXT_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield tmp_path
    reset_settings()
