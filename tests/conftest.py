"""Shared fixtures: recorded API responses and a mocked session."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> dict:
    """Load ``tests/fixtures/<name>.json``."""
    return json.loads((FIXTURES_DIR / f"{name}.json").read_text(encoding="utf-8"))


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def topic_data() -> dict:
    return load_fixture("topic/en_github")


@pytest.fixture
def full_topic_data() -> dict:
    """A recording keeping every property the commons filter returns for GitHub."""
    return load_fixture("github_full")


@pytest.fixture
def search_data() -> list[dict]:
    return load_fixture("search/dylan")["result"]


@pytest.fixture
def session(topic_data, search_data) -> MagicMock:
    """A session stub answering every call with the GitHub / dylan recordings."""
    stub = MagicMock()
    stub.topic.return_value = topic_data
    stub.search.return_value = search_data
    stub.image.return_value = None
    return stub
