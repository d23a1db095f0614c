"""Shared test fixtures and configuration."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from easysearch.config.settings import Settings
from easysearch.core.easy_search import EasySearch
from easysearch.models.result import SearchResult
from easysearch.searchers.base.searcher import SearchBackend
from easysearch.searchers.memory.searcher import MemorySearcher


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def easy_search(settings: Settings) -> EasySearch:
    """An EasySearch instance with no searchers registered."""
    return EasySearch(settings)


@pytest.fixture
def stub_searcher() -> MagicMock:
    """A searcher whose four capabilities are recording mocks."""
    searcher = MagicMock(spec=SearchBackend)
    searcher.search.return_value = SearchResult(results=[{"id": "doc_1"}], total=1)
    searcher.default_query.return_value = {"stub": "query"}
    searcher.default_sort.return_value = {"stub": 1}
    return searcher


@pytest.fixture
def players() -> list[dict[str, Any]]:
    """Sample documents for the in-memory searcher."""
    return [
        {"_id": "p1", "name": "Ada Lovelace", "team": "red", "score": 42, "tags": ["math", "engines"]},
        {"_id": "p2", "name": "Alan Turing", "team": "blue", "score": 57, "tags": ["math", "crypto"]},
        {"_id": "p3", "name": "Grace Hopper", "team": "red", "score": 50, "tags": ["compilers"]},
        {"_id": "p4", "name": "Barbara Liskov", "team": "green", "score": 61, "profile": {"city": "Boston"}},
    ]


@pytest.fixture
def memory_searcher(players: list[dict[str, Any]]) -> MemorySearcher:
    return MemorySearcher(collections={"players": players})
