"""Tests for the search result model."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from easysearch.models.result import SearchResult


class TestSearchResult:
    def test_empty(self) -> None:
        assert SearchResult.empty().model_dump() == {"results": [], "total": 0}

    def test_empty_instances_are_independent(self) -> None:
        first = SearchResult.empty()
        first.results.append({"id": 1})
        assert SearchResult.empty().results == []

    def test_negative_total_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SearchResult(results=[], total=-1)
