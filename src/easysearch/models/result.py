"""Search result model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class SearchResult(BaseModel):
    """Result shape every searcher returns or delivers to its callback."""

    results: list[Any] = Field(default_factory=list, description="Matched records, at most `limit` of them")
    total: int = Field(default=0, ge=0, description="Total number of matching records")

    @classmethod
    def empty(cls) -> SearchResult:
        """The canonical empty result, returned when permission is denied."""
        return cls(results=[], total=0)
