"""Searcher-specific exceptions."""

from easysearch.core.errors import EasySearchError


class SearcherError(EasySearchError):
    """Base exception for searcher errors."""


class ConnectionError(SearcherError):
    """Raised when the searcher cannot reach its search engine."""


class QueryError(SearcherError):
    """Raised when a search or provisioning request fails."""

