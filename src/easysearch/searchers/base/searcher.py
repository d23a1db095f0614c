"""Base searcher — Interface every search backend implements.

A searcher is responsible for:
  1. Provisioning an index when it is declared (``create_search_index``)
  2. Executing a search for a merged index configuration (``search``)
  3. Building its native query from a configuration (``default_query``)
  4. Building its native sort specification (``default_sort``)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from easysearch.models.index import IndexConfiguration

REQUIRED_METHODS: tuple[str, ...] = ("search", "create_search_index", "default_query", "default_sort")

SearchCallback = Callable[[Exception | None, Any], Any]


class SearchBackend(ABC):
    """Abstract base class for searchers.

    Searchers receive a merged ``IndexConfiguration`` snapshot on every call
    and must not keep a reference to it across calls.
    """

    @abstractmethod
    def create_search_index(self, name: str, options: Mapping[str, Any]) -> None:
        """Provision backend resources for an index.

        Called with the options given at declaration time (before merging with
        defaults). Must be idempotent: an index can be declared again.
        """

    @abstractmethod
    def search(
        self,
        name: str,
        search_string: str,
        config: IndexConfiguration,
        callback: SearchCallback | None = None,
    ) -> Any:
        """Execute a search.

        Returns a ``SearchResult``-shaped value, or delivers it through
        ``callback(error, result)``.
        """

    @abstractmethod
    def default_query(self, config: IndexConfiguration, search_string: str) -> Any:
        """Build the native query or selector for the configured fields."""

    @abstractmethod
    def default_sort(self, config: IndexConfiguration) -> Any:
        """Build the native sort specification."""


class FunctionSearcher(SearchBackend):
    """Searcher assembled from four plain callables.

    Lets a backend register as a mapping of functions instead of a class::

        registry.create_searcher("custom", {
            "search": my_search,
            "create_search_index": my_create,
            "default_query": my_query,
            "default_sort": my_sort,
        })
    """

    def __init__(
        self,
        search: Callable[..., Any],
        create_search_index: Callable[..., Any],
        default_query: Callable[..., Any],
        default_sort: Callable[..., Any],
    ) -> None:
        self._search = search
        self._create_search_index = create_search_index
        self._default_query = default_query
        self._default_sort = default_sort

    def create_search_index(self, name: str, options: Mapping[str, Any]) -> None:
        self._create_search_index(name, options)

    def search(
        self,
        name: str,
        search_string: str,
        config: IndexConfiguration,
        callback: SearchCallback | None = None,
    ) -> Any:
        return self._search(name, search_string, config, callback)

    def default_query(self, config: IndexConfiguration, search_string: str) -> Any:
        return self._default_query(config, search_string)

    def default_sort(self, config: IndexConfiguration) -> Any:
        return self._default_sort(config)
