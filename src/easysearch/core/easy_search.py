"""EasySearch facade — Composition root for searchers and indexes.

An ``EasySearch`` instance owns one ``SearcherRegistry`` and one
``IndexRegistry``. Instances are independent; nothing is process-global, so
several can live side by side (e.g. one per test).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from easysearch.config.settings import Settings
from easysearch.core.checks import Record, check
from easysearch.core.registry import IndexRegistry
from easysearch.models.index import IndexConfiguration
from easysearch.searchers.base.registry import SearcherRegistry
from easysearch.searchers.base.searcher import SearchBackend

logger = logging.getLogger(__name__)


class EasySearch:
    """Public API for declaring indexes, registering searchers and searching.

    Example:
        >>> easy_search = EasySearch()
        >>> easy_search.create_searcher("minimongo", MemorySearcher())
        >>> easy_search.create_search_index("players", {"field": "name"})
        >>> easy_search.search("players", "ada")
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self.searchers = SearcherRegistry()
        self.indexes = IndexRegistry(
            self.searchers,
            defaults=self.settings.registry.defaults,
            persist_call_overrides=self.settings.registry.persist_call_overrides,
        )

    def config(self, new_config: Mapping[str, Any]) -> dict[str, Any]:
        """Placeholder for runtime configuration. Accepts a mapping, changes nothing."""
        check(new_config, Record, "new_config")
        return {}

    def create_search_index(self, name: str, options: Mapping[str, Any]) -> None:
        """Declare a search index. See ``IndexRegistry.create_search_index``."""
        self.indexes.create_search_index(name, options)

    def search(
        self,
        name: str,
        search_string: str,
        options: Mapping[str, Any] | None = None,
        callback: Callable[..., Any] | None = None,
    ) -> Any:
        """Search an index. See ``IndexRegistry.search``."""
        return self.indexes.search(name, search_string, options, callback)

    def get_index(self, name: str) -> IndexConfiguration | None:
        return self.indexes.get_index(name)

    def get_indexes(self) -> dict[str, IndexConfiguration]:
        return self.indexes.get_indexes()

    def create_searcher(self, kind: str, methods: SearchBackend | Mapping[str, Any]) -> None:
        """Register a searcher. See ``SearcherRegistry.create_searcher``."""
        self.searchers.create_searcher(kind, methods)

    def get_searcher(self, kind: str) -> SearchBackend | None:
        return self.searchers.get(kind)

    def get_searchers(self) -> dict[str, SearchBackend]:
        return self.searchers.all()

    def shutdown(self) -> None:
        """Release searcher resources (HTTP clients, ...)."""
        self.searchers.close_all()
        logger.info("EasySearch shut down")


def create_easy_search(settings: Settings | None = None) -> EasySearch:
    """Build an ``EasySearch`` with built-in searchers and declared indexes.

    Searchers enabled in ``settings.searchers`` are registered first, then every
    index in ``settings.indexes`` is declared, so provisioning hooks run.

    Args:
        settings: Application settings. If None, loads from environment.

    Returns:
        A ready-to-use ``EasySearch`` instance.
    """
    if settings is None:
        settings = Settings()

    easy_search = EasySearch(settings)

    if settings.searchers.memory.enabled:
        from easysearch.searchers.memory.searcher import MemorySearcher

        easy_search.create_searcher(MemorySearcher.kind, MemorySearcher())

    es_settings = settings.searchers.elasticsearch
    if es_settings.enabled:
        from easysearch.searchers.elasticsearch.searcher import ElasticSearchSearcher

        easy_search.create_searcher(
            ElasticSearchSearcher.kind,
            ElasticSearchSearcher(
                base_url=es_settings.base_url,
                username=es_settings.username,
                password=es_settings.password,
                timeout=es_settings.timeout,
            ),
        )

    for name, options in settings.indexes.items():
        easy_search.create_search_index(name, options)

    logger.info(
        "EasySearch ready: %d searcher(s), %d index(es)",
        len(easy_search.searchers.registered_searchers),
        len(easy_search.indexes),
    )
    return easy_search
