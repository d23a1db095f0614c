"""Tests for the EasySearch composition root."""

from __future__ import annotations

from easysearch.config.settings import Settings
from easysearch.core.easy_search import create_easy_search
from easysearch.searchers.elasticsearch.searcher import ElasticSearchSearcher
from easysearch.searchers.memory.searcher import MemorySearcher


def _settings(**data) -> Settings:
    return Settings(_env_file=None, **data)  # type: ignore[call-arg]


class TestCreateEasySearch:
    def test_memory_searcher_registered_by_default(self) -> None:
        easy_search = create_easy_search(_settings())
        assert isinstance(easy_search.get_searcher("minimongo"), MemorySearcher)
        assert easy_search.get_searcher("elastic-search") is None

    def test_elasticsearch_registered_when_enabled(self) -> None:
        easy_search = create_easy_search(
            _settings(searchers={"elasticsearch": {"enabled": True, "base_url": "http://es.test:9200"}})
        )
        searcher = easy_search.get_searcher("elastic-search")
        assert isinstance(searcher, ElasticSearchSearcher)
        assert searcher._base_url == "http://es.test:9200"
        assert set(easy_search.get_searchers()) == {"minimongo", "elastic-search"}

    def test_memory_searcher_can_be_disabled(self) -> None:
        easy_search = create_easy_search(_settings(searchers={"memory": {"enabled": False}}))
        assert easy_search.get_searchers() == {}

    def test_declared_indexes_created_and_provisioned(self) -> None:
        easy_search = create_easy_search(
            _settings(indexes={"players": {"field": "name", "collection": [{"name": "Ada"}, {"name": "Alan"}]}})
        )
        assert easy_search.get_index("players").field == ["name"]
        result = easy_search.search("players", "ada")
        assert result.total == 1
        assert result.results == [{"name": "Ada"}]

    def test_registry_defaults_from_settings(self) -> None:
        easy_search = create_easy_search(_settings(registry={"defaults": {"limit": 3, "format": "raw"}}))
        easy_search.create_search_index("i", {"field": "name"})
        config = easy_search.get_index("i")
        assert config.limit == 3
        assert config.format == "raw"

    def test_shutdown_closes_http_client(self) -> None:
        easy_search = create_easy_search(_settings(searchers={"elasticsearch": {"enabled": True}}))
        searcher = easy_search.get_searcher("elastic-search")
        searcher.client  # noqa: B018
        easy_search.shutdown()
        assert searcher._client is None
