"""Elasticsearch searcher — Full-text search over the Elasticsearch REST API.

Works with Elasticsearch v7+ and OpenSearch v2+, which share the query DSL
used here. Communicates over HTTP with ``httpx``; no client library needed.

Usage::

    searcher = ElasticSearchSearcher(base_url="http://localhost:9200")
    easy_search.create_searcher(ElasticSearchSearcher.kind, searcher)
    easy_search.create_search_index("articles", {
        "use": "elastic-search",
        "field": ["title", "body"],
    })
    result = easy_search.search("articles", "solar nowcasting")
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from easysearch.models.index import IndexConfiguration
from easysearch.models.result import SearchResult
from easysearch.searchers.base.exceptions import ConnectionError, QueryError
from easysearch.searchers.base.searcher import SearchBackend, SearchCallback

logger = logging.getLogger(__name__)


class ElasticSearchSearcher(SearchBackend):
    """Searcher for Elasticsearch / OpenSearch clusters.

    The engine-side index name is the ``index`` option of an index when given,
    otherwise the EasySearch index name.

    Args:
        base_url: Cluster URL, e.g. ``"http://localhost:9200"``.
        username: Optional HTTP basic-auth username.
        password: Optional HTTP basic-auth password.
        timeout: HTTP request timeout in seconds.
        client: Pre-built ``httpx.Client`` (its base URL must point at the cluster).
    """

    kind = "elastic-search"

    def __init__(
        self,
        base_url: str = "http://localhost:9200",
        username: str | None = None,
        password: str | None = None,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._username = username
        self._password = password
        self._timeout = timeout
        self._client = client

    @property
    def client(self) -> httpx.Client:
        """The HTTP client, created on first use."""
        if self._client is None:
            auth = (self._username, self._password) if self._username and self._password else None
            self._client = httpx.Client(
                base_url=self._base_url,
                timeout=httpx.Timeout(self._timeout),
                headers={"Content-Type": "application/json"},
                auth=auth,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            self._client.close()
            self._client = None

    # ── Provisioning ─────────────────────────────────────────────────────

    def create_search_index(self, name: str, options: Mapping[str, Any]) -> None:
        """Create the engine index, or extend its mapping if it already exists."""
        index = options.get("index", name)
        properties = {str(field): {"type": "text"} for field in options.get("field", [])}

        try:
            exists = self.client.head(f"/{index}").status_code == 200
            if exists:
                if properties:
                    resp = self.client.put(f"/{index}/_mapping", json={"properties": properties})
                    resp.raise_for_status()
                logger.info("Updated Elasticsearch index: %s", index)
            else:
                resp = self.client.put(f"/{index}", json={"mappings": {"properties": properties}})
                resp.raise_for_status()
                logger.info("Created Elasticsearch index: %s", index)
        except httpx.HTTPStatusError as e:
            raise QueryError(f"Failed to provision Elasticsearch index '{index}': {e}") from e
        except httpx.TransportError as e:
            raise ConnectionError(f"Failed to connect to Elasticsearch: {e}") from e

    # ── Search ───────────────────────────────────────────────────────────

    def search(
        self,
        name: str,
        search_string: str,
        config: IndexConfiguration,
        callback: SearchCallback | None = None,
    ) -> SearchResult:
        """Execute a search via ``/{index}/_search``."""
        index = config.option("index") or name
        body: dict[str, Any] = {
            "query": config.build_query(search_string),
            "sort": config.build_sort(),
            "size": config.limit,
        }

        try:
            resp = self.client.post(f"/{index}/_search", json=body)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise QueryError(f"Elasticsearch query failed: {e}") from e
        except httpx.TransportError as e:
            raise ConnectionError(f"Failed to connect to Elasticsearch: {e}") from e

        hits = resp.json().get("hits", {})
        result = SearchResult(
            results=[self._to_record(hit) for hit in hits.get("hits", [])],
            total=self._parse_total(hits.get("total", 0)),
        )

        if callback is not None:
            callback(None, result)
        return result

    def default_query(self, config: IndexConfiguration, search_string: str) -> dict[str, Any]:
        """``multi_match`` over the configured fields."""
        if not search_string or not config.field:
            return {"match_all": {}}
        return {
            "multi_match": {
                "query": search_string,
                "fields": list(config.field),
                "type": "best_fields",
                "fuzziness": "AUTO",
            }
        }

    def default_sort(self, config: IndexConfiguration) -> list[str]:
        """Relevance order."""
        return ["_score"]

    # ── Helpers ──────────────────────────────────────────────────────────

    @staticmethod
    def _to_record(hit: Mapping[str, Any]) -> dict[str, Any]:
        record = dict(hit.get("_source", {}))
        record["_id"] = hit.get("_id")
        record["_score"] = hit.get("_score")
        return record

    @staticmethod
    def _parse_total(total: Any) -> int:
        # v7+ reports {"value": n, "relation": "eq"}, older clusters a bare int
        if isinstance(total, Mapping):
            return int(total.get("value", 0))
        return int(total)
