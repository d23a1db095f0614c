"""In-memory searcher — Mongo-style selectors over in-process collections.

Each index owns a list of dict documents. Queries are mongo-style selectors
and sorts are ``{field: 1 | -1}`` mappings, so indexes can be moved between
this searcher and a document database without changing their options.

Usage::

    searcher = MemorySearcher()
    easy_search.create_searcher(MemorySearcher.kind, searcher)
    easy_search.create_search_index("players", {
        "field": ["name", "team"],
        "collection": [{"name": "Ada", "team": "red"}],
    })
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any

from easysearch.models.index import IndexConfiguration
from easysearch.models.result import SearchResult
from easysearch.searchers.base.exceptions import QueryError
from easysearch.searchers.base.searcher import SearchBackend, SearchCallback

logger = logging.getLogger(__name__)

_MISSING = object()


class MemorySearcher(SearchBackend):
    """Searcher over in-process document collections.

    Supported selector operators: ``$or``, ``$and``, ``$regex`` (with
    ``$options``), ``$in``, ``$ne`` and plain equality. Dotted keys address
    nested documents; a list value matches if any element matches.
    """

    kind = "minimongo"

    def __init__(self, collections: Mapping[str, Iterable[Mapping[str, Any]]] | None = None) -> None:
        self._collections: dict[str, list[dict[str, Any]]] = {
            name: [dict(doc) for doc in docs] for name, docs in (collections or {}).items()
        }

    # ── Provisioning ─────────────────────────────────────────────────────

    def create_search_index(self, name: str, options: Mapping[str, Any]) -> None:
        """Attach the ``collection`` option's documents to the index.

        Redeclaring without a ``collection`` keeps the existing documents.
        """
        collection = options.get("collection")
        if collection is not None:
            self._collections[name] = [dict(doc) for doc in collection]
            logger.info("Loaded %d document(s) into index '%s'", len(self._collections[name]), name)
        else:
            self._collections.setdefault(name, [])

    def add_documents(self, name: str, documents: Iterable[Mapping[str, Any]]) -> None:
        """Append documents to an index's collection."""
        self._collections.setdefault(name, []).extend(dict(doc) for doc in documents)

    def documents(self, name: str) -> list[dict[str, Any]]:
        return list(self._collections.get(name, []))

    # ── Search ───────────────────────────────────────────────────────────

    def search(
        self,
        name: str,
        search_string: str,
        config: IndexConfiguration,
        callback: SearchCallback | None = None,
    ) -> SearchResult:
        """Filter, sort and truncate the index's collection."""
        selector = config.build_query(search_string)
        sort = config.build_sort()

        matched = [doc for doc in self._collections.get(name, []) if self._matches(doc, selector)]
        result = SearchResult(results=self._sorted(matched, sort)[: config.limit], total=len(matched))

        if callback is not None:
            callback(None, result)
        return result

    def default_query(self, config: IndexConfiguration, search_string: str) -> dict[str, Any]:
        """Case-insensitive substring match on any configured field."""
        if not search_string or not config.field:
            return {}
        pattern = re.escape(search_string)
        return {"$or": [{str(field): {"$regex": pattern, "$options": "i"}} for field in config.field]}

    def default_sort(self, config: IndexConfiguration) -> dict[str, int]:
        """Ascending on the first configured field."""
        if not config.field:
            return {}
        return {str(config.field[0]): 1}

    # ── Selector evaluation ──────────────────────────────────────────────

    @classmethod
    def _matches(cls, doc: Mapping[str, Any], selector: Mapping[str, Any]) -> bool:
        if not isinstance(selector, Mapping):
            raise QueryError(f"Selector must be a mapping, got {type(selector).__name__}")

        for key, condition in selector.items():
            if key == "$or":
                if not any(cls._matches(doc, sub) for sub in condition):
                    return False
            elif key == "$and":
                if not all(cls._matches(doc, sub) for sub in condition):
                    return False
            elif key.startswith("$"):
                raise QueryError(f"Unsupported selector operator: {key}")
            elif not cls._matches_value(_lookup(doc, key), condition):
                return False
        return True

    @staticmethod
    def _matches_value(value: Any, condition: Any) -> bool:
        if isinstance(condition, Mapping) and any(str(k).startswith("$") for k in condition):
            if "$ne" in condition and _any_value(value, lambda v: v == condition["$ne"]):
                return False
            if "$in" in condition and not _any_value(value, lambda v: v in condition["$in"]):
                return False
            if "$regex" in condition:
                flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
                try:
                    regex = re.compile(condition["$regex"], flags)
                except re.error as e:
                    raise QueryError(f"Invalid $regex {condition['$regex']!r}: {e}") from e
                if not _any_value(value, lambda v: isinstance(v, str) and regex.search(v) is not None):
                    return False
            return True
        return _any_value(value, lambda v: v == condition)

    @staticmethod
    def _sorted(docs: list[dict[str, Any]], sort: Any) -> list[dict[str, Any]]:
        if not sort:
            return docs
        if not isinstance(sort, Mapping):
            raise QueryError(f"Sort specification must be a mapping, got {type(sort).__name__}")

        # Stable sorts applied from the least significant key
        for key, direction in reversed(list(sort.items())):
            docs = sorted(docs, key=lambda d, k=key: _sort_key(_lookup(d, k)), reverse=direction < 0)
        return docs


def _lookup(doc: Mapping[str, Any], path: str) -> Any:
    value: Any = doc
    for part in path.split("."):
        if not isinstance(value, Mapping) or part not in value:
            return _MISSING
        value = value[part]
    return value


def _any_value(value: Any, predicate: Any) -> bool:
    if value is _MISSING:
        return predicate(None)
    if isinstance(value, list):
        return any(predicate(v) for v in value) or predicate(value)
    return predicate(value)


def _sort_key(value: Any) -> tuple[int, Any]:
    # Missing and None sort before any value; numbers before strings
    if value is _MISSING or value is None:
        return (0, "")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (1, value)
    if isinstance(value, str):
        return (2, value.lower())
    return (3, repr(value))
