"""Index Registry — Declares search indexes and dispatches searches.

The registry owns the mapping from index name to ``IndexConfiguration``.

Declaration (``create_search_index``):
  1. Normalize the ``field`` option to a list
  2. Merge defaults with the options (options win key by key)
  3. Store the result, replacing any previous declaration of the name
  4. Forward the options to the searcher's ``create_search_index`` hook,
     if that searcher is already registered

Search (``search``):
  1. Resolve the stored configuration and its searcher
  2. Evaluate the permission predicate; a denial returns an empty result
     without touching the searcher
  3. Merge the call options onto the stored configuration
  4. Delegate to the searcher and return its result unmodified
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError

from easysearch.config.settings import IndexDefaults
from easysearch.core.checks import OptionalFunction, OptionalRecord, Record, check
from easysearch.core.errors import IndexNotFoundError, TypeConstraintViolation
from easysearch.models.index import IndexConfiguration, UseSearcherDefault, allow_all, normalize_fields
from easysearch.models.result import SearchResult
from easysearch.searchers.base.registry import SearcherRegistry

logger = logging.getLogger(__name__)


class IndexRegistry:
    """Registry of named search indexes bound to a ``SearcherRegistry``.

    Attributes:
        searchers: The searcher registry used for hooks and dispatch.
        defaults: Defaults every index configuration starts from.
        persist_call_overrides: When True, options passed to ``search`` are
            written back into the stored configuration and apply to all later
            searches of that index. When False, every search works on a
            throwaway snapshot.
    """

    def __init__(
        self,
        searchers: SearcherRegistry,
        defaults: IndexDefaults | None = None,
        persist_call_overrides: bool = False,
    ) -> None:
        self.searchers = searchers
        self.defaults = defaults or IndexDefaults()
        self.persist_call_overrides = persist_call_overrides
        self._indexes: dict[str, IndexConfiguration] = {}
        self._lock = threading.RLock()

    def default_options(self) -> dict[str, Any]:
        """Return a fresh copy of the default configuration template."""
        return {
            "format": self.defaults.format,
            "limit": self.defaults.limit,
            "use": self.defaults.use,
            "sort": UseSearcherDefault(),
            "permission": allow_all,
            "query": UseSearcherDefault(),
        }

    # ── Declaration ──────────────────────────────────────────────────────

    def create_search_index(self, name: str, options: Mapping[str, Any]) -> None:
        """Declare (or redeclare) a search index.

        Args:
            name: Index name.
            options: Index options; any key overrides the matching default and
                unknown keys are kept as-is.

        Raises:
            TypeConstraintViolation: If ``name`` or ``options`` are malformed.
        """
        check(name, str, "name")
        check(options, Record, "options")

        options = dict(options)
        if "field" in options:
            options["field"] = normalize_fields(options["field"])

        config = self._build(self.default_options(), options, {"name": name})
        with self._lock:
            if name in self._indexes:
                logger.info("Redefining search index: %s", name)
            self._indexes[name] = config
        logger.info("Created search index: %s (searcher: %s)", name, config.use)

        searcher = self.searchers.get(config.use)
        if searcher is None:
            logger.debug("Searcher '%s' not registered yet, skipping provisioning of '%s'", config.use, name)
            return
        searcher.create_search_index(name, options)

    # ── Search ───────────────────────────────────────────────────────────

    def search(
        self,
        name: str,
        search_string: str,
        options: Mapping[str, Any] | None = None,
        callback: Callable[..., Any] | None = None,
    ) -> Any:
        """Search an index.

        Args:
            name: Index name.
            search_string: The string to search for.
            options: Per-call overrides of the index configuration.
            callback: Optional ``callback(error, result)`` handed to the searcher.

        Returns:
            Whatever the searcher returns, or ``SearchResult.empty()`` when the
            permission predicate rejects the search string.

        Raises:
            TypeConstraintViolation: If any argument is malformed.
            IndexNotFoundError: If no index is declared under ``name``.
            UnknownBackendError: If the index's searcher kind is not registered.
        """
        check(name, str, "name")
        check(search_string, str, "search_string")
        check(options, OptionalRecord, "options")
        check(callback, OptionalFunction, "callback")

        with self._lock:
            stored = self._indexes.get(name)
        if stored is None:
            raise IndexNotFoundError(name)

        searcher = self.searchers.require(stored.use)

        if not stored.is_permitted(search_string):
            logger.debug("Permission denied for search on index '%s'", name)
            return SearchResult.empty()

        with self._lock:
            # Re-read: a concurrent redeclaration may have replaced the entry
            current = self._indexes.get(name, stored)
            merged = self._build(current.to_options(), options or {}, {"name": name})
            if self.persist_call_overrides:
                self._indexes[name] = merged

        logger.debug("Dispatching search on index '%s' to searcher '%s'", name, stored.use)
        return searcher.search(name, search_string, merged, callback)

    # ── Accessors ────────────────────────────────────────────────────────

    def get_index(self, name: str) -> IndexConfiguration | None:
        """Return the stored configuration for ``name``, or ``None``."""
        return self._indexes.get(name)

    def get_indexes(self) -> dict[str, IndexConfiguration]:
        """Return a shallow copy of the name → configuration mapping."""
        with self._lock:
            return dict(self._indexes)

    def __contains__(self, name: object) -> bool:
        return name in self._indexes

    def __len__(self) -> int:
        return len(self._indexes)

    def _build(self, *layers: Mapping[str, Any]) -> IndexConfiguration:
        try:
            return IndexConfiguration.merged(*layers, searchers=self.searchers)
        except ValidationError as e:
            raise TypeConstraintViolation(f"Invalid index options: {e}") from e
