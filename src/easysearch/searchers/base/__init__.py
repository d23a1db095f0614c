"""Base searcher interface — Contract and registry for search backends."""

from easysearch.searchers.base.registry import SearcherRegistry, UnknownBackendError
from easysearch.searchers.base.searcher import FunctionSearcher, SearchBackend

__all__ = ["FunctionSearcher", "SearchBackend", "SearcherRegistry", "UnknownBackendError"]
