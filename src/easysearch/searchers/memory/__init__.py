from easysearch.searchers.memory.searcher import MemorySearcher

__all__ = ["MemorySearcher"]
