from easysearch.searchers.elasticsearch.searcher import ElasticSearchSearcher

__all__ = ["ElasticSearchSearcher"]
