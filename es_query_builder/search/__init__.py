"""Request assembly and the fluent search builder."""

from es_query_builder.search.request import SearchRequest
from es_query_builder.search.elasticsearch import ElasticsearchBuilder

__all__ = ["SearchRequest", "ElasticsearchBuilder"]
