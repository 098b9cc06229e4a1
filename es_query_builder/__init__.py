"""
ES Query Builder - fluent Elasticsearch queries and response extraction.

Main entry points are Model (per-entity base class) and the
ElasticsearchBuilder it hands out.
"""

from es_query_builder.execution.collection import Collection
from es_query_builder.model import Model
from es_query_builder.search.elasticsearch import ElasticsearchBuilder

__all__ = ["Model", "ElasticsearchBuilder", "Collection"]
