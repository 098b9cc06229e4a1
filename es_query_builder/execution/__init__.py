"""Request execution and response collections."""

from es_query_builder.execution.executor import ESSearchTransport
from es_query_builder.execution.collection import Collection

__all__ = ["ESSearchTransport", "Collection"]
