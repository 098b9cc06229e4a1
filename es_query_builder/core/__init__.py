"""Core interfaces and models for the search layer."""

from es_query_builder.core.interfaces import (
    ISearchModel,
    ISearchTransport,
)
from es_query_builder.core.models import (
    ConnectionConfig,
    SortSpec,
)

__all__ = [
    "ISearchModel",
    "ISearchTransport",
    "ConnectionConfig",
    "SortSpec",
]
