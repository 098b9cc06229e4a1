"""
Abstract interfaces for the search layer.

These protocols define the contract between the fluent builder, the
per-entity models and the transport that talks to Elasticsearch.
"""

from typing import Any, Dict, Protocol


class ISearchModel(Protocol):
    """
    An entity model the builder is bound to.

    Supplies the index a request targets and the connection settings used
    to reach the cluster that holds it.
    """

    def get_index(self) -> str:
        """
        Return the index name requests are sent to.

        Returns:
            Elasticsearch index name
        """
        ...

    def get_config(self) -> Dict[str, Any]:
        """
        Return connection settings for the model's cluster.

        Returns:
            Dictionary with format:
            {
                "host": str,
                "port": int,
                "user": str | None,
                "pass": str | None,
            }
        """
        ...


class ISearchTransport(Protocol):
    """
    Send an assembled search request and return the raw reply.

    Failures are not handled here; whatever the underlying client raises
    propagates to the caller.
    """

    def search(self, request: Dict[str, Any], index: str) -> Dict[str, Any]:
        """
        Execute a search request against an index.

        Args:
            request: Serialized request body (query, aggregations, sort, ...)
            index: Target index name

        Returns:
            Raw response document with format:
            {
                "_shards": {...},
                "hits": {"total": ..., "hits": [{"_source": {...}, ...}]},
                "aggregations": {name: {"buckets": [...]}},  # Optional
            }
        """
        ...
