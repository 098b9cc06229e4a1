"""
Elasticsearch search transport.

Sends assembled request bodies through the official client and returns
the raw response document.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Union

from elasticsearch import Elasticsearch

from es_query_builder.core.models import ConnectionConfig

logger = logging.getLogger(__name__)

# Body keys that the client takes under a different keyword name
_KEYWORD_ALIASES = {"from": "from_", "_source": "source"}


class ESSearchTransport:
    """
    Executes search requests against Elasticsearch.

    Implements the ISearchTransport interface. Client errors are not
    caught; they reach the caller unchanged.
    """

    def __init__(
        self,
        config: Union[ConnectionConfig, Mapping[str, Any]],
        es_client: Optional[Elasticsearch] = None,
    ):
        """
        Initialize the transport.

        Args:
            config: Connection settings, as a ConnectionConfig or a
                    {host, port, user, pass} mapping
            es_client: Pre-built client; one is created from config otherwise
        """
        if not isinstance(config, ConnectionConfig):
            config = ConnectionConfig.model_validate(
                {k: v for k, v in dict(config).items() if v is not None}
            )
        self.config = config
        self.es_client = es_client if es_client is not None else self._build_client(config)

    @staticmethod
    def _build_client(config: ConnectionConfig) -> Elasticsearch:
        kwargs: Dict[str, Any] = {"hosts": [config.url]}
        if config.basic_auth:
            kwargs["basic_auth"] = config.basic_auth
        return Elasticsearch(**kwargs)

    def search(self, request: Dict[str, Any], index: str) -> Dict[str, Any]:
        """
        Execute a search request.

        Args:
            request: Serialized request body
            index: Name of the index to query

        Returns:
            Raw response document
        """
        params = {_KEYWORD_ALIASES.get(key, key): value for key, value in request.items()}

        logger.debug("Searching index '%s' on %s", index, self.config.url)
        response = self.es_client.search(index=index, **params)

        return getattr(response, "body", response)
