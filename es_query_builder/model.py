"""
Base class for searchable entities.

A model names the index its documents live in and the connection used to
reach it. Searches start from Model.query():

    class Product(Model):
        index = "products"

    Product().query().term("brand", "acme").size().get()
"""

from typing import Any, Dict, Iterable, Optional

from es_query_builder.config import default_connection_name, get_connection_config
from es_query_builder.core.interfaces import ISearchTransport
from es_query_builder.search.elasticsearch import ElasticsearchBuilder


class Model:
    """Searchable entity bound to an index and a named connection."""

    index: Optional[str] = None
    connection: Optional[str] = None

    def get_index(self) -> str:
        if not self.index:
            raise ValueError(f"{type(self).__name__} does not define an index")
        return self.index

    def get_connection(self) -> str:
        """Connection name; E_CONNECTION or "elasticsearch" when unset."""
        if self.connection is None:
            self.connection = default_connection_name()
        return self.connection

    def get_config(self) -> Dict[str, Any]:
        """Host, port and credentials of the model's connection."""
        return get_connection_config(self.get_connection()).to_dict()

    def query(
        self,
        transport: Optional[ISearchTransport] = None,
        reset_scope: Optional[Iterable[str]] = None,
    ) -> ElasticsearchBuilder:
        """
        Start a new search against this model's index.

        Args:
            transport: Transport override, mainly for tests
            reset_scope: Fields cleared after each execution

        Returns:
            A fresh builder bound to this model
        """
        return ElasticsearchBuilder(self, transport=transport, reset_scope=reset_scope)
