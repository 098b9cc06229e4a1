"""
Fluent Elasticsearch search builder.

Accumulates clauses, aggregations, sorting, projection and paging for one
request, assembles them into a SearchRequest on get(), executes it and
wraps the reply in a Collection.

Example:
    results = (
        Product().query()
        .must(lambda q: q.term("status", "active").match("title", "lamp"))
        .terms_aggregation("brands", "brand")
        .sort("price", "asc")
        .size(20)
        .get()
    )
    titles = results.pluck("title")
"""

import logging
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Union

from es_query_builder.aggregation.builder import AggregationBuilder
from es_query_builder.aggregation.factory import AggregationFactory
from es_query_builder.core.interfaces import ISearchModel, ISearchTransport
from es_query_builder.core.models import SortSpec
from es_query_builder.execution.collection import Collection
from es_query_builder.execution.executor import ESSearchTransport
from es_query_builder.query.builder import QueryBuilder
from es_query_builder.query.clauses import BoolClause
from es_query_builder.search.request import SearchRequest

logger = logging.getLogger(__name__)

DEFAULT_SIZE = 15
DEFAULT_SORT_ORDER = "desc"

RESETTABLE_FIELDS = frozenset(
    {"queries", "booleans", "aggregations", "sort", "source", "size", "from"}
)
# sort, from and the root boolean clause survive an execution
DEFAULT_RESET_SCOPE = frozenset({"queries", "aggregations", "size", "source"})


def _check_scope(scope: Iterable[str]) -> FrozenSet[str]:
    scope = frozenset(scope)
    unknown = scope - RESETTABLE_FIELDS
    if unknown:
        raise ValueError(
            f"Unknown reset fields: {', '.join(sorted(unknown))}. "
            f"Allowed: {', '.join(sorted(RESETTABLE_FIELDS))}"
        )
    return scope


class ElasticsearchBuilder(QueryBuilder, AggregationBuilder):
    """
    Builds and executes one search request at a time.

    A builder is a short-lived, single-owner accumulator; it is not safe to
    share between threads without external locking.
    """

    def __init__(
        self,
        model: ISearchModel,
        transport: Optional[ISearchTransport] = None,
        reset_scope: Optional[Iterable[str]] = None,
    ):
        """
        Initialize the builder.

        Args:
            model: Model supplying the index name and connection settings
            transport: Transport used by get(); defaults to an
                       ESSearchTransport built from model.get_config()
            reset_scope: Fields cleared after each execution. Defaults to
                         queries, aggregations, size and source
        """
        self.model = model
        self.transport = transport
        self.reset_scope = (
            DEFAULT_RESET_SCOPE if reset_scope is None else _check_scope(reset_scope)
        )

        self.queries: List[Any] = []
        self.booleans = BoolClause()
        self.aggregations: List[Any] = []
        self.aggregation = AggregationFactory()

        self._sort: List[SortSpec] = []
        self._source: Optional[List[str]] = None
        self._size: Optional[int] = None
        self._from = 0

    def get(self, debug: bool = False) -> Union[Collection, Dict[str, Any]]:
        """
        Execute the request.

        Args:
            debug: Return the request body instead of executing it. The body
                   is exactly what would be transmitted; state is kept.

        Returns:
            Collection over the raw response, or the request dict in debug mode
        """
        request = self._build_request()

        if debug:
            return request.to_dict()

        index = self.model.get_index()
        body = request.to_dict()
        logger.debug("Search request for index '%s': %s", index, body)

        response = self._get_transport().search(body, index)

        self.reset()

        return Collection(response)

    def to_dict(self) -> Dict[str, Any]:
        """Request body as get(debug=True) returns it."""
        return self.get(debug=True)

    def _build_request(self) -> SearchRequest:
        request = SearchRequest()

        request.add_query(self.booleans)
        for query in self.queries:
            request.add_query(query)

        for aggregation in self.aggregations:
            request.add_aggregation(aggregation)

        for sort in self._sort:
            request.add_sort(sort)

        if self._source:
            request.set_source(self._source)

        request.set_size(self._size)
        request.set_from(self._from)

        return request

    def _get_transport(self) -> ISearchTransport:
        if self.transport is None:
            self.transport = ESSearchTransport(self.model.get_config())
        return self.transport

    def reset(self, scope: Optional[Iterable[str]] = None) -> "ElasticsearchBuilder":
        """
        Clear request state.

        Args:
            scope: Fields to clear; defaults to the builder's reset_scope
        """
        scope = self.reset_scope if scope is None else _check_scope(scope)

        if "queries" in scope:
            self.queries = []
        if "booleans" in scope:
            self.booleans = BoolClause()
        if "aggregations" in scope:
            self.aggregations = []
        if "sort" in scope:
            self._sort = []
        if "source" in scope:
            self._source = None
        if "size" in scope:
            self._size = None
        if "from" in scope:
            self._from = 0

        return self

    def source(self, *fields: Union[str, Iterable[str]]) -> "ElasticsearchBuilder":
        """
        Select the fields returned per hit.

        Accepts either a single list of fields or the fields as arguments.
        """
        if len(fields) == 1 and not isinstance(fields[0], str):
            self._source = list(fields[0])
        else:
            self._source = list(fields)
        return self

    def size(self, size: Optional[int] = None) -> "ElasticsearchBuilder":
        """Set the number of hits returned; defaults to 15."""
        self._size = DEFAULT_SIZE if size is None else size
        return self

    def size_less(self) -> "ElasticsearchBuilder":
        """Return no hits, only totals and aggregations."""
        return self.size(0)

    def sort(
        self,
        field: str,
        order: Optional[str] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> "ElasticsearchBuilder":
        """
        Sort by a field.

        Args:
            field: Field to sort on
            order: asc or desc; defaults to desc
            params: Extra sort parameters (mode, missing, ...)
        """
        self._sort.append(
            SortSpec(field=field, order=order or DEFAULT_SORT_ORDER, params=dict(params or {}))
        )
        return self

    def from_(self, offset: int) -> "ElasticsearchBuilder":
        """Set the offset of the first hit."""
        self._from = offset
        return self

    def get_from(self) -> int:
        return self._from

    def get_size(self) -> Optional[int]:
        return self._size

    def get_source(self) -> Optional[List[str]]:
        return self._source

    def get_sort(self) -> List[SortSpec]:
        return list(self._sort)
