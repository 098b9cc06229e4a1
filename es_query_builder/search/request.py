"""
Search request container.

Collects the parts of a request and serializes them into the body sent to
Elasticsearch. Key order of the output is fixed: query, sort,
aggregations, from, size, _source.
"""

from typing import Any, Dict, List, Optional, Sequence

from es_query_builder.aggregation.aggregations import Aggregation
from es_query_builder.core.models import SortSpec
from es_query_builder.query.clauses import BoolClause


class SearchRequest:
    """
    Assembled search request.

    Top-level clauses are combined with must semantics. Empty boolean
    containers are only kept when nothing else was added, so an empty
    request still carries {"bool": {}}.
    """

    def __init__(self):
        self._queries: List[Any] = []
        self._aggregations: List[Aggregation] = []
        self._sorts: List[SortSpec] = []
        self._source: Optional[List[str]] = None
        self._size: Optional[int] = None
        self._from: Optional[int] = None

    def add_query(self, query: Any) -> "SearchRequest":
        self._queries.append(query)
        return self

    def add_aggregation(self, aggregation: Aggregation) -> "SearchRequest":
        self._aggregations.append(aggregation)
        return self

    def add_sort(self, sort: SortSpec) -> "SearchRequest":
        self._sorts.append(sort)
        return self

    def set_source(self, fields: Sequence[str]) -> "SearchRequest":
        self._source = list(fields)
        return self

    def set_size(self, size: Optional[int]) -> "SearchRequest":
        self._size = size
        return self

    def set_from(self, offset: Optional[int]) -> "SearchRequest":
        self._from = offset
        return self

    def _query_to_dict(self) -> Optional[Dict[str, Any]]:
        if not self._queries:
            return None

        clauses = [
            q for q in self._queries
            if not (isinstance(q, BoolClause) and q.is_empty())
        ]

        if not clauses:
            return {"bool": {}}

        if len(clauses) == 1:
            return clauses[0].to_dict()

        return {"bool": {"must": [clause.to_dict() for clause in clauses]}}

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the request body."""
        output: Dict[str, Any] = {}

        query = self._query_to_dict()
        if query is not None:
            output["query"] = query

        if self._sorts:
            output["sort"] = [sort.to_dict() for sort in self._sorts]

        if self._aggregations:
            aggregations: Dict[str, Any] = {}
            for aggregation in self._aggregations:
                aggregations.update(aggregation.to_dict())
            output["aggregations"] = aggregations

        if self._from is not None:
            output["from"] = self._from

        if self._size is not None:
            output["size"] = self._size

        if self._source is not None:
            output["_source"] = self._source

        return output
