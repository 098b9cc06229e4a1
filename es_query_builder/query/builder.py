"""
Fluent query methods.

Mixed into the Elasticsearch builder. Leaf methods append a clause to the
pending list in call order. The boolean methods (must, must_not, should,
filter) hand a fresh nested builder to a callback and fold what it built
into the builder's root BoolClause.
"""

import logging
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence

from es_query_builder.query.clauses import (
    FILTER,
    MUST,
    MUST_NOT,
    SHOULD,
    BoolClause,
    Clause,
    MatchAllClause,
    MatchClause,
    MatchPhraseClause,
    RangeClause,
    SimpleQueryStringClause,
    TermClause,
    TermsClause,
)

logger = logging.getLogger(__name__)


class QueryBuilder:
    """Query half of the fluent builder."""

    queries: List[Clause]
    booleans: BoolClause
    model: Any

    def term(self, field: str, value: Any, parameters: Optional[Mapping[str, Any]] = None):
        """Exact term match."""
        self._push_query(TermClause(field, value, parameters=parameters or {}))
        return self

    def terms(
        self,
        field: str,
        terms: Iterable[Any],
        parameters: Optional[Mapping[str, Any]] = None,
    ):
        """Match documents containing any of the given exact terms."""
        self._push_query(TermsClause(field, tuple(terms), parameters=parameters or {}))
        return self

    def range(
        self,
        field: str,
        gte: Any,
        lte: Any,
        format: Optional[str] = None,
        parameters: Optional[Mapping[str, Any]] = None,
    ):
        """
        Limit the field to an inclusive range.

        The date format defaults to "yyyy-MM-dd HH:mm:ss".
        """
        self._push_query(
            RangeClause(field, gte, lte, format, parameters=parameters or {})
        )
        return self

    def match(self, field: str, query: Any, parameters: Optional[Mapping[str, Any]] = None):
        """Analyzed full-text match on a field."""
        self._push_query(MatchClause(field, query, parameters=parameters or {}))
        return self

    def match_phrase(
        self, field: str, query: Any, parameters: Optional[Mapping[str, Any]] = None
    ):
        """Phrase query built from the analyzed text."""
        self._push_query(MatchPhraseClause(field, query, parameters=parameters or {}))
        return self

    def simple_query_string(
        self,
        query: str,
        fields: Sequence[str],
        parameters: Optional[Mapping[str, Any]] = None,
    ):
        """
        Query in simple query string syntax over several fields.

        The default_operator parameter defaults to "and".
        """
        self._push_query(
            SimpleQueryStringClause(query, tuple(fields), parameters=parameters or {})
        )
        return self

    def match_all(self):
        """Match every document."""
        self._push_query(MatchAllClause())
        return self

    def must(self, callback: Callable):
        """Clauses must match and contribute to the score."""
        return self._bool_query_setter(callback, MUST)

    def must_not(self, callback: Callable):
        """Clauses must not match; run in filter context, no scoring."""
        return self._bool_query_setter(callback, MUST_NOT)

    def should(self, callback: Callable):
        """Clauses should match."""
        return self._bool_query_setter(callback, SHOULD)

    def filter(self, callback: Callable):
        """Clauses must match, but their score is ignored."""
        return self._bool_query_setter(callback, FILTER)

    def _push_query(self, clause: Clause) -> None:
        self.queries.append(clause)

    def _new_nested(self):
        return type(self)(self.model)

    def _bool_query_setter(self, callback: Callable, role: str):
        nested = self._new_nested()
        result = callback(nested)

        self._set_booleans(nested if result is None else result, role)

        return self

    def _set_booleans(self, nested: "QueryBuilder", role: str) -> None:
        for query in nested.queries:
            self.booleans.add(query, role)

        if not nested.queries:
            self.booleans.add(nested.booleans, role)
        elif not nested.booleans.is_empty():
            logger.debug(
                "Nested boolean clauses ignored under '%s': leaf clauses take precedence",
                role,
            )

        nested.queries = []
