"""Query clauses and the fluent query methods."""

from es_query_builder.query.clauses import (
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
from es_query_builder.query.builder import QueryBuilder

__all__ = [
    "BoolClause",
    "Clause",
    "MatchAllClause",
    "MatchClause",
    "MatchPhraseClause",
    "RangeClause",
    "SimpleQueryStringClause",
    "TermClause",
    "TermsClause",
    "QueryBuilder",
]
