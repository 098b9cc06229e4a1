"""
Query clause primitives.

Each clause is a small value object that knows its Elasticsearch wire
shape. Engine-specific tuning goes through ``parameters``; keys are passed
through verbatim and flattened into the clause body.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

DEFAULT_RANGE_FORMAT = "yyyy-MM-dd HH:mm:ss"
DEFAULT_SIMPLE_QUERY_OPERATOR = "and"

MUST = "must"
MUST_NOT = "must_not"
SHOULD = "should"
FILTER = "filter"
BOOL_ROLES = (MUST, MUST_NOT, SHOULD, FILTER)


@dataclass(frozen=True)
class Clause:
    """Base clause."""

    parameters: Mapping[str, Any] = field(default_factory=dict, kw_only=True)

    def __post_init__(self):
        # Detach from the caller's mapping
        object.__setattr__(self, "parameters", dict(self.parameters or {}))

    @property
    def kind(self) -> str:
        raise NotImplementedError

    def to_dict(self) -> Dict[str, Any]:
        """Convert to Elasticsearch query dict."""
        raise NotImplementedError


@dataclass(frozen=True)
class TermClause(Clause):
    """Exact term match."""

    field: str
    value: Any

    @property
    def kind(self) -> str:
        return "term"

    def to_dict(self) -> Dict[str, Any]:
        if not self.parameters:
            return {"term": {self.field: self.value}}
        body = dict(self.parameters)
        body["value"] = self.value
        return {"term": {self.field: body}}


@dataclass(frozen=True)
class TermsClause(Clause):
    """Match any of several exact terms."""

    field: str
    values: Sequence[Any]

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, "values", tuple(self.values))

    @property
    def kind(self) -> str:
        return "terms"

    def to_dict(self) -> Dict[str, Any]:
        return {"terms": {self.field: list(self.values), **self.parameters}}


@dataclass(frozen=True)
class RangeClause(Clause):
    """Bounded range; both bounds are inclusive."""

    field: str
    gte: Any
    lte: Any
    format: Optional[str] = None

    @property
    def kind(self) -> str:
        return "range"

    def to_dict(self) -> Dict[str, Any]:
        body = dict(self.parameters)
        body["gte"] = self.gte
        body["lte"] = self.lte
        body["format"] = self.format or DEFAULT_RANGE_FORMAT
        return {"range": {self.field: body}}


@dataclass(frozen=True)
class MatchClause(Clause):
    """Analyzed full-text match."""

    field: str
    query: Any

    @property
    def kind(self) -> str:
        return "match"

    def to_dict(self) -> Dict[str, Any]:
        return {self.kind: {self.field: {"query": self.query, **self.parameters}}}


@dataclass(frozen=True)
class MatchPhraseClause(MatchClause):
    """Analyzed phrase match."""

    @property
    def kind(self) -> str:
        return "match_phrase"


@dataclass(frozen=True)
class SimpleQueryStringClause(Clause):
    """Query parsed with the simple query string syntax."""

    query: str
    fields: Sequence[str] = ()

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, "fields", tuple(self.fields))

    @property
    def kind(self) -> str:
        return "simple_query_string"

    def to_dict(self) -> Dict[str, Any]:
        body = dict(self.parameters)
        body["fields"] = list(self.fields)
        body["default_operator"] = body.get(
            "default_operator", DEFAULT_SIMPLE_QUERY_OPERATOR
        )
        return {"simple_query_string": {"query": self.query, **body}}


@dataclass(frozen=True)
class MatchAllClause(Clause):
    """Match every document."""

    @property
    def kind(self) -> str:
        return "match_all"

    def to_dict(self) -> Dict[str, Any]:
        return {"match_all": dict(self.parameters)}


@dataclass
class BoolClause:
    """
    Boolean compound clause.

    Accumulates clauses under the must / must_not / should / filter roles.
    A BoolClause may itself be added under a role of another BoolClause.
    """

    must: List[Any] = field(default_factory=list)
    must_not: List[Any] = field(default_factory=list)
    should: List[Any] = field(default_factory=list)
    filter: List[Any] = field(default_factory=list)
    parameters: Dict[str, Any] = field(default_factory=dict)

    @property
    def kind(self) -> str:
        return "bool"

    def add(self, clause: Any, role: str = MUST) -> "BoolClause":
        """
        Add a clause under a boolean role.

        Args:
            clause: Leaf clause or nested BoolClause
            role: One of must, must_not, should, filter

        Raises:
            ValueError: If role is not a boolean role
        """
        if role not in BOOL_ROLES:
            raise ValueError(
                f"Unknown boolean role '{role}', expected one of {', '.join(BOOL_ROLES)}"
            )
        getattr(self, role).append(clause)
        return self

    def get_clauses(self, role: Optional[str] = None) -> List[Any]:
        """Clauses under one role, or all of them in role order."""
        if role is not None:
            return list(getattr(self, role))
        return [clause for r in BOOL_ROLES for clause in getattr(self, r)]

    def is_empty(self) -> bool:
        return not any(getattr(self, role) for role in BOOL_ROLES)

    def to_dict(self) -> Dict[str, Any]:
        bool_body: Dict[str, Any] = {}

        for role in BOOL_ROLES:
            clauses = getattr(self, role)
            if clauses:
                bool_body[role] = [clause.to_dict() for clause in clauses]

        bool_body.update(self.parameters)

        return {"bool": bool_body}
