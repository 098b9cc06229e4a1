"""
Aggregation primitives.

Metric aggregations (avg, sum) compute a single value; bucket aggregations
(terms, date_histogram, range) group documents and may carry nested
sub-aggregations. Values are immutable: ``add_parameter`` and
``add_aggregation`` return modified copies.
"""

import dataclasses
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Mapping, Optional, Sequence, Tuple

DEFAULT_DATE_INTERVAL = "day"


@dataclass(frozen=True)
class Aggregation:
    """Base aggregation class."""

    type: ClassVar[str] = ""

    name: str
    field: Optional[str] = None
    script: Optional[Any] = None
    parameters: Mapping[str, Any] = dataclasses.field(default_factory=dict, kw_only=True)

    def __post_init__(self):
        object.__setattr__(self, "parameters", dict(self.parameters or {}))

    def add_parameter(self, key: str, value: Any) -> "Aggregation":
        """Return a copy with one more engine parameter."""
        return dataclasses.replace(self, parameters={**self.parameters, key: value})

    def add_parameters(self, parameters: Optional[Mapping[str, Any]]) -> "Aggregation":
        if not parameters:
            return self
        return dataclasses.replace(self, parameters={**self.parameters, **parameters})

    def _body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {}
        if self.field:
            body["field"] = self.field
        if self.script:
            body["script"] = self.script
        return body

    def to_dict(self) -> Dict[str, Any]:
        """Convert to an Elasticsearch aggregation dict keyed by name."""
        return {self.name: {self.type: {**self._body(), **self.parameters}}}


@dataclass(frozen=True)
class AvgAggregation(Aggregation):
    """Average of a numeric field or script."""

    type: ClassVar[str] = "avg"


@dataclass(frozen=True)
class SumAggregation(Aggregation):
    """Sum of a numeric field or script."""

    type: ClassVar[str] = "sum"


@dataclass(frozen=True)
class BucketAggregation(Aggregation):
    """Aggregation that produces buckets and may nest sub-aggregations."""

    aggregations: Tuple[Aggregation, ...] = dataclasses.field(default=(), kw_only=True)

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, "aggregations", tuple(self.aggregations))

    def add_aggregation(self, aggregation: Aggregation) -> "BucketAggregation":
        """Return a copy with a nested sub-aggregation appended."""
        return dataclasses.replace(
            self, aggregations=self.aggregations + (aggregation,)
        )

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()

        if self.aggregations:
            nested: Dict[str, Any] = {}
            for aggregation in self.aggregations:
                nested.update(aggregation.to_dict())
            result[self.name]["aggregations"] = nested

        return result


@dataclass(frozen=True)
class TermsAggregation(BucketAggregation):
    """One bucket per unique value."""

    type: ClassVar[str] = "terms"


@dataclass(frozen=True)
class DateHistogramAggregation(BucketAggregation):
    """Histogram over date values with calendar-aware intervals."""

    type: ClassVar[str] = "date_histogram"

    interval: Optional[str] = None
    format: Optional[str] = None

    def _body(self) -> Dict[str, Any]:
        body = super()._body()
        if self.interval:
            body["calendar_interval"] = self.interval
        if self.format:
            body["format"] = self.format
        return body


@dataclass(frozen=True)
class RangeAggregation(BucketAggregation):
    """
    One bucket per caller-defined range.

    Range specs are passed through as given, e.g.
    [{"to": 50}, {"from": 50, "to": 100}, {"from": 100}].
    """

    type: ClassVar[str] = "range"

    ranges: Sequence[Mapping[str, Any]] = ()
    keyed: bool = False

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, "ranges", tuple(dict(r) for r in self.ranges))

    def _body(self) -> Dict[str, Any]:
        body = super()._body()
        body["ranges"] = [dict(r) for r in self.ranges]
        body["keyed"] = self.keyed
        return body
