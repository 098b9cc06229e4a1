"""
Fluent aggregation methods.

Mixed into the Elasticsearch builder. Every method constructs an
aggregation, optionally hands it to a callback together with the
aggregation factory, and appends the result to the pending list.
"""

from typing import Any, Callable, List, Mapping, Optional, Sequence

from es_query_builder.aggregation.aggregations import (
    DEFAULT_DATE_INTERVAL,
    Aggregation,
    DateHistogramAggregation,
    RangeAggregation,
    SumAggregation,
    TermsAggregation,
)
from es_query_builder.aggregation.factory import AggregationFactory

AggregationCallback = Callable[[Aggregation, AggregationFactory], Aggregation]


class AggregationBuilder:
    """Aggregation half of the fluent builder."""

    aggregations: List[Aggregation]
    aggregation: AggregationFactory

    def terms_aggregation(
        self,
        name: str,
        field: Optional[str] = None,
        parameters: Optional[Mapping[str, Any]] = None,
        script: Optional[Any] = None,
        callback: Optional[AggregationCallback] = None,
    ):
        """
        Bucket per unique value.

        Args:
            name: Aggregation name, used as the response key
            field: Field to bucket on
            parameters: Extra terms parameters (size, order, ...)
            script: Script producing the bucketed values
            callback: Receives (aggregation, factory), returns the aggregation to store
        """
        aggregation = TermsAggregation(
            name=name, field=field, script=script, parameters=parameters or {}
        )
        self._store_aggregation(aggregation, callback)
        return self

    def date_histogram(
        self,
        name: str,
        field: Optional[str] = None,
        interval: Optional[str] = None,
        format: Optional[str] = None,
        callback: Optional[AggregationCallback] = None,
    ):
        """
        Bucket date values by calendar interval.

        Example intervals: year, quarter, month, week, day, hour, minute, second.
        Defaults to day.
        """
        aggregation = DateHistogramAggregation(
            name=name,
            field=field,
            interval=interval or DEFAULT_DATE_INTERVAL,
            format=format,
        )
        self._store_aggregation(aggregation, callback)
        return self

    def sum(
        self,
        name: str,
        field: Optional[str] = None,
        script: Optional[Any] = None,
        callback: Optional[AggregationCallback] = None,
    ):
        """Sum numeric values of the aggregated documents."""
        aggregation = SumAggregation(name=name, field=field, script=script)
        self._store_aggregation(aggregation, callback)
        return self

    def range_aggregation(
        self,
        name: str,
        field: Optional[str] = None,
        ranges: Optional[Sequence[Mapping[str, Any]]] = None,
        keyed: bool = False,
        callback: Optional[AggregationCallback] = None,
    ):
        """
        Bucket per caller-defined range.

        Ranges are not checked for structure; each spec is sent as given.
        """
        aggregation = RangeAggregation(
            name=name, field=field, ranges=ranges or (), keyed=keyed
        )
        self._store_aggregation(aggregation, callback)
        return self

    def _store_aggregation(
        self, aggregation: Aggregation, callback: Optional[AggregationCallback]
    ) -> None:
        if callback is not None:
            aggregation = callback(aggregation, self.aggregation)
        self.aggregations.append(aggregation)
