"""
Standalone aggregation factory.

Builds aggregation values outside the fluent chain. Builder callbacks
receive an instance as their second argument so they can create
sub-aggregations:

    builder.terms_aggregation(
        "brands", "brand",
        callback=lambda agg, factory: agg.add_aggregation(factory.avg("avg_price", "price")),
    )
"""

from typing import Any, Mapping, Optional

from es_query_builder.aggregation.aggregations import (
    AvgAggregation,
    DateHistogramAggregation,
    SumAggregation,
    TermsAggregation,
)


class AggregationFactory:
    """Creates metric and bucket aggregations."""

    def avg(
        self, name: str, field: Optional[str] = None, script: Optional[str] = None
    ) -> AvgAggregation:
        """Average of numeric values extracted from the aggregated documents."""
        return AvgAggregation(name=name, field=field, script=script)

    def date_histogram(
        self,
        name: str,
        field: Optional[str] = None,
        interval: Optional[str] = None,
        format: Optional[str] = None,
    ) -> DateHistogramAggregation:
        """
        Date histogram.

        Example intervals: year, quarter, month, week, day, hour, minute, second.
        No interval is filled in here; the fluent builder defaults it to day.
        """
        return DateHistogramAggregation(
            name=name, field=field, interval=interval, format=format
        )

    def terms_aggregation(
        self,
        name: str,
        field: Optional[str] = None,
        parameters: Optional[Mapping[str, Any]] = None,
        script: Optional[Any] = None,
    ) -> TermsAggregation:
        """One bucket per unique value of the field or script."""
        return TermsAggregation(
            name=name, field=field, script=script, parameters=parameters or {}
        )

    def sum(
        self,
        name: str,
        field: Optional[str] = None,
        parameters: Optional[Mapping[str, Any]] = None,
        script: Optional[Any] = None,
    ) -> SumAggregation:
        """Sum of numeric values extracted from the aggregated documents."""
        return SumAggregation(
            name=name, field=field, script=script, parameters=parameters or {}
        )
