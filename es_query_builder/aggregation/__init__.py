"""Aggregations, the standalone factory and the fluent aggregation methods."""

from es_query_builder.aggregation.aggregations import (
    Aggregation,
    AvgAggregation,
    DateHistogramAggregation,
    RangeAggregation,
    SumAggregation,
    TermsAggregation,
)
from es_query_builder.aggregation.factory import AggregationFactory
from es_query_builder.aggregation.builder import AggregationBuilder

__all__ = [
    "Aggregation",
    "AvgAggregation",
    "DateHistogramAggregation",
    "RangeAggregation",
    "SumAggregation",
    "TermsAggregation",
    "AggregationFactory",
    "AggregationBuilder",
]
