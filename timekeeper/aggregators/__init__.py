"""Aggregators for grouping normalized entries into employee reports."""

from timekeeper.aggregators.report_aggregator import (
    AggregationResult,
    ReportAggregator,
    aggregate,
    calculate_totals,
    employee_sort_key,
)

__all__ = [
    "AggregationResult",
    "ReportAggregator",
    "aggregate",
    "calculate_totals",
    "employee_sort_key",
]
