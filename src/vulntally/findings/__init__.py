"""Finding models, filter construction, repository resolution, and aggregation."""

from vulntally.findings.aggregator import aggregate
from vulntally.findings.extractor import extract_repository, resolve_repository
from vulntally.findings.filters import Filter, ValidationError, build_filter
from vulntally.findings.models import AggregationResult, Finding, SeverityCounts

__all__ = [
    "AggregationResult",
    "Filter",
    "Finding",
    "SeverityCounts",
    "ValidationError",
    "aggregate",
    "build_filter",
    "extract_repository",
    "resolve_repository",
]
