"""Metric parsing domain exports."""

from .metric_models import MetricSet, ParseError
from .report_dialects import DIALECT_RULES, DialectRule, parse_metrics

__all__ = [
    "MetricSet",
    "ParseError",
    "DialectRule",
    "DIALECT_RULES",
    "parse_metrics",
]
