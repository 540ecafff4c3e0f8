"""Metric parsing entities."""

from __future__ import annotations

from dataclasses import dataclass


class ParseError(Exception):
    """Raised when a recognised report line carries a malformed metric token."""


@dataclass(frozen=True)
class MetricSet:
    """Counters extracted from one simulator run.

    Cycles and instructions keep the last reported value; the queue
    occupancy counters are summed over every matching line.
    """

    cycles: int = 0
    instructions: int = 0
    queue_a: int = 0
    queue_b: int = 0

    @staticmethod
    def zero() -> MetricSet:
        return MetricSet()
