"""Multi-dialect metric extraction from simulator stdout."""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from .metric_models import MetricSet, ParseError

_UNSIGNED_PATTERN = re.compile(r"^\+?\d+$")
_FRACTIONAL_PATTERN = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")

# Zero-based word offsets of each dialect's value token.
_COUNTER_OFFSET = 2
_C0_OFFSET = 1
_THROUGHPUT_CYCLES_OFFSET = 7
_THROUGHPUT_RATE_OFFSET = 8


@dataclass
class _MetricAccumulator:
    """Mutable counters filled while scanning one run's output."""

    cycles: int = 0
    instructions: int = 0
    queue_a: int = 0
    queue_b: int = 0

    def freeze(self) -> MetricSet:
        return MetricSet(
            cycles=self.cycles,
            instructions=self.instructions,
            queue_a=self.queue_a,
            queue_b=self.queue_b,
        )


LineExtractor = Callable[[Sequence[str], _MetricAccumulator], None]


@dataclass(frozen=True)
class DialectRule:
    """One report dialect: a line predicate and the extractor applied on match."""

    name: str
    matches: Callable[[str], bool]
    extract: LineExtractor


def parse_metrics(stdout_text: str) -> MetricSet:
    """Extract cycles, instructions and queue totals from raw simulator output.

    Each line is tested against the dialect rules in priority order and only
    the first matching rule is applied. Lines matching no rule are ignored.

    Raises:
      ParseError: If a recognised line lacks a numeric token where its dialect
        expects one.
    """
    accumulator = _MetricAccumulator()
    for line_number, line in enumerate(stdout_text.splitlines(), start=1):
        rule = _first_matching_rule(line)
        if rule is None:
            continue
        words = line.split(" ")
        try:
            rule.extract(words, accumulator)
        except ParseError as exc:
            raise ParseError(f"line {line_number} ({rule.name}): {exc}: {line!r}") from exc
    return accumulator.freeze()


def _first_matching_rule(line: str) -> DialectRule | None:
    for rule in DIALECT_RULES:
        if rule.matches(line):
            return rule
    return None


def _extract_mcycle(words: Sequence[str], acc: _MetricAccumulator) -> None:
    _, acc.cycles = _unsigned_at(words, _COUNTER_OFFSET)


def _extract_minstret(words: Sequence[str], acc: _MetricAccumulator) -> None:
    _, acc.instructions = _unsigned_at(words, _COUNTER_OFFSET)


def _extract_throughput(words: Sequence[str], acc: _MetricAccumulator) -> None:
    cycles_index, cycles = _unsigned_at(words, _THROUGHPUT_CYCLES_OFFSET)
    _, rate = _fractional_at(words, max(_THROUGHPUT_RATE_OFFSET, cycles_index + 1))
    if rate <= 0:
        raise ParseError(f"rate must be positive, got {rate}")
    try:
        instructions = int(cycles / rate)
    except (OverflowError, ValueError) as exc:
        raise ParseError(f"cannot derive instructions from cycles: {exc}") from exc
    acc.cycles = cycles
    acc.instructions = instructions


def _extract_c0(words: Sequence[str], acc: _MetricAccumulator) -> None:
    line = " ".join(words)
    if "instructions" in line:
        _, acc.instructions = _unsigned_at(words, _C0_OFFSET)
    elif "cycles" in line:
        _, acc.cycles = _unsigned_at(words, _C0_OFFSET)


def _extract_queue_a(words: Sequence[str], acc: _MetricAccumulator) -> None:
    _, value = _unsigned_at(words, _COUNTER_OFFSET)
    acc.queue_a += value


def _extract_queue_b(words: Sequence[str], acc: _MetricAccumulator) -> None:
    _, value = _unsigned_at(words, _COUNTER_OFFSET)
    acc.queue_b += value


def _contains(marker: str) -> Callable[[str], bool]:
    def _matches(line: str) -> bool:
        return marker in line

    return _matches


DIALECT_RULES: tuple[DialectRule, ...] = (
    DialectRule("mcycle", _contains("mcycle"), _extract_mcycle),
    DialectRule("minstret", _contains("minstret"), _extract_minstret),
    DialectRule("vvadd", _contains("vvadd"), _extract_throughput),
    DialectRule("matmul", _contains("matmul"), _extract_throughput),
    # A C0 line naming neither counter is consumed without effect.
    DialectRule("C0", _contains("C0"), _extract_c0),
    DialectRule("AQ", _contains("AQ"), _extract_queue_a),
    DialectRule("BQ", _contains("BQ"), _extract_queue_b),
)


def _unsigned_at(words: Sequence[str], offset: int) -> tuple[int, int]:
    index, token = _numeric_token_at(words, offset, _UNSIGNED_PATTERN, "unsigned integer")
    try:
        return index, int(token)
    except ValueError as exc:
        raise ParseError(f"unsigned integer out of range at word {index + 1}: {exc}") from exc


def _fractional_at(words: Sequence[str], offset: int) -> tuple[int, float]:
    index, token = _numeric_token_at(words, offset, _FRACTIONAL_PATTERN, "fractional rate")
    try:
        return index, float(token)
    except (OverflowError, ValueError) as exc:
        raise ParseError(f"fractional rate out of range at word {index + 1}: {exc}") from exc


def _numeric_token_at(
    words: Sequence[str], offset: int, pattern: re.Pattern[str], label: str
) -> tuple[int, str]:
    """Return the token at `offset`, or the first numeric token after it.

    Non-numeric words between the offset and the value are skipped, so both
    `mcycle = N` and `mcycle x y N` resolve to N.
    """
    if offset >= len(words):
        raise ParseError(f"expected {label} at word {offset + 1}, line has {len(words)} words")
    for index in range(offset, len(words)):
        token = words[index].strip()
        if pattern.fullmatch(token):
            return index, token
    raise ParseError(f"expected {label} at word {offset + 1}, got {words[offset]!r}")
