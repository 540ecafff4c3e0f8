"""Metric extraction tests across report dialects."""

from __future__ import annotations

import pytest
from boom_verifier.metric_parsing.metric_models import MetricSet, ParseError
from boom_verifier.metric_parsing.report_dialects import DIALECT_RULES, parse_metrics


def test_counter_dialect_reads_cycles_and_instructions() -> None:
    metrics = parse_metrics("mcycle x y 12345\nminstret x y 678\n")

    assert metrics.cycles == 12345
    assert metrics.instructions == 678


def test_counter_dialect_reads_equals_separated_values() -> None:
    metrics = parse_metrics("mcycle = 4096\nminstret = 2048\n")

    assert metrics == MetricSet(cycles=4096, instructions=2048)


def test_throughput_dialect_derives_instructions_from_rate() -> None:
    line = "vvadd a b c d e f 1000 4.0"

    metrics = parse_metrics(line)

    assert metrics.cycles == 1000
    assert metrics.instructions == 250


def test_throughput_dialect_truncates_toward_zero() -> None:
    metrics = parse_metrics("matmul a b c d e f 1000 3.0")

    assert metrics.cycles == 1000
    assert metrics.instructions == 333


def test_throughput_dialect_skips_unit_label_before_rate() -> None:
    metrics = parse_metrics("vvadd a b c d e f 1000 cycles 2.5")

    assert metrics == MetricSet(cycles=1000, instructions=400)


def test_c0_dialect_reads_second_token() -> None:
    metrics = parse_metrics("C0 5000 instructions\nC0 9000 cycles\n")

    assert metrics == MetricSet(cycles=9000, instructions=5000)


def test_c0_line_without_counter_name_contributes_nothing() -> None:
    metrics = parse_metrics("C0 AQ 7\n")

    assert metrics == MetricSet.zero()


def test_queue_counters_are_summed_across_lines() -> None:
    text = "\n".join(
        [
            "AQ ... 5",
            "BQ ... 2",
            "AQ ... 5",
            "unrelated line",
            "BQ ... 2",
            "AQ ... 5",
        ]
    )

    metrics = parse_metrics(text)

    assert metrics.queue_a == 15
    assert metrics.queue_b == 4


def test_cycles_and_instructions_keep_last_value() -> None:
    metrics = parse_metrics("mcycle = 1\nmcycle = 2\nminstret = 3\nminstret = 4\n")

    assert metrics.cycles == 2
    assert metrics.instructions == 4


def test_first_matching_rule_wins() -> None:
    # Contains both "mcycle" and "AQ"; only the mcycle rule applies.
    metrics = parse_metrics("mcycle = 10 AQ")

    assert metrics == MetricSet(cycles=10)


def test_unrecognised_output_yields_zero_metrics() -> None:
    assert parse_metrics("hello\n\n*** PASSED ***\n") == MetricSet.zero()
    assert parse_metrics("") == MetricSet.zero()


def test_parsing_is_idempotent() -> None:
    text = "mcycle = 10\nminstret = 5\nAQ x 3\nBQ x 4\n"

    assert parse_metrics(text) == parse_metrics(text)


@pytest.mark.parametrize(
    "text",
    [
        "mcycle = abc",
        "minstret",
        "AQ x -3",
        "C0 many instructions",
        "vvadd a b c d e f 1000 0.0",
        "vvadd a b c d e f 1000",
    ],
)
def test_malformed_tokens_raise_parse_error(text: str) -> None:
    with pytest.raises(ParseError):
        parse_metrics(text)


def test_parse_error_names_line_and_dialect() -> None:
    with pytest.raises(ParseError, match=r"line 2 \(minstret\)"):
        parse_metrics("mcycle = 1\nminstret = x\n")


def test_counter_too_long_for_integer_conversion_raises_parse_error() -> None:
    with pytest.raises(ParseError, match=r"line 1 \(mcycle\)"):
        parse_metrics("mcycle = " + "9" * 5000)


def test_throughput_cycles_too_large_for_division_raise_parse_error() -> None:
    with pytest.raises(ParseError, match=r"line 1 \(vvadd\)"):
        parse_metrics("vvadd a b c d e f " + "9" * 400 + " 4.0")


def test_value_after_non_numeric_word_at_offset_is_accepted() -> None:
    assert parse_metrics("mcycle = abc 5") == MetricSet(cycles=5)
    assert parse_metrics("AQ occupancy total 6") == MetricSet(queue_a=6)


def test_dialect_rules_are_in_priority_order() -> None:
    assert [rule.name for rule in DIALECT_RULES] == [
        "mcycle",
        "minstret",
        "vvadd",
        "matmul",
        "C0",
        "AQ",
        "BQ",
    ]
