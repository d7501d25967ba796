from __future__ import annotations

import json
import math

import pytest

from benchstats.analysis.plots import CHART_ROWS, parse_chart
from benchstats.analysis.reports import (
    format_duration,
    format_noise,
    generate_json_report,
    generate_markdown_report,
    generate_text_report,
    summarize_samples,
)


def _timings(count: int) -> list[float]:
    return [0.001 + 0.0001 * (idx % 7) + 0.00001 * (idx % 3) for idx in range(count)]


def test_summarize_samples_builds_consistent_summary() -> None:
    samples = _timings(50)
    summary = summarize_samples("kernel", list(reversed(samples)), bins=12, percentiles=[0, 50, 100])

    assert summary.sample_count == 50
    assert summary.min_value == min(samples)
    assert summary.max_value == max(samples)
    assert summary.mean == pytest.approx(sum(samples) / 50)
    assert math.isfinite(summary.noise)
    assert [key for key, _ in summary.percentiles] == [0, 50, 100]
    assert summary.percentiles[0][1] == min(samples)
    assert summary.percentiles[-1][1] == max(samples)

    assert summary.fitted.bins == 12
    assert sum(summary.fitted.histogram) == 50
    lines = summary.chart.splitlines()
    assert len(lines) == CHART_ROWS
    assert all(len(line) == 14 for line in lines)


def test_summarize_equal_samples_draws_single_full_column() -> None:
    summary = summarize_samples("flat", [0.002] * 20, bins=9)

    assert summary.noise == 0.0
    assert summary.fitted.underflow == 0
    assert summary.fitted.overflow == 0
    levels = parse_chart(summary.chart)
    columns = list(zip(*levels))
    full = [column for column in columns if all(level == 8 for level in column)]
    assert len(full) == 1
    assert sum(sum(column) for column in columns) == 8 * CHART_ROWS


def test_summarize_zero_samples_window() -> None:
    summary = summarize_samples("zero", [0.0] * 5, bins=4)

    assert summary.noise == 0.0
    assert sum(summary.fitted.histogram[1:-1]) == 5


def test_summarize_few_samples_reports_infinite_noise() -> None:
    summary = summarize_samples("tiny", [0.5, 0.25, 1.0], bins=4)

    assert summary.noise == math.inf
    assert summary.to_dict()["noise"] is None
    assert any("noise" in note for note in summary.notes)


def test_summarize_samples_rejects_empty_input() -> None:
    with pytest.raises(ValueError):
        summarize_samples("empty", [])


def test_markdown_report_contains_table_and_charts() -> None:
    summaries = [
        summarize_samples("fast", _timings(30), bins=10, percentiles=[50, 99]),
        summarize_samples("slow", [value * 3 for value in _timings(30)], bins=10, percentiles=[50]),
    ]
    markdown = generate_markdown_report(summaries)

    assert markdown.startswith("# Benchmark Samples\n")
    assert "| Name | Samples | Mean | Noise | p50 | p99 |" in markdown
    assert "| `fast` | 30 |" in markdown
    assert "## slow" in markdown
    assert markdown.count("```text") == 2
    # slow has no p99 entry
    slow_row = next(line for line in markdown.splitlines() if line.startswith("| `slow`"))
    assert slow_row.endswith("| - |")


def test_json_report_is_parseable() -> None:
    summaries = [
        summarize_samples("steady", _timings(40), bins=8),
        summarize_samples("tiny", [1.0, 2.0], bins=8),
    ]
    payload = json.loads(generate_json_report(summaries))

    first, second = payload["samples"]
    assert first["name"] == "steady"
    assert first["histogram"]["bins"] == 8
    assert len(first["histogram"]["counts"]) == 10
    assert "p50" in first["percentiles"]
    assert second["noise"] is None


def test_text_report_lists_each_sample_set() -> None:
    text = generate_text_report([summarize_samples("loop", _timings(12), bins=6, percentiles=[50])])

    assert text.startswith("loop: n=12, mean=")
    assert "p50=" in text


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [
        (5e-10, "0.5ns"),
        (2.5e-6, "2.50us"),
        (0.0125, "12.50ms"),
        (1.5, "1.500s"),
        (math.inf, "inf"),
    ],
)
def test_format_duration_units(seconds: float, expected: str) -> None:
    assert format_duration(seconds) == expected


def test_format_noise() -> None:
    assert format_noise(0.0123) == "1.23%"
    assert format_noise(math.inf) == "inf"
