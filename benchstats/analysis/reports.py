from __future__ import annotations

from dataclasses import dataclass, field
import json
import logging
import math
from typing import Any, Sequence

from benchstats.analysis.plots import HistogramRenderer
from benchstats.analysis.statistics import (
    FittedHistogram,
    compute_noise,
    compute_percentiles,
    fit_histogram,
)


logger = logging.getLogger(__name__)

DEFAULT_BINS = 40
DEFAULT_COUNT_THRESH_FRAC = 0.05
DEFAULT_PERCENTILES = (0, 25, 50, 75, 90, 99, 100)


@dataclass(frozen=True)
class SampleSummary:
    name: str
    sample_count: int
    mean: float
    min_value: float
    max_value: float
    noise: float
    percentiles: list[tuple[int, float]]
    fitted: FittedHistogram
    chart: str
    axis: str
    notes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "sample_count": self.sample_count,
            "mean": self.mean,
            "min": self.min_value,
            "max": self.max_value,
            "noise": self.noise if math.isfinite(self.noise) else None,
            "percentiles": {f"p{percentile}": value for percentile, value in self.percentiles},
            "histogram": {
                "min": self.fitted.min,
                "stride": self.fitted.stride,
                "bins": self.fitted.bins,
                "counts": list(self.fitted.histogram),
            },
            "chart": self.chart,
            "notes": list(self.notes),
        }


def summarize_samples(
    name: str,
    samples: Sequence[float],
    *,
    bins: int = DEFAULT_BINS,
    count_thresh_frac: float = DEFAULT_COUNT_THRESH_FRAC,
    percentiles: Sequence[int] = DEFAULT_PERCENTILES,
) -> SampleSummary:
    if not samples:
        raise ValueError(f"{name}: samples must not be empty")
    if bins < 1:
        raise ValueError("bins must be >= 1")

    data = sorted(float(value) for value in samples)
    total = math.fsum(data)
    count = len(data)

    notes: list[str] = []
    noise = compute_noise(data, total)
    if not math.isfinite(noise):
        notes.append("Too few samples or zero mean: noise is not meaningful.")

    low, stride = _initial_window(data, bins)
    fitted = fit_histogram(data, low, stride, bins, count_thresh_frac)
    trimmed = fitted.underflow + fitted.overflow
    if trimmed:
        notes.append(f"{trimmed} of {count} samples fall outside the fitted histogram window.")
    logger.debug(
        "%s: fitted window min=%g stride=%g bins=%d (underflow=%d, overflow=%d)",
        name,
        fitted.min,
        fitted.stride,
        fitted.bins,
        fitted.underflow,
        fitted.overflow,
    )

    renderer = HistogramRenderer(fitted.histogram, min=fitted.min, stride=fitted.stride)
    return SampleSummary(
        name=name,
        sample_count=count,
        mean=total / count,
        min_value=data[0],
        max_value=data[-1],
        noise=noise,
        percentiles=list(zip(percentiles, compute_percentiles(data, percentiles))),
        fitted=fitted,
        chart=renderer.render(),
        axis=renderer.axis(format_duration),
        notes=notes,
    )


def generate_markdown_report(summaries: Sequence[SampleSummary], *, title: str = "Benchmark Samples") -> str:
    percentile_keys = _percentile_keys(summaries)
    header = ["Name", "Samples", "Mean", "Noise"] + [f"p{key}" for key in percentile_keys]

    lines: list[str] = [
        f"# {title}",
        "",
        "| " + " | ".join(header) + " |",
        "|" + "|".join("---" for _ in header) + "|",
    ]
    for summary in summaries:
        by_key = dict(summary.percentiles)
        row = [
            f"`{summary.name}`",
            str(summary.sample_count),
            format_duration(summary.mean),
            format_noise(summary.noise),
        ] + [format_duration(by_key[key]) if key in by_key else "-" for key in percentile_keys]
        lines.append("| " + " | ".join(row) + " |")

    for summary in summaries:
        lines.extend(["", f"## {summary.name}", ""])
        for note in summary.notes:
            lines.append(f"- {note}")
        if summary.notes:
            lines.append("")
        lines.extend(["```text", summary.chart + summary.axis, "```"])

    return "\n".join(lines).strip() + "\n"


def generate_json_report(summaries: Sequence[SampleSummary]) -> str:
    return json.dumps({"samples": [summary.to_dict() for summary in summaries]}, indent=2)


def generate_text_report(summaries: Sequence[SampleSummary]) -> str:
    blocks: list[str] = []
    for summary in summaries:
        stats = ", ".join(f"p{key}={format_duration(value)}" for key, value in summary.percentiles)
        blocks.append(
            "\n".join(
                [
                    f"{summary.name}: n={summary.sample_count}, mean={format_duration(summary.mean)}, "
                    f"noise={format_noise(summary.noise)}",
                    f"  {stats}" if stats else "",
                    summary.chart + summary.axis,
                ]
            )
        )
    return "\n\n".join(blocks) + "\n"


def format_duration(seconds: float) -> str:
    if not math.isfinite(seconds):
        return "inf"
    magnitude = abs(seconds)
    if magnitude < 1e-6:
        return f"{seconds * 1e9:.1f}ns"
    if magnitude < 1e-3:
        return f"{seconds * 1e6:.2f}us"
    if magnitude < 1:
        return f"{seconds * 1e3:.2f}ms"
    return f"{seconds:.3f}s"


def format_noise(noise: float) -> str:
    if not math.isfinite(noise):
        return "inf"
    return f"{noise * 100:.2f}%"


def _initial_window(data: Sequence[float], bins: int) -> tuple[float, float]:
    low = data[0]
    high = data[-1]
    if high > low:
        return low, (high - low) / bins
    # all samples equal: centre the value inside the middle bin
    span = abs(low) if low != 0.0 else 1.0
    stride = span / bins
    return low - stride * (bins // 2 + 0.5), stride


def _percentile_keys(summaries: Sequence[SampleSummary]) -> list[int]:
    keys: list[int] = []
    for summary in summaries:
        for key, _ in summary.percentiles:
            if key not in keys:
                keys.append(key)
    return keys
