from benchstats.analysis.plots import GLYPHS, HistogramRenderer, format_axis, parse_chart, render_histogram
from benchstats.analysis.reports import (
    SampleSummary,
    generate_json_report,
    generate_markdown_report,
    generate_text_report,
    summarize_samples,
)
from benchstats.analysis.statistics import (
    FittedHistogram,
    HistogramWindow,
    compute_histogram,
    compute_noise,
    compute_percentiles,
    fit_histogram,
)

__all__ = [
    "FittedHistogram",
    "GLYPHS",
    "HistogramRenderer",
    "HistogramWindow",
    "SampleSummary",
    "compute_histogram",
    "compute_noise",
    "compute_percentiles",
    "fit_histogram",
    "format_axis",
    "generate_json_report",
    "generate_markdown_report",
    "generate_text_report",
    "parse_chart",
    "render_histogram",
    "summarize_samples",
]
