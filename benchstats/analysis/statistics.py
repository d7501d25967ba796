from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass
import math
from typing import Sequence


MIN_NOISE_SAMPLES = 5


@dataclass(frozen=True)
class HistogramWindow:
    min: float
    stride: float
    bins: int

    @property
    def max(self) -> float:
        return self.min + self.stride * self.bins

    def edge(self, index: int) -> float:
        return self.min + self.stride * index


@dataclass(frozen=True)
class FittedHistogram:
    min: float
    stride: float
    bins: int
    histogram: list[int]

    @property
    def window(self) -> HistogramWindow:
        return HistogramWindow(min=self.min, stride=self.stride, bins=self.bins)

    @property
    def underflow(self) -> int:
        return self.histogram[0]

    @property
    def overflow(self) -> int:
        return self.histogram[-1]


def compute_noise(samples: Sequence[float], total: float) -> float:
    """Relative sample standard deviation of ``samples``.

    ``total`` is the precomputed sum of ``samples``. Fewer than
    ``MIN_NOISE_SAMPLES`` values are too few to estimate spread, so the
    result is ``math.inf`` instead of an error.
    """
    count = len(samples)
    if count < MIN_NOISE_SAMPLES:
        return math.inf

    first = samples[0]
    if all(value == first for value in samples):
        return 0.0

    mean = total / count
    sum_sq = 0.0
    for value in samples:
        diff = value - mean
        sum_sq += diff * diff
    std_dev = math.sqrt(sum_sq / (count - 1))
    if std_dev == 0.0:
        return 0.0
    if mean == 0.0:
        return math.inf
    return std_dev / mean


def compute_percentiles(sorted_samples: Sequence[float], percentiles: Sequence[int]) -> list[float]:
    """Nearest-rank percentiles; every result is an actual sample value."""
    if not percentiles:
        return []
    count = len(sorted_samples)
    if count == 0:
        raise ValueError("cannot compute percentile of empty values")

    output: list[float] = []
    for requested in percentiles:
        percentile = min(100, max(0, requested))
        if percentile == 100:
            index = count - 1
        else:
            index = int(math.floor(percentile * count / 100))
        output.append(sorted_samples[index])
    return output


def compute_histogram(
    sorted_samples: Sequence[float],
    min_value: float,
    stride: float,
    bins: int,
) -> list[int]:
    assert bins >= 1, "histogram needs at least one bin"
    assert stride >= 0.0, "histogram stride must be non-negative"

    count = len(sorted_samples)
    histogram: list[int] = []
    previous = 0
    for level in range(bins + 1):
        position = bisect_left(sorted_samples, min_value + stride * level, previous)
        histogram.append(position - previous)
        previous = position
    histogram.append(count - previous)
    return histogram


def fit_histogram(
    sorted_samples: Sequence[float],
    min_value: float,
    stride: float,
    bins: int,
    count_thresh_frac: float,
) -> FittedHistogram:
    """Narrow the window to the bins holding at least ``count_thresh_frac`` of the peak.

    Sparse bins are trimmed from both ends, walking inwards from the first
    interior bin and from the overflow slot. The surviving levels span from
    the lower edge of ``min_level`` to the upper edge of ``max_level`` and are
    redistributed over the same number of bins.
    """
    assert 0.0 <= count_thresh_frac <= 1.0, "count_thresh_frac must be in [0, 1]"

    histogram = compute_histogram(sorted_samples, min_value, stride, bins)
    threshold = max(histogram) * count_thresh_frac

    min_level = 1
    while min_level < bins + 1 and histogram[min_level] < threshold:
        min_level += 1

    max_level = bins + 1
    while max_level > min_level and histogram[max_level] < threshold:
        max_level -= 1

    low = min_value + stride * (min_level - 1)
    high = min_value + stride * max_level
    fitted_stride = (high - low) / bins

    return FittedHistogram(
        min=low,
        stride=fitted_stride,
        bins=bins,
        histogram=compute_histogram(sorted_samples, low, fitted_stride, bins),
    )
