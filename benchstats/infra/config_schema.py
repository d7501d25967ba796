from __future__ import annotations

from typing import Any


class ConfigValidationError(ValueError):
    """Raised when resolved report config is invalid."""


REQUIRED_SECTIONS = ["histogram", "report"]

REQUIRED_FIELDS = [
    "histogram.bins",
    "histogram.count_thresh_frac",
    "percentiles",
    "report.format",
]

ALLOWED_REPORT_FORMATS = {"markdown", "json", "text"}


def _get_by_path(config: dict[str, Any], path: str) -> Any:
    current: Any = config
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            raise ConfigValidationError(f"Missing required field: {path}")
        current = current[part]
    return current


def _validate_histogram(config: dict[str, Any]) -> None:
    bins = _get_by_path(config, "histogram.bins")
    if isinstance(bins, bool) or not isinstance(bins, int) or bins < 1:
        raise ConfigValidationError("histogram.bins must be a positive int")

    frac = _get_by_path(config, "histogram.count_thresh_frac")
    if isinstance(frac, bool) or not isinstance(frac, (int, float)):
        raise ConfigValidationError("histogram.count_thresh_frac must be a number")
    if frac < 0.0 or frac > 1.0:
        raise ConfigValidationError("histogram.count_thresh_frac must be in [0.0, 1.0]")


def _validate_percentiles(config: dict[str, Any]) -> None:
    percentiles = _get_by_path(config, "percentiles")
    if not isinstance(percentiles, list):
        raise ConfigValidationError("percentiles must be a list of ints")
    for item in percentiles:
        if isinstance(item, bool) or not isinstance(item, int):
            raise ConfigValidationError("percentiles must contain only ints")
        if item < 0 or item > 100:
            raise ConfigValidationError("percentiles values must be in [0, 100]")


def validate_config(config: dict[str, Any]) -> None:
    for section in REQUIRED_SECTIONS:
        if not isinstance(config.get(section), dict):
            raise ConfigValidationError(f"Missing required section: {section}")
    for path in REQUIRED_FIELDS:
        _get_by_path(config, path)

    _validate_histogram(config)
    _validate_percentiles(config)

    report_format = _get_by_path(config, "report.format")
    if report_format not in ALLOWED_REPORT_FORMATS:
        allowed = ", ".join(sorted(ALLOWED_REPORT_FORMATS))
        raise ConfigValidationError(f"report.format must be one of [{allowed}]")
