from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any

import yaml


logger = logging.getLogger(__name__)

_YAML_SUFFIXES = {".yaml", ".yml"}


class SampleLoadError(ValueError):
    """Raised when a sample file is missing or holds unusable values."""


def load_samples(path: str | Path) -> dict[str, list[float]]:
    """Read named sample sets from a JSON, YAML or plain-text file.

    JSON and YAML files hold either a list of values, named after the file
    stem, or a mapping of name to list. Text files hold one value per line,
    with ``#`` starting a comment.
    """
    path_obj = Path(path)
    if not path_obj.exists():
        raise SampleLoadError(f"Sample file not found: {path_obj}")
    text = path_obj.read_text(encoding="utf-8")

    suffix = path_obj.suffix.lower()
    if suffix == ".json":
        try:
            payload: Any = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SampleLoadError(f"Invalid JSON in {path_obj}: {exc}") from exc
    elif suffix in _YAML_SUFFIXES:
        try:
            payload = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise SampleLoadError(f"Invalid YAML in {path_obj}: {exc}") from exc
    else:
        payload = _parse_text_lines(text, source=path_obj)

    if isinstance(payload, list):
        sample_sets = {path_obj.stem: _coerce_samples(payload, name=path_obj.stem)}
    elif isinstance(payload, dict) and payload:
        sample_sets = {
            str(name): _coerce_samples(values, name=str(name))
            for name, values in payload.items()
        }
    else:
        raise SampleLoadError(f"Sample file must hold a list or a mapping of lists: {path_obj}")

    for name, values in sample_sets.items():
        logger.debug("loaded %d samples for %s from %s", len(values), name, path_obj)
    return sample_sets


def _parse_text_lines(text: str, *, source: Path) -> list[str]:
    values: list[str] = []
    for line in text.splitlines():
        stripped = line.split("#", 1)[0].strip()
        if stripped:
            values.append(stripped)
    if not values:
        raise SampleLoadError(f"No samples found in {source}")
    return values


def _coerce_samples(values: Any, *, name: str) -> list[float]:
    if not isinstance(values, list):
        raise SampleLoadError(f"{name} must be a list of numeric values")
    output: list[float] = []
    for value in values:
        if isinstance(value, bool):
            raise SampleLoadError(f"{name} must contain only numeric values")
        try:
            parsed = float(value)
        except (TypeError, ValueError) as exc:
            raise SampleLoadError(f"{name} contains non-numeric value: {value!r}") from exc
        if not math.isfinite(parsed):
            raise SampleLoadError(f"{name} contains non-finite value")
        output.append(parsed)
    if not output:
        raise SampleLoadError(f"{name} must not be empty")
    return output
