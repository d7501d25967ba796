from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from benchstats.infra.config import (
    ConfigError,
    config_hash,
    deep_merge,
    parse_override_value,
    resolve_config,
)
from benchstats.infra.config_schema import ConfigValidationError


def test_deep_merge_is_deterministic() -> None:
    base = {"a": {"b": 1, "c": 2}, "x": 5}
    override = {"a": {"c": 9, "d": 10}, "y": True}
    merged = deep_merge(base, override)
    assert merged == {"a": {"b": 1, "c": 9, "d": 10}, "x": 5, "y": True}


def test_config_hash_is_order_independent() -> None:
    a = {"b": 1, "a": {"d": 2, "c": 3}}
    b = {"a": {"c": 3, "d": 2}, "b": 1}
    assert config_hash(a) == config_hash(b)


def test_resolve_config_defaults() -> None:
    resolved = resolve_config()
    assert resolved["histogram"]["bins"] == 40
    assert resolved["histogram"]["count_thresh_frac"] == 0.05
    assert resolved["percentiles"] == [0, 25, 50, 75, 90, 99, 100]
    assert resolved["report"]["format"] == "markdown"


def test_resolve_config_merges_file_and_overrides(tmp_path: Path) -> None:
    config_path = tmp_path / "report.yaml"
    config_path.write_text(
        yaml.safe_dump({"histogram": {"bins": 16}, "report": {"format": "json"}}),
        encoding="utf-8",
    )

    resolved = resolve_config(
        config_path=config_path,
        cli_overrides=["histogram.count_thresh_frac=0.2", "percentiles=[50, 99]"],
    )

    assert resolved["histogram"]["bins"] == 16
    assert resolved["histogram"]["count_thresh_frac"] == 0.2
    assert resolved["percentiles"] == [50, 99]
    assert resolved["report"]["format"] == "json"


def test_parse_override_value_types() -> None:
    assert parse_override_value("true") is True
    assert parse_override_value("null") is None
    assert parse_override_value("12") == 12
    assert parse_override_value("0.5") == 0.5
    assert parse_override_value("text") == "text"
    assert parse_override_value("[1, 2]") == [1, 2]


@pytest.mark.parametrize(
    "override",
    [
        "histogram.bins=0",
        "histogram.bins=true",
        "histogram.count_thresh_frac=1.5",
        "percentiles=[50, 101]",
        "report.format=html",
    ],
)
def test_resolve_config_rejects_invalid_values(override: str) -> None:
    with pytest.raises(ConfigValidationError):
        resolve_config(cli_overrides=[override])


def test_resolve_config_rejects_malformed_override() -> None:
    with pytest.raises(ConfigError):
        resolve_config(cli_overrides=["histogram.bins"])


def test_resolve_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        resolve_config(config_path=tmp_path / "missing.yaml")
