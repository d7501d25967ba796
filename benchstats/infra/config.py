from __future__ import annotations

import copy
import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from benchstats.infra.config_schema import validate_config


DEFAULTS_PATH = Path(__file__).resolve().parents[1] / "configs" / "defaults.yaml"


class ConfigError(ValueError):
    """Raised for config loading and merge failures."""


def load_yaml(path: str | Path) -> dict[str, Any]:
    path_obj = Path(path)
    if not path_obj.exists():
        raise ConfigError(f"Config file not found: {path_obj}")
    try:
        raw = yaml.safe_load(path_obj.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path_obj}: {exc}") from exc
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML root must be a mapping: {path_obj}")
    return raw


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def parse_override_value(raw: str) -> Any:
    lowered = raw.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    if lowered == "null":
        return None
    if raw.startswith("["):
        try:
            return yaml.safe_load(raw)
        except yaml.YAMLError:
            return raw
    try:
        if "." in raw or "e" in lowered:
            return float(raw)
        return int(raw)
    except ValueError:
        return raw


def set_by_path(target: dict[str, Any], path: str, value: Any) -> None:
    parts = path.split(".")
    cursor = target
    for part in parts[:-1]:
        if part not in cursor or not isinstance(cursor[part], dict):
            cursor[part] = {}
        cursor = cursor[part]
    cursor[parts[-1]] = value


def apply_cli_overrides(config: dict[str, Any], overrides: list[str] | None) -> dict[str, Any]:
    if not overrides:
        return config

    merged = copy.deepcopy(config)
    for item in overrides:
        if "=" not in item:
            raise ConfigError(f"Invalid override '{item}'. Expected dotted.path=value")
        key, raw_value = item.split("=", 1)
        set_by_path(merged, key.strip(), parse_override_value(raw_value.strip()))
    return merged


def canonical_json(data: dict[str, Any]) -> str:
    return json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=True)


def config_hash(data: dict[str, Any]) -> str:
    return hashlib.sha256(canonical_json(data).encode("utf-8")).hexdigest()


def resolve_config(
    config_path: str | Path | None = None,
    cli_overrides: list[str] | None = None,
    defaults_path: str | Path | None = None,
) -> dict[str, Any]:
    resolved = load_yaml(defaults_path or DEFAULTS_PATH)

    if config_path:
        resolved = deep_merge(resolved, load_yaml(config_path))
    resolved = apply_cli_overrides(resolved, cli_overrides)

    validate_config(resolved)
    return resolved
