"""YAML config loader with environment fallback and runtime get/set."""

import json
import os
from pathlib import Path
from typing import Any

import yaml

from widget.config.defaults import API_KEY_ENV
from widget.config.schema import WidgetConfig


def load_config(path: str | Path | None = None) -> WidgetConfig:
    """Load and validate config from a YAML file.

    A missing file yields the defaults. If no API key is set in the YAML,
    falls back to the WEATHERAPI_KEY environment variable.
    """
    raw: dict[str, Any] = {}
    if path is not None:
        path = Path(path)
        if path.exists():
            with open(path) as f:
                raw = yaml.safe_load(f) or {}

    provider = raw.setdefault("provider", {}) or {}
    if not provider.get("api_key"):
        provider["api_key"] = os.environ.get(API_KEY_ENV, "")
    raw["provider"] = provider

    return WidgetConfig(**raw)


def get_config_value(config: WidgetConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'provider.forecast_days'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def set_config_value(config: WidgetConfig, dotted_key: str, value: Any) -> WidgetConfig:
    """Set a config value by dotted key path and re-validate.

    Returns a new WidgetConfig instance.
    """
    data = json.loads(config.model_dump_json())
    parts = dotted_key.split(".")
    target = data
    for part in parts[:-1]:
        target = target[part]
    if parts[-1] not in target:
        raise KeyError(f"Config key not found: {dotted_key}")
    old_value = target[parts[-1]]
    if isinstance(old_value, bool) and isinstance(value, str):
        value = value.strip().lower() in ("1", "true", "yes", "on")
    elif isinstance(old_value, int) and isinstance(value, str):
        value = int(value)
    elif isinstance(old_value, float) and isinstance(value, str):
        value = float(value)
    target[parts[-1]] = value
    return WidgetConfig(**data)


def save_config_value(path: str | Path, dotted_key: str, value: Any) -> WidgetConfig:
    """Validate a dotted-key update and write it back to the YAML file.

    Only the changed key is patched into the file's own contents, so values
    that came from defaults or the environment are not written out.
    """
    path = Path(path)
    new_config = set_config_value(load_config(path), dotted_key, value)

    raw: dict[str, Any] = {}
    if path.exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}

    parts = dotted_key.split(".")
    target = raw
    for part in parts[:-1]:
        if not isinstance(target.get(part), dict):
            target[part] = {}
        target = target[part]
    target[parts[-1]] = get_config_value(new_config, dotted_key)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(raw, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
    return new_config
