from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml


DEFAULT_CONFIG_NAME = "config.yaml"


def load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is not None and not isinstance(data, dict):
        raise ValueError(f"{path}: top level of the config must be a mapping")
    return data or {}


def deep_get(d: Dict[str, Any], keys: list[str], default: Any = None) -> Any:
    cur: Any = d
    for k in keys:
        if not isinstance(cur, dict) or k not in cur:
            return default
        cur = cur[k]
    return cur


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """Load config and make sure the known sections exist."""
    cfg = load_yaml(path or Path(DEFAULT_CONFIG_NAME))
    cfg.setdefault("app", {})
    cfg.setdefault("validation", {})
    return cfg
