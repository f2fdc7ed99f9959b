from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from payref.utils.config import deep_get


@dataclass(frozen=True)
class ValidationSettings:
    # strict: Belgian references need exactly 12 significant digits, Dutch 16 or 17
    strict_length: bool = True


DEFAULT_SETTINGS = ValidationSettings()


def settings_from_config(cfg: Optional[Dict[str, Any]]) -> ValidationSettings:
    """Build settings from the `validation` section of a loaded YAML config."""
    strict = deep_get(cfg or {}, ["validation", "strict_length"], True)
    if strict is None:
        strict = True
    if not isinstance(strict, bool):
        raise ValueError(f"validation.strict_length must be a bool, got {strict!r}")
    return ValidationSettings(strict_length=strict)
