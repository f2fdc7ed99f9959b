from __future__ import annotations

import os
import sys
from pathlib import Path

APP_NAME = "payref"


def default_data_dir() -> Path:
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME
    if sys.platform.startswith("win"):
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA") or str(Path.home())
        return Path(base) / APP_NAME
    base = os.environ.get("XDG_STATE_HOME") or str(Path.home() / ".local" / "state")
    return Path(base) / APP_NAME


def default_log_dir() -> Path:
    # per-user location, never inside the installed package
    return default_data_dir() / "LOG"


def resolve_log_dir(log_dir: str | None) -> Path:
    ld = Path(log_dir) if log_dir else default_log_dir()
    ld.mkdir(parents=True, exist_ok=True)
    return ld
