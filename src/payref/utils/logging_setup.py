from __future__ import annotations

import json
import logging
import os
import socket
import threading
import traceback
from collections import deque
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from payref.utils.log_context import get_context_fields

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}

DEFAULT_MAX_LINES = 5000


def _env_flag(name: str, default: bool) -> bool:
    raw = str(os.environ.get(name, "")).strip().lower()
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    return default


class LineCappedFileHandler(logging.Handler):
    """
    Single log file with "ring buffer" behavior:
    - appends normally
    - once it grows beyond max_lines (+ small chunk), it truncates to last max_lines
    """

    def __init__(self, filename: Path, *, max_lines: int = DEFAULT_MAX_LINES, encoding: str = "utf-8"):
        super().__init__()
        self._filename = Path(filename)
        self._encoding = encoding
        self.max_lines = int(max_lines)
        # trim every N extra lines to avoid rewriting on every emit
        self._trim_chunk = max(10, self.max_lines // 100)
        self._mtx = threading.RLock()
        self._stream = None
        self._line_count = 0
        self._open_and_count()

    def _open_and_count(self) -> None:
        self._filename.parent.mkdir(parents=True, exist_ok=True)
        if self._filename.exists():
            with open(self._filename, "r", encoding=self._encoding, errors="ignore") as rf:
                self._line_count = sum(1 for _ in rf)
        else:
            self._line_count = 0
        self._stream = open(self._filename, "a", encoding=self._encoding, errors="backslashreplace")

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            if not msg.endswith("\n"):
                msg += "\n"
            with self._mtx:
                if self._stream is None:
                    self._open_and_count()
                self._stream.write(msg)
                self._stream.flush()
                self._line_count += msg.count("\n")
                if self._line_count >= self.max_lines + self._trim_chunk:
                    self._trim_to_last_max_lines()
        except Exception:
            self.handleError(record)

    def _trim_to_last_max_lines(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None
        with open(self._filename, "r", encoding=self._encoding, errors="ignore") as rf:
            tail = deque(rf, maxlen=self.max_lines)
        with open(self._filename, "w", encoding=self._encoding, errors="backslashreplace") as wf:
            wf.writelines(tail)
        self._line_count = len(tail)
        self._stream = open(self._filename, "a", encoding=self._encoding, errors="backslashreplace")

    def close(self) -> None:
        with self._mtx:
            if self._stream is not None:
                self._stream.close()
            self._stream = None
        super().close()


class ContextFilter(logging.Filter):
    """Adds hostname and the current log_context fields to every record."""

    def __init__(self) -> None:
        super().__init__()
        self._hostname = socket.gethostname()

    def filter(self, record: logging.LogRecord) -> bool:
        record.hostname = self._hostname
        record.context = get_context_fields()
        return True


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record, for machine reading."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "funcName": record.funcName,
            "line": record.lineno,
            "process": record.process,
            "threadName": record.threadName,
            "hostname": getattr(record, "hostname", None),
            "event_name": getattr(record, "event_name", None),
            "context": getattr(record, "context", None) or get_context_fields(),
        }
        extra_obj = getattr(record, "extra_payload", None)
        if extra_obj:
            payload["extra"] = extra_obj
        if record.exc_info:
            payload["exception"] = "".join(traceback.format_exception(*record.exc_info))
        return json.dumps(payload, ensure_ascii=False, default=str)


_ROOT_CONFIGURED = False
_ROOT_CONFIG_LOCK = threading.Lock()


def _compute_max_lines() -> int:
    env_max = os.environ.get("PAYREF_LOG_MAX_LINES")
    if env_max:
        try:
            val = int(env_max)
            if val > 0:
                return val
        except ValueError:
            pass
    return DEFAULT_MAX_LINES


def setup_logging(log_dir: Path, name: str = "payref") -> logging.Logger:
    """
    Configures on the root logger:
      <log_dir>/payref.log           human readable
      <log_dir>/payref_events.jsonl  JSON lines
    both capped to the last max_lines lines.

    Level is INFO; per-reference DEBUG records need PAYREF_LOG_DEBUG=1.
    Console logging is off by default; enable via PAYREF_LOG_CONSOLE=1.
    Calling it again only returns the named logger.
    """
    global _ROOT_CONFIGURED

    log_dir.mkdir(parents=True, exist_ok=True)
    logger = logging.getLogger(name)
    max_lines = _compute_max_lines()

    with _ROOT_CONFIG_LOCK:
        if not _ROOT_CONFIGURED:
            level = logging.DEBUG if _env_flag("PAYREF_LOG_DEBUG", False) else logging.INFO
            root = logging.getLogger()
            root.setLevel(level)

            fmt = logging.Formatter(
                "%(asctime)s.%(msecs)03d %(levelname)s pid=%(process)d host=%(hostname)s "
                "[%(name)s:%(funcName)s:%(lineno)d] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
            ctx_filter = ContextFilter()

            fh = LineCappedFileHandler(log_dir / "payref.log", max_lines=max_lines)
            fh.setLevel(level)
            fh.setFormatter(fmt)
            fh.addFilter(ctx_filter)
            root.addHandler(fh)

            fh_json = LineCappedFileHandler(log_dir / "payref_events.jsonl", max_lines=max_lines * 2)
            fh_json.setLevel(logging.INFO)
            fh_json.setFormatter(JsonLineFormatter())
            fh_json.addFilter(ctx_filter)
            root.addHandler(fh_json)

            if _env_flag("PAYREF_LOG_CONSOLE", False):
                ch = logging.StreamHandler()
                ch.setLevel(logging.INFO)
                ch.setFormatter(fmt)
                ch.addFilter(ctx_filter)
                root.addHandler(ch)

            setattr(root, "_payref_log_detail", _env_flag("PAYREF_LOG_DETAIL", True))
            _ROOT_CONFIGURED = True

    logger.propagate = True
    log_event(logger, "logging.start", "Logging initialized", log_dir=str(log_dir), max_lines=max_lines)
    return logger


def log_event(logger: logging.Logger, event_name: str, message: str, **extra: Any) -> None:
    """
    Structured INFO record:
    - event_name and extra_payload go to the JSON log
    - the text log gets a readable key=value suffix
    Without the detail flag, values whose repr exceeds 400 chars are dropped.
    """
    extra_payload: Dict[str, Any] = dict(extra)
    if not bool(getattr(logging.getLogger(), "_payref_log_detail", True)):
        extra_payload = {k: v for k, v in extra_payload.items() if len(repr(v)) <= 400}

    suffix = ""
    if extra_payload:
        suffix = " | " + " ".join(f"{k}={extra_payload[k]!r}" for k in sorted(extra_payload))
    logger.info(
        f"{message}{suffix}",
        extra={"event_name": event_name, "extra_payload": extra_payload},
    )
