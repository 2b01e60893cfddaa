"""Structured engine event log (JSONL), keyed by the parameter set that produced each event."""

from __future__ import annotations

import hashlib
import json
import os
import sys
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


# Every event the engine emits, with its fixed severity.
ENGINE_EVENT_LEVELS = {
    "invalid_parameters": "WARNING",
    "rate_optimized": "INFO",
    "rate_floor_unsafe": "WARNING",
    "uncaught_exception": "ERROR",
}

LOG_DIR: Path | None = None
RUNTIME_EVENTS_LOG_FILE: Path | None = None

_LOG_ROOT_ENV_VAR = "HERD_ENGINE_LOG_ROOT"

_EXCEPTION_HOOK_INSTALLED = False


def run_id_for(params: dict[str, Any]) -> str:
    """Stable short id for a parameter dict; identical inputs share an id across runs."""
    payload = json.dumps(params, sort_keys=True, default=str)
    return hashlib.sha1(payload.encode("utf-8")).hexdigest()[:12]


def configure_log_root(path_value: str | Path | None) -> Path | None:
    """Point engine events at a directory; None or blank disables the log file."""
    global LOG_DIR, RUNTIME_EVENTS_LOG_FILE
    text = str(path_value).strip() if path_value is not None else ""
    if not text:
        LOG_DIR = None
        RUNTIME_EVENTS_LOG_FILE = None
        return None
    LOG_DIR = Path(os.path.expandvars(os.path.expanduser(text)))
    RUNTIME_EVENTS_LOG_FILE = LOG_DIR / "runtime_events.jsonl"
    return LOG_DIR


def append_runtime_event(
    event: str,
    message: str,
    params: dict[str, Any] | None = None,
    detail: dict[str, Any] | None = None,
    exc: BaseException | None = None,
) -> None:
    """Append one engine event; `params` is the (possibly rate-free) parameter dict of the run."""
    level = ENGINE_EVENT_LEVELS.get(event)
    if level is None:
        raise ValueError(f"Unknown engine event {event!r}.")
    if LOG_DIR is None or RUNTIME_EVENTS_LOG_FILE is None:
        return

    record: dict[str, Any] = {
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "level": level,
        "event": event,
        "message": str(message),
        "run_id": run_id_for(params) if params is not None else None,
        "params": params or {},
        "detail": detail or {},
    }
    if exc is not None:
        record["exception_type"] = type(exc).__name__
        record["exception_message"] = str(exc)
        record["traceback"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        with RUNTIME_EVENTS_LOG_FILE.open("a", encoding="utf-8") as f:
            f.write(json.dumps(record, default=str, ensure_ascii=False) + "\n")
    except OSError:
        # Diagnostics should never change simulation results.
        pass


def read_runtime_events(limit: int = 200, event: str | None = None) -> list[dict[str, Any]]:
    """Most recent events, optionally only one kind; unreadable lines come back as `log_parse_error`."""
    if limit <= 0 or RUNTIME_EVENTS_LOG_FILE is None or not RUNTIME_EVENTS_LOG_FILE.exists():
        return []
    out: list[dict[str, Any]] = []
    for line in RUNTIME_EVENTS_LOG_FILE.read_text(encoding="utf-8").splitlines():
        try:
            record = json.loads(line)
        except json.JSONDecodeError:
            record = {"level": "ERROR", "event": "log_parse_error", "message": "Malformed log line encountered.", "detail": {"line": line}}
        if event is None or record.get("event") == event:
            out.append(record)
    return out[-int(limit) :]


def install_global_exception_logging() -> None:
    """Record uncaught exceptions from the command line as engine events."""
    global _EXCEPTION_HOOK_INSTALLED
    if _EXCEPTION_HOOK_INSTALLED:
        return
    old_hook = sys.excepthook

    def _hook(exc_type, exc, exc_tb):
        append_runtime_event(event="uncaught_exception", message=str(exc), exc=exc)
        old_hook(exc_type, exc, exc_tb)

    sys.excepthook = _hook
    _EXCEPTION_HOOK_INSTALLED = True


configure_log_root(os.getenv(_LOG_ROOT_ENV_VAR, ""))
