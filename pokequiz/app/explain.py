from __future__ import annotations

"""Explain-mode tracing and operator warnings.

Tracing is off by default; the CLI `--explain` flag turns it on. Each
milestone is one terse line: `[EXPLAIN] event :: {json}`.
"""

import json
import sys
from typing import Any, Callable, Dict, List

_ENABLED = False
_SINKS: List[Callable[[str], None]] = []


def enable(flag: bool = True) -> None:
    global _ENABLED
    _ENABLED = bool(flag)


def add_sink(sink: Callable[[str], None]) -> None:
    """Also deliver trace lines to sink (tests, log files)."""
    _SINKS.append(sink)


def remove_sink(sink: Callable[[str], None]) -> None:
    if sink in _SINKS:
        _SINKS.remove(sink)


def _emit(line: str) -> None:
    if not _SINKS:
        print(line)
        return
    for s in list(_SINKS):
        try:
            s(line)
        except Exception:
            # best effort
            pass


def trace(event: str, payload: Dict[str, Any] | None = None) -> None:
    if not _ENABLED:
        return
    try:
        body = json.dumps(payload or {}, separators=(",", ":"), ensure_ascii=False, default=str)
        _emit(f"[EXPLAIN] {event} :: {body}")
    except (TypeError, ValueError):
        _emit(f"[EXPLAIN] {event}")


def warn(msg: str) -> None:
    print(f"[WARN] {msg}", file=sys.stderr)
