from __future__ import annotations

import importlib
import json
import sys
import time
from datetime import datetime, timezone
from typing import Any, Callable


def import_func(path: str) -> Callable[..., Any]:
    """Import a callable from a string like 'pkg.mod:function'."""
    if ":" not in path:
        raise ValueError(f"Invalid func path '{path}'. Expected 'module:function'.")
    mod_name, fn_name = path.split(":", 1)
    mod = importlib.import_module(mod_name)
    fn = getattr(mod, fn_name, None)
    if fn is None or not callable(fn):
        raise ValueError(f"'{path}' does not resolve to a callable.")
    return fn


def now_ts() -> float:
    return time.time()


def emit_log(event: str, **fields: Any) -> None:
    """Write one structured log record (a JSON line) to stderr."""
    payload = {"ts": datetime.now(timezone.utc).isoformat(), "event": event, **fields}
    # One write per record so lines from worker threads never interleave
    sys.stderr.write(json.dumps(payload, ensure_ascii=False) + "\n")
