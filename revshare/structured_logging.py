"""
JSON-lines logging for revshare.

`configure_structured_logging` installs one stream handler on the `revshare`
logger; `log_event` writes one compact JSON object per event through any
logger, falling back to key=value text when a field does not serialize.
Applications normally call `RevenueConfig.configure_logging()` once at startup.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict

Json = Dict[str, Any]


def _now_ms() -> int:
    return int(time.time() * 1000)


def configure_structured_logging(level_name: str = "INFO") -> None:
    """Configure stdlib logging for JSONL output on the ``revshare`` logger.

    - Dependency-free.
    - Unknown level names fall back to INFO.
    - Safe to call multiple times (only the level is updated on repeat calls).
    """
    level = getattr(logging, (level_name or "INFO").strip().upper(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger("revshare")
    if getattr(root, "_revshare_configured", False):  # type: ignore[attr-defined]
        root.setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setLevel(logging.NOTSET)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root.handlers = [handler]
    root.setLevel(level)
    root.propagate = False
    setattr(root, "_revshare_configured", True)  # type: ignore[attr-defined]


def log_event(logger: logging.Logger, event: str, level: int = logging.INFO, **fields: Any) -> None:
    if not logger.isEnabledFor(level):
        return
    payload: Json = {"ts_ms": _now_ms(), "event": event}
    payload.update(fields)
    try:
        logger.log(level, json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False))
    except (TypeError, ValueError):
        parts = [f"event={event}"] + [f"{k}={fields.get(k)!r}" for k in sorted(fields.keys())]
        logger.log(level, " ".join(parts))
