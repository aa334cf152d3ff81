from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator, Optional


_TRACE_ID_CTX: ContextVar[str] = ContextVar("trace_id", default="unknown")
# fields describing the observation being assessed, attached to every event
_OBSERVATION_CTX: ContextVar[Dict[str, Any]] = ContextVar("observation", default={})
_LOGGER = logging.getLogger("kisan.events")
_INITIALIZED = False


def init_logging(*, log_path: Optional[str] = None, level: str = "INFO") -> None:
    global _INITIALIZED
    if _INITIALIZED:
        return
    handlers = []
    if log_path:
        path = Path(log_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                path, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
            )
        )
    else:
        handlers.append(logging.StreamHandler())
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s %(levelname)s %(message)s",
        handlers=handlers,
    )
    _LOGGER.setLevel(resolved)
    _INITIALIZED = True


def set_trace_id(trace_id: str):
    return _TRACE_ID_CTX.set(trace_id)


def reset_trace_id(token) -> None:
    _TRACE_ID_CTX.reset(token)


def get_trace_id() -> str:
    value = _TRACE_ID_CTX.get()
    return value or "unknown"


@contextmanager
def bind_observation(**fields: Any) -> Iterator[None]:
    """Attach observation fields (crop, raw readings) to events logged inside the block."""
    merged = {**_OBSERVATION_CTX.get(), **{k: v for k, v in fields.items() if v is not None}}
    token = _OBSERVATION_CTX.set(merged)
    try:
        yield
    finally:
        _OBSERVATION_CTX.reset(token)


def _build_payload(event: str, fields: Dict[str, Any]) -> str:
    payload: Dict[str, Any] = {"event": event, "trace_id": get_trace_id()}
    observation = _OBSERVATION_CTX.get()
    if observation:
        payload["observation"] = observation
    payload.update(fields)
    return json.dumps(payload, ensure_ascii=True, default=str)


def log_event(event: str, **fields: Any) -> None:
    _LOGGER.info(_build_payload(event, fields))


def log_error_event(event: str, **fields: Any) -> None:
    _LOGGER.error(_build_payload(event, fields))
