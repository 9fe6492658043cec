from __future__ import annotations
import logging
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

EventCallback = Callable[[Dict[str, Any]], None]


class Events:
    """
    Wraps an optional user callback for lifecycle events.
    Event payload: {"phase": "open.done", "path": "...", ...extra}
    """
    def __init__(self, callback: Optional[EventCallback] = None) -> None:
        self._cb = callback

    def emit(self, phase: str, path: str, **extra: Any) -> None:
        if self._cb is None:
            return
        evt: Dict[str, Any] = {"phase": phase, "path": path}
        evt.update(extra)
        try:
            self._cb(evt)
        except Exception:
            # a broken callback must not change the handle's state
            logger.exception("on_event callback failed for phase %s", phase)
