"""
Per-session logging for the workflow editor.

``SessionLogger`` tags every record with the editor session id so the
gesture stream of one editor can be followed in shared logs.
"""

from __future__ import annotations

import logging
from logging import getLogger
from typing import Any, MutableMapping, Optional, Tuple

_LOGGER_NAME = "workflow_editor.session"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class SessionLogger(logging.LoggerAdapter):
    """Logger adapter that prefixes messages with ``[session_id]``."""

    def __init__(self, session_id: str, logger: Optional[logging.Logger] = None) -> None:
        super().__init__(logger or getLogger(_LOGGER_NAME), {"session_id": session_id})
        self.session_id = session_id

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("session_id", self.session_id)
        kwargs["extra"] = extra
        return f"[{self.session_id}] {msg}", kwargs

    def event(self, name: str, **details: Any) -> None:
        """Log an editor event at INFO with ``key=value`` details."""
        if details:
            rendered = " ".join(f"{k}={v}" for k, v in details.items())
            self.info(f"{name} {rendered}")
        else:
            self.info(name)


def get_session_logger(session_id: str) -> SessionLogger:
    """Return a new logger adapter tagged with ``session_id``."""
    return SessionLogger(session_id)


def configure_logging(level: str = "INFO") -> None:
    """Attach a stream handler to the ``workflow_editor`` logger tree."""
    root = getLogger("workflow_editor")
    root.setLevel(level.upper())
    if not any(getattr(h, "_workflow_editor", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._workflow_editor = True  # type: ignore[attr-defined]
        root.addHandler(handler)
