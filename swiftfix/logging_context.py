"""Per-funnel session ids on log records.

Each BookingFunnel logs through its own ``SessionLogger``, so every record
it emits carries that funnel's ``session_id`` no matter how many other
funnels are alive in the same process. Records from loggers used outside
a funnel get ``NO_SESSION``, so a ``%(session_id)s`` format never fails.

Usage:
    from swiftfix.logging_context import get_session_logger, new_session_id

    log = get_session_logger(__name__, new_session_id())
    log.info("Brand selected")  # record.session_id == "FUNNEL-3fa9c1d2"
"""

import logging
import uuid
from typing import Any, MutableMapping

NO_SESSION = "NO_SESSION"


def new_session_id(prefix: str = "FUNNEL") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


class SessionIdFilter(logging.Filter):
    """Fills in ``session_id`` for records that were not logged through a session."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "session_id"):
            record.session_id = NO_SESSION  # type: ignore[attr-defined]
        return True


class SessionLogger(logging.LoggerAdapter):
    """Logger bound to one funnel session.

    Caller-supplied ``extra`` is merged in; the bound ``session_id`` wins
    unless the caller sets one explicitly.
    """

    def __init__(self, logger: logging.Logger, session_id: str) -> None:
        super().__init__(logger, {"session_id": session_id})

    @property
    def session_id(self) -> str:
        return self.extra["session_id"]  # type: ignore[index]

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("session_id", self.session_id)
        kwargs["extra"] = extra
        return msg, kwargs


def get_session_logger(name: str, session_id: str) -> SessionLogger:
    """Return a ``SessionLogger`` for ``session_id`` over the logger ``name``."""
    base = logging.getLogger(name)
    if not any(isinstance(f, SessionIdFilter) for f in base.filters):
        base.addFilter(SessionIdFilter())
    return SessionLogger(base, session_id)
