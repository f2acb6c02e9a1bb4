"""Logging utilities."""

from __future__ import annotations

import contextlib
import contextvars
import logging
from typing import Any, Iterator

from rich.logging import RichHandler


_sermon_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("sermonweaver_sermon_id", default="-")
_op_var: contextvars.ContextVar[str] = contextvars.ContextVar("sermonweaver_op", default="-")


class _ContextFilter(logging.Filter):
    """Inject sermon context into log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.sermon_id = _sermon_id_var.get()  # type: ignore[attr-defined]
        record.op = _op_var.get()  # type: ignore[attr-defined]
        return True


@contextlib.contextmanager
def sermon_context(*, sermon_id: str | None, op: str | None = None) -> Iterator[None]:
    """Temporarily bind sermon context for structured logging.

    Args:
        sermon_id: Sermon identifier (``-`` when unknown).
        op: Optional operation name, e.g. ``canonicalize``.
    """

    token_sermon = _sermon_id_var.set(sermon_id or "-")
    token_op = _op_var.set(op or _op_var.get())
    try:
        yield
    finally:
        _sermon_id_var.reset(token_sermon)
        _op_var.reset(token_op)


def configure_logging(level: str = "INFO") -> None:
    """Configure application logging.

    Args:
        level: Logging level name.
    """

    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s sermon=%(sermon_id)s op=%(op)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root = logging.getLogger()
    root.setLevel(level)
    # Avoid duplicate handlers if configure_logging is called multiple times
    rich_handlers = [h for h in root.handlers if isinstance(h, RichHandler)]
    if not rich_handlers:
        handler = RichHandler(rich_tracebacks=True, show_time=True, show_level=True)
        handler.addFilter(_ContextFilter())
        handler.setFormatter(formatter)
        root.addHandler(handler)
        return

    for h in rich_handlers:
        if not any(isinstance(f, _ContextFilter) for f in h.filters):
            h.addFilter(_ContextFilter())
        h.setFormatter(formatter)


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""

    return logging.getLogger(name)


def log_exception(logger: logging.Logger, msg: str, **context: Any) -> None:
    """Log an exception with optional structured context."""

    if context:
        logger.exception("%s | context=%s", msg, context)
    else:
        logger.exception("%s", msg)
