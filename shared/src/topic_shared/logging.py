"""Structured logging with request_id/trace_id correlation."""
import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Any

import structlog

request_id_var: ContextVar[str] = ContextVar("request_id", default="")
trace_id_var: ContextVar[str] = ContextVar("trace_id", default="")


def get_request_id() -> str:
    return request_id_var.get() or ""


def get_trace_id() -> str:
    return trace_id_var.get() or ""


def set_request_context(request_id: str | None = None, trace_id: str | None = None) -> None:
    request_id_var.set(request_id or str(uuid.uuid4()))
    trace_id_var.set(trace_id or request_id_var.get())


def clear_request_context() -> None:
    request_id_var.set("")
    trace_id_var.set("")


def add_request_context(
    logger: Any,
    method: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Processor to inject request_id and trace_id into log events."""
    rid = get_request_id()
    tid = get_trace_id()
    if rid:
        event_dict.setdefault("request_id", rid)
    if tid:
        event_dict.setdefault("trace_id", tid)
    return event_dict


def configure_logging(json_logs: bool = True, level: int = logging.INFO) -> None:
    """Configure structlog for JSON (services) or console (CLI) output.

    Console output goes to stderr so that a CLI can keep stdout for the
    generated text.
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        add_request_context,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if json_logs:
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))
        stream = sys.stdout
    else:
        processors.append(structlog.dev.ConsoleRenderer())
        stream = sys.stderr

    structlog.configure(
        processors=processors,
        context_class=dict,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )
