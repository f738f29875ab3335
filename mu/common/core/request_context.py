"""
Per-invocation identifiers shared with the log formatter.

The invocation loop binds them before calling the handler and clears them
afterwards, so any log line emitted in between carries them.
"""

from contextvars import ContextVar
from typing import Optional

from .trace import TraceId

_request_id: ContextVar[Optional[str]] = ContextVar("mu_request_id", default=None)
# Normalised trace header (Root=...;Parent=...;Sampled=...)
_trace_id: ContextVar[Optional[str]] = ContextVar("mu_trace_id", default=None)


def get_request_id() -> Optional[str]:
    return _request_id.get()


def get_trace_id() -> Optional[str]:
    return _trace_id.get()


def set_request_id(request_id: str) -> str:
    _request_id.set(request_id)
    return request_id


def set_trace_id(header: str) -> str:
    """
    Bind the invocation's trace.

    Args:
        header: value of the lambda-runtime-trace-id header

    Returns:
        The normalised header that was bound
    """
    normalised = str(TraceId.parse(header))
    _trace_id.set(normalised)
    return normalised


def clear_request_context() -> None:
    for var in (_request_id, _trace_id):
        var.set(None)
