"""
RequestContext management.
Use ContextVar to share request-scoped values (request id, caller uid,
deadline) across async execution.
"""

import time
import uuid
from contextvars import ContextVar
from typing import Optional


# Context variable for Request ID (UUID).
_request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
# Caller identity set by the authentication dependency.
_uid_var: ContextVar[Optional[str]] = ContextVar("uid", default=None)
# Absolute deadline on the monotonic clock.
_deadline_var: ContextVar[Optional[float]] = ContextVar("deadline", default=None)


def get_request_id() -> Optional[str]:
    """Get the current Request ID."""
    return _request_id_var.get()


def generate_request_id() -> str:
    """
    Generate and set a new Request ID (UUID) for the current context.
    """
    new_id = str(uuid.uuid4())
    _request_id_var.set(new_id)
    return new_id


def get_uid() -> Optional[str]:
    """Get the authenticated caller id, if any."""
    return _uid_var.get()


def set_uid(uid: str) -> None:
    _uid_var.set(uid)


def set_deadline(timeout: float) -> float:
    """
    Set the request deadline `timeout` seconds from now.

    Returns:
        The absolute deadline (monotonic seconds)
    """
    deadline = time.monotonic() + timeout
    _deadline_var.set(deadline)
    return deadline


def remaining_timeout() -> Optional[float]:
    """
    Seconds left before the request deadline.

    Returns None when no deadline is set. Never negative.
    """
    deadline = _deadline_var.get()
    if deadline is None:
        return None
    return max(deadline - time.monotonic(), 0.0)


def clear_request_context() -> None:
    """Clear every request-scoped value."""
    _request_id_var.set(None)
    _uid_var.set(None)
    _deadline_var.set(None)
