"""
Request/task correlation fields kept in ContextVars.

The HTTP middleware sets request_id, auth sets user_id, share routes and the
notification task set share_id / task_id. The JSON log formatter copies
whatever is set onto every record.
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Any, Dict, Optional

CONTEXT_FIELDS = ("request_id", "task_id", "user_id", "share_id")

_vars: Dict[str, ContextVar[Optional[str]]] = {
    name: ContextVar(name, default=None) for name in CONTEXT_FIELDS
}


def set_context(**values: Optional[str]) -> None:
    """Set any of CONTEXT_FIELDS; None leaves a field untouched."""
    for name, value in values.items():
        if name not in _vars:
            raise TypeError(f"Unknown context field: {name}")
        if value is not None:
            _vars[name].set(str(value))


def clear_context() -> None:
    for var in _vars.values():
        var.set(None)


def get_context() -> Dict[str, Any]:
    return {name: var.get() for name, var in _vars.items() if var.get()}
