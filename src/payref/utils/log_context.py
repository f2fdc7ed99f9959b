from __future__ import annotations

import contextvars
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator

# Context variables are per thread / async task.
batch_id_var = contextvars.ContextVar("batch_id", default=None)
source_var = contextvars.ContextVar("source", default=None)
line_no_var = contextvars.ContextVar("line_no", default=None)

_VARS: Dict[str, contextvars.ContextVar] = {
    "batch_id": batch_id_var,
    "source": source_var,
    "line_no": line_no_var,
}


def new_batch_id() -> str:
    return str(uuid.uuid4())


def get_context_fields() -> Dict[str, Any]:
    """Current values of all logging context variables."""
    return {name: var.get() for name, var in _VARS.items()}


@contextmanager
def log_scope(**fields: Any) -> Iterator[None]:
    """
    Temporarily set selected context variables; previous values are restored
    on exit. Unknown field names raise KeyError.
    """
    tokens = []
    try:
        for name, value in fields.items():
            tokens.append((_VARS[name], _VARS[name].set(value)))
        yield
    finally:
        for var, tok in reversed(tokens):
            var.reset(tok)
