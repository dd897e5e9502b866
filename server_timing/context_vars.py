# server_timing/context_vars.py
from contextvars import ContextVar
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from server_timing.timing.collector import RequestTimer

# One timer per request; child tasks inherit it, unrelated contexts never see it
server_timing_context_var: ContextVar[Optional["RequestTimer"]] = ContextVar(
    "server_timing",
    default=None,
)

__all__ = ["server_timing_context_var"]
