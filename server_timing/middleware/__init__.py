# server_timing/middleware/__init__.py
from .server_timing_middleware import ServerTimingMiddleware

__all__ = ["ServerTimingMiddleware"]
