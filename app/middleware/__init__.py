"""ASGI middleware: request ID propagation and request timeout."""

from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.middleware.timeout import TimeoutMiddleware

__all__ = ["RequestIDMiddleware", "TimeoutMiddleware", "request_id_var"]
