"""Custom middleware components."""

from code_assist.core.middleware.logging import LoggingMiddleware
from code_assist.core.middleware.request_id import RequestIDMiddleware
from code_assist.core.middleware.timing import TimingMiddleware


__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
    "TimingMiddleware",
]
