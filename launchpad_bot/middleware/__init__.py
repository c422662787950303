"""Middleware pipeline for inbound updates.

Error recovery, input sanitization and rate limiting, chained in front of the
command and callback dispatcher.
"""

from .error_recovery import ErrorRecoveryMiddleware
from .pipeline import Pipeline
from .rate_limiter import RateLimiter, RateLimitMiddleware
from .sanitizer import InputSanitizer, sanitize_input

__all__ = [
    "ErrorRecoveryMiddleware",
    "InputSanitizer",
    "Pipeline",
    "RateLimitMiddleware",
    "RateLimiter",
    "sanitize_input",
]
