"""Shared helpers used by adapters."""

from .rate_limiter import RateLimiter

__all__ = ["RateLimiter"]
