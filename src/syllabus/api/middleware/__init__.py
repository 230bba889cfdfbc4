"""Middleware for the Syllabus API."""

from syllabus.api.middleware.correlation import CorrelationMiddleware

__all__ = ["CorrelationMiddleware"]
