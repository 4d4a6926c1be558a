"""Root exception hierarchy for pybeans.

All container exceptions inherit from PyBeansException, so callers can catch
one type for every failure the framework raises, or a specific subclass for
targeted handling.

Categories:
- InfrastructureException: failures of the container machinery itself
  (definition storage, bean creation, resource parsing, context lifecycle)
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class PyBeansException(Exception):
    """Base exception for all pybeans errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "BEAN_UNDEFINED").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(PyBeansException):
    """Failures of the container machinery: registry, creation, loading."""
