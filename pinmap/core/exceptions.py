"""Domain-level exception hierarchy for service and repository layers."""

from __future__ import annotations


class DomainError(Exception):
    """Base class for domain-specific failures."""


class ValidationError(DomainError):
    """Malformed or out-of-range input. The message is part of the public contract."""


class ConflictError(DomainError):
    """Raised when a state conflict occurs (e.g. a pin id that already exists)."""


class InternalError(DomainError):
    """Storage or indexing failure. Its message is logged, never sent to clients."""
