"""Domain exceptions."""


class ScopeGateError(Exception):
    """Base exception for scopegate."""

    pass


class PermissionDenied(ScopeGateError):
    """User does not have permission for the requested action."""

    pass


class NotFound(ScopeGateError):
    """Requested resource, or one of its ancestors, was not found."""

    pass


class ConfigurationError(ScopeGateError):
    """A role, level or action value is outside the closed vocabulary.

    Signals a programming or data bug. Never treated as a verdict.
    """

    pass


class StorageError(ScopeGateError):
    """A read or write against storage failed."""

    pass


class ValidationError(ScopeGateError):
    """Validation failed for input data."""

    pass
