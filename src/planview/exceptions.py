"""Custom exceptions for planview."""


class PlanviewError(Exception):
    """Base exception for all planview errors."""

    pass


class NotFoundError(PlanviewError):
    """Raised when a project or sprint identifier does not resolve to a record."""

    pass


class ValidationError(PlanviewError):
    """Raised when snapshot validation fails."""

    pass


class ParseError(PlanviewError):
    """Raised when a snapshot file cannot be read or parsed."""

    pass


class ConfigError(PlanviewError):
    """Raised when a configuration file is invalid."""

    pass
