"""Exceptions raised by zoneshift."""


class ZoneshiftError(Exception):
    """Base exception for zoneshift operations."""


class ConfigurationError(ZoneshiftError):
    """Settings or accounts file could not be loaded."""


class MigrationValidationError(ZoneshiftError):
    """Migration input rejected before any provider call."""


class MigrationStateError(ZoneshiftError):
    """Operation not allowed in the session's current phase."""


class AccountReadOnlyError(ZoneshiftError):
    """Destination account cannot be written to."""


class ProviderError(ZoneshiftError):
    """Provider API request failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ProbeError(ProviderError):
    """Write probe returned something other than not-found or forbidden."""
