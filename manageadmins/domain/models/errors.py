"""Exception hierarchy for manageadmins."""

from typing import Mapping, Optional


class ManageAdminsError(Exception):
    """Base class for all errors raised by manageadmins."""


class TransportError(ManageAdminsError):
    """Raised by the transport when a call does not produce a 2xx response.

    ``status_code`` and ``headers`` are empty when no response was received
    (connection failure, timeout).
    """

    def __init__(self, message: str, status_code: Optional[int] = None, headers: Optional[Mapping[str, str]] = None):
        self.status_code = status_code
        self.headers = {key.lower(): value for key, value in (headers or {}).items()}
        super().__init__(message)


class CommandValidationError(ManageAdminsError):
    """Raised when a command is missing parameters or has unsupported values."""


class ConfigurationError(ManageAdminsError):
    """Raised when configuration values cannot be turned into a DashboardConfig."""
