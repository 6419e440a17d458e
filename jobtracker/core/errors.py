"""
Error taxonomy for the tracker core.

Local write failures are reported as boolean results, everything else raises
one of these and travels unchanged through the data service.
"""


class TrackerError(Exception):
    """Base class for tracker core errors."""


class StorageQuotaExceeded(TrackerError):
    """The local key-value medium refused a write because it is full."""


class AuthenticationRequired(TrackerError):
    """A remote operation was attempted without a valid session."""

    def __init__(self, message: str = "User not authenticated"):
        super().__init__(message)


class BackendError(TrackerError):
    """Remote store I/O failed."""


class RecordNotFound(BackendError):
    """The remote store has no row for the requested entity."""


class MalformedDataError(TrackerError):
    """Persisted local data could not be decoded."""
