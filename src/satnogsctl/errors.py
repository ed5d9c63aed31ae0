"""Exception hierarchy for satnogsctl.

Every failure in a run is fatal: configuration problems are caught at startup,
while transport, decode and storage errors abort the walk wherever they happen.
Callers can still react to the category, and each error keeps the resource
(URL or path) that triggered it.
"""

from pathlib import Path

__all__ = [
    "SatnogsCtlError",
    "ConfigurationError",
    "TransportError",
    "DecodeError",
    "StorageError",
]


class SatnogsCtlError(RuntimeError):
    """Base exception for every satnogsctl failure."""

    operation = "run"


class ConfigurationError(SatnogsCtlError):
    """Raised when required settings (e.g. the API token) are missing or invalid."""

    operation = "configuration"


class TransportError(SatnogsCtlError):
    """Raised when an HTTP request fails or returns a non-success status."""

    operation = "request"

    def __init__(self, message: str, *, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class DecodeError(SatnogsCtlError):
    """Raised when a catalog response does not match the observation schema."""

    operation = "decode"

    def __init__(self, message: str, *, url: str) -> None:
        super().__init__(message)
        self.url = url


class StorageError(SatnogsCtlError):
    """Raised when creating, writing or moving a local file fails."""

    operation = "storage"

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(message)
        self.path = path
