"""Classified errors raised at the network fetch boundary."""

from enum import Enum
from typing import Optional


class NetworkErrorKind(Enum):
    """Kinds of failure a remote fetch can end in."""

    NO_INTERNET_CONNECTION = "no_internet_connection"
    INVALID_URL = "invalid_url"
    NO_DATA = "no_data"
    DECODING_ERROR = "decoding_error"
    SERVER_ERROR = "server_error"
    UNKNOWN = "unknown"


_MESSAGES = {
    NetworkErrorKind.NO_INTERNET_CONNECTION: "No internet connection available",
    NetworkErrorKind.INVALID_URL: "Invalid URL",
    NetworkErrorKind.NO_DATA: "No data received",
    NetworkErrorKind.DECODING_ERROR: "Failed to decode response",
    NetworkErrorKind.UNKNOWN: "An unknown error occurred",
}


class NetworkError(Exception):
    """A fetch failure with a fixed, user-visible message per kind."""

    def __init__(self, kind: NetworkErrorKind, status_code: Optional[int] = None):
        """Initialize the error.

        Args:
            kind: The classified kind of failure.
            status_code: The HTTP status code, only meaningful for SERVER_ERROR.
        """
        self.kind = kind
        self.status_code = status_code
        super().__init__(self.message)

    @classmethod
    def server_error(cls, status_code: int) -> "NetworkError":
        """Build a SERVER_ERROR for the given HTTP status code."""
        return cls(NetworkErrorKind.SERVER_ERROR, status_code=status_code)

    @property
    def message(self) -> str:
        """The human-readable message shown to the user."""
        if self.kind is NetworkErrorKind.SERVER_ERROR:
            return f"Server error with code: {self.status_code}"
        return _MESSAGES[self.kind]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NetworkError):
            return NotImplemented
        return self.kind is other.kind and self.status_code == other.status_code

    def __hash__(self) -> int:
        return hash((self.kind, self.status_code))

    def __repr__(self) -> str:
        if self.kind is NetworkErrorKind.SERVER_ERROR:
            return f"NetworkError({self.kind.name}, status_code={self.status_code})"
        return f"NetworkError({self.kind.name})"
