"""Custom exceptions for pydanfoss_ally."""


class PyDanfossAllyException(Exception):
    """Base class for pydanfoss_ally exceptions."""


class ConfigurationError(PyDanfossAllyException):
    """Raised when the client cannot be configured, e.g. missing credentials."""


class RecoverableError(PyDanfossAllyException):
    """Base class for failures a polling cycle logs and survives."""


class NetworkError(RecoverableError):
    """Raised when the API cannot be reached or a request times out."""


class ProtocolError(RecoverableError):
    """Raised when the API answers with an error status or an unreadable body."""

    def __init__(self, status_code: int, error_message: str) -> None:
        """Initialize the protocol error."""
        self.status_code = status_code
        self.error_message = error_message
        super().__init__(f"API Error {status_code}: {error_message}")


class AuthError(ProtocolError):
    """Raised when the API rejects the credentials or the bearer token."""


class DataError(RecoverableError):
    """Raised when a field of an API response cannot be interpreted."""
