"""
Custom exception classes.

Represent errors raised while driving the Lambda Runtime API.
"""

from typing import Optional


class LambdaError(Exception):
    """Base exception class for the runtime.

    Handlers may raise it (or return it) to report a plain failure message.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class ConfigError(LambdaError):
    """Raised when the runtime environment variables are missing or invalid."""

    pass


class RuntimeApiError(LambdaError):
    """Raised when the Runtime API rejects a request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class RuntimeApiNetworkError(RuntimeApiError):
    """Failed to connect to the Runtime API."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"error trying to connect: {cause}")


class ProtocolError(RuntimeApiError):
    """Raised when the Runtime API sends an invocation that breaks its contract."""

    def __init__(self, header: str, detail: str):
        self.header = header
        self.detail = detail
        super().__init__(f"Invalid '{header}' header sent by Lambda: {detail}")


class DeserializationError(LambdaError):
    """Raised when an event cannot be turned into the handler's input type."""

    pass


class SerializationError(LambdaError):
    """Raised when a handler result cannot be encoded as JSON."""

    pass
