"""
Invocation models.

Wire shapes exchanged with the Runtime API for a single invocation.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .context import ExecutionContext

# errorType for Err causes that are not exceptions
UNTYPED_ERROR = "LambdaError"


class RawInvocation(BaseModel):
    """An event fetched from /invocation/next, before decoding."""

    payload: bytes
    context: ExecutionContext

    model_config = ConfigDict(frozen=True)

    @property
    def request_id(self) -> str:
        return self.context.request_id


class ErrorReport(BaseModel):
    """Body of POST /invocation/{id}/error."""

    error_type: str = Field(alias="errorType")
    error_message: str = Field(alias="errorMessage")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @classmethod
    def from_exception(cls, error: BaseException) -> "ErrorReport":
        return cls(error_type=type(error).__name__, error_message=str(error))

    @classmethod
    def from_cause(cls, cause: Any) -> "ErrorReport":
        """
        Report for the cause carried by an Err.

        Exceptions keep their class name; any other cause is reported as a
        LambdaError with its text as the message.
        """
        if isinstance(cause, BaseException):
            return cls.from_exception(cause)
        return cls(error_type=UNTYPED_ERROR, error_message=str(cause))
