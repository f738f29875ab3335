"""
Data model definitions package.

Aggregates Pydantic models for use in other modules.
"""

from .context import ClientApplication, ClientContext, CognitoIdentity, ExecutionContext
from .invocation import ErrorReport, RawInvocation
from .result import Err, Ok, Result

__all__ = [
    "ClientApplication",
    "ClientContext",
    "CognitoIdentity",
    "ExecutionContext",
    "Err",
    "ErrorReport",
    "Ok",
    "RawInvocation",
    "Result",
]
