"""
Lambda runtime package.

Long-polls the Lambda Runtime API and hands every event to a Python handler.
"""

import asyncio

from mu.runtime.config import RuntimeConfig, load_config
from mu.runtime.core.exceptions import (
    ConfigError,
    DeserializationError,
    LambdaError,
    ProtocolError,
    RuntimeApiError,
    RuntimeApiNetworkError,
    SerializationError,
)
from mu.runtime.models import Err, ErrorReport, ExecutionContext, Ok, RawInvocation, Result
from mu.runtime.services.invocation_loop import (
    InvocationLoop,
    listen_events,
    listen_events_with,
)
from mu.runtime.services.lambda_api import RuntimeApiClient


def run(handler, input_type=None) -> None:
    """Blocking entry point for a bootstrap script."""
    asyncio.run(listen_events(handler, input_type=input_type))


__all__ = [
    "ConfigError",
    "DeserializationError",
    "Err",
    "ErrorReport",
    "ExecutionContext",
    "InvocationLoop",
    "LambdaError",
    "Ok",
    "ProtocolError",
    "RawInvocation",
    "Result",
    "RuntimeApiClient",
    "RuntimeApiError",
    "RuntimeApiNetworkError",
    "RuntimeConfig",
    "SerializationError",
    "listen_events",
    "listen_events_with",
    "load_config",
    "run",
]
