"""
Invocation Loop

Drives the Lambda lifecycle: fetch the next event, decode it, call the handler
and report the outcome back to the Runtime API.

Only a Runtime API failure stops the loop. Anything that goes wrong inside an
invocation (bad payload, handler exception, unserializable result) is reported
through the error endpoint and the loop moves on to the next event.

Handlers may also return a Result: Ok(value) publishes value, Err(cause) is
published through the error endpoint.
"""

import logging
import os
from enum import Enum
from typing import Any, Callable, Optional

from pydantic import TypeAdapter, ValidationError

from mu.common.core.request_context import (
    clear_request_context,
    set_request_id,
    set_trace_id,
)
from mu.runtime.config import load_config
from mu.runtime.core.exceptions import (
    DeserializationError,
    RuntimeApiError,
    SerializationError,
)
from mu.runtime.core.handlers import call_handler, inspect_handler
from mu.runtime.core.logging_config import setup_logging
from mu.runtime.models.context import ExecutionContext
from mu.runtime.models.invocation import ErrorReport, RawInvocation
from mu.runtime.models.result import Err, Ok
from mu.runtime.services.lambda_api import RuntimeApiClient

logger = logging.getLogger("mu.runtime.invocation_loop")

TRACE_ID_ENV = "_X_AMZN_TRACE_ID"

Handler = Callable[[Any, ExecutionContext], Any]


class LoopState(str, Enum):
    POLLING = "polling"
    TERMINATED = "terminated"


class PayloadDecoder:
    """Decodes raw event bytes (JSON) into the handler's input type."""

    def __init__(self, input_type: Optional[Any] = None):
        self.input_type = input_type
        self.adapter = TypeAdapter(Any if input_type is None else input_type)

    def decode(self, payload: bytes) -> Any:
        try:
            return self.adapter.validate_json(payload)
        except ValidationError as e:
            raise DeserializationError(f"Failed {e}") from e


class InvocationLoop:
    def __init__(
        self,
        api: RuntimeApiClient,
        handler: Handler,
        input_type: Optional[Any] = None,
    ):
        """
        Args:
            api: RuntimeApiClient shared by every invocation
            handler: plain or coroutine function called as handler(event, context)
            input_type: type the event is decoded into (taken from the
                handler's first parameter annotation when omitted)
        """
        self.api = api
        self.handler = handler
        if input_type is None:
            input_type = inspect_handler(handler).input_type
        self.decoder = PayloadDecoder(input_type)
        self.state = LoopState.POLLING

    async def run(self, once: bool = False) -> None:
        """
        Process events until the Runtime API fails.

        Args:
            once: return after a single invocation (integration tests)

        Raises:
            RuntimeApiError: the Runtime API is unreachable or misbehaving
        """
        while True:
            try:
                invocation = await self.api.fetch_next_message()
                await self._invoke(invocation)
            except RuntimeApiError as e:
                self.state = LoopState.TERMINATED
                logger.error(
                    f"Lambda runtime terminated: {e}",
                    extra={"error_type": type(e).__name__, "status_code": e.status_code},
                )
                raise

            if once:
                return

    async def _invoke(self, invocation: RawInvocation) -> None:
        context = invocation.context
        request_id = context.request_id

        set_request_id(request_id)
        set_trace_id(context.xray_trace_id)
        os.environ[TRACE_ID_ENV] = context.xray_trace_id
        try:
            try:
                event = self.decoder.decode(invocation.payload)
                result = await call_handler(self.handler, event, context)
            except Exception as e:
                await self._report_failure(request_id, e)
                return

            if isinstance(result, Err):
                logger.warning(f"Handler returned an error for invocation {request_id}")
                await self.api.publish_error(request_id, ErrorReport.from_cause(result.cause))
                return
            if isinstance(result, Ok):
                result = result.value

            try:
                await self.api.publish_response(request_id, result)
            except SerializationError as e:
                await self._report_failure(request_id, e)
        finally:
            os.environ.pop(TRACE_ID_ENV, None)
            clear_request_context()

    async def _report_failure(self, request_id: str, error: Exception) -> None:
        if isinstance(error, (DeserializationError, SerializationError)):
            logger.warning(f"Invocation {request_id} failed: {error}")
        else:
            logger.exception(f"Handler raised an exception for invocation {request_id}")

        await self.api.publish_error(request_id, ErrorReport.from_exception(error))


async def listen_events_with(
    api: RuntimeApiClient,
    handler: Handler,
    input_type: Optional[Any] = None,
    once: bool = False,
) -> None:
    """
    Listen to Lambda events using the given RuntimeApiClient.

    This allows one to point the loop at a local Runtime API (tests, emulators).
    """
    loop = InvocationLoop(api, handler, input_type=input_type)
    await loop.run(once=once)


async def listen_events(handler: Handler, input_type: Optional[Any] = None) -> None:
    """
    Listen to Lambda events and delegate every payload to `handler`.

    The runtime configuration is read from the environment once, before the
    first event is fetched.

    Raises:
        ConfigError: the Lambda environment variables are missing or invalid
        RuntimeApiError: the Runtime API failed
    """
    setup_logging()
    config = load_config()
    logger.info(
        f"Starting Lambda runtime for {config.function_name}",
        extra={"function_version": config.version, "memory_size": config.memory},
    )

    async with RuntimeApiClient(config) as api:
        await listen_events_with(api, handler, input_type=input_type)
