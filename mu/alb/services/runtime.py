"""
ALB Listener Service

Runs an Application Load Balancer handler on top of the InvocationLoop. Unlike
the plain runtime, the handler is expected to honour the ALB contract: every
outcome, including a malformed request, is answered with an
AlbTargetGroupResponse.

    from mu.alb import RpcRequest, listen_events, response

    class Greeting(BaseModel, RpcRequest):
        name: str

    async def say_hello(req: Greeting) -> AlbTargetGroupResponse:
        return response.create_plain_text(200, f"Hello, {req.name}")

    asyncio.run(listen_events(say_hello))
"""

import logging
from typing import Any, Callable, Optional

from mu.alb.core.deserializer import AlbDeserializer
from mu.alb.core.response import ResponseBuilder, get_default_builder
from mu.alb.core.serializer import AlbSerializer
from mu.alb.models.alb import AlbTargetGroupRequest, AlbTargetGroupResponse
from mu.runtime.config import load_config
from mu.runtime.core.exceptions import DeserializationError, LambdaError
from mu.runtime.core.handlers import call_handler, inspect_handler
from mu.runtime.core.logging_config import setup_logging
from mu.runtime.models.context import ExecutionContext
from mu.runtime.services.invocation_loop import listen_events_with as runtime_listen_events_with
from mu.runtime.services.lambda_api import RuntimeApiClient

logger = logging.getLogger("mu.alb.runtime")


class AlbRequestHandler:
    """
    Adapts a user function to the InvocationLoop handler contract.

    The deserialize and serialize strategies are resolved here, once, from the
    function's annotations unless given explicitly.
    """

    def __init__(
        self,
        func: Callable,
        input_type: Optional[Any] = None,
        output_type: Optional[Any] = None,
        builder: Optional[ResponseBuilder] = None,
    ):
        signature = inspect_handler(func)
        self.func = func
        self.accepts_context = signature.accepts_context
        self.builder = builder or get_default_builder()
        self.deserializer = AlbDeserializer(input_type or signature.input_type)
        self.serializer = AlbSerializer(output_type or signature.output_type, self.builder)

    async def __call__(
        self, request: AlbTargetGroupRequest, context: ExecutionContext
    ) -> AlbTargetGroupResponse:
        try:
            value = self.deserializer.from_alb_request(request, context)
        except DeserializationError as e:
            logger.info(
                f"Rejecting request {context.request_id}: {e}",
                extra={"path": request.path, "method": request.httpMethod},
            )
            return self.builder.create_plain_text(400, f"Bad Request {e}")

        args = (value, context) if self.accepts_context else (value,)
        try:
            output = await call_handler(self.func, *args)
        except LambdaError as e:
            logger.error(f"Handler failed for request {context.request_id}: {e}")
            output = e

        return self.serializer.to_alb_response(output)


async def listen_events_with(
    api: RuntimeApiClient,
    func: Callable,
    input_type: Optional[Any] = None,
    output_type: Optional[Any] = None,
    builder: Optional[ResponseBuilder] = None,
    once: bool = False,
) -> None:
    """Listen to ALB events using the given RuntimeApiClient."""
    handler = AlbRequestHandler(func, input_type, output_type, builder)
    await runtime_listen_events_with(
        api, handler, input_type=AlbTargetGroupRequest, once=once
    )


async def listen_events(
    func: Callable,
    input_type: Optional[Any] = None,
    output_type: Optional[Any] = None,
) -> None:
    """
    Listen to ALB events and answer each with the function's result.

    `func` takes the decoded request (and optionally the ExecutionContext) and
    may be a plain or a coroutine function.
    """
    setup_logging()
    config = load_config()
    handler = AlbRequestHandler(func, input_type, output_type)

    async with RuntimeApiClient(config) as api:
        await runtime_listen_events_with(api, handler, input_type=AlbTargetGroupRequest)
