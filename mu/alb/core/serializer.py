"""
ALB response serialization.

Converts whatever an ALB handler returns into an AlbTargetGroupResponse. The
strategy is resolved from the handler's declared return type at registration.
A response, a LambdaError or a Result value is always serialized with its own
strategy, so a handler declaring `-> User` can still raise or return one of
them; any other value is serialized as JSON (GENERIC).
"""

import inspect
import logging
from enum import Enum
from typing import Any, Optional, get_origin

from mu.alb.core.response import ResponseBuilder, get_default_builder
from mu.alb.models.alb import AlbTargetGroupResponse
from mu.runtime.core.exceptions import LambdaError
from mu.runtime.models.result import Err, Ok, Result

logger = logging.getLogger("mu.alb.serializer")


class SerializeStrategy(str, Enum):
    PASSTHROUGH = "passthrough"
    ERROR_CARRIER = "error_carrier"
    RESULT_WRAPPER = "result_wrapper"
    GENERIC = "generic"


def select_serialize_strategy(output_type: Optional[Any]) -> Optional[SerializeStrategy]:
    """Strategy for a declared return type; None when nothing was declared."""
    if output_type is None:
        return None

    origin = get_origin(output_type) or output_type
    if inspect.isclass(origin):
        if issubclass(origin, AlbTargetGroupResponse):
            return SerializeStrategy.PASSTHROUGH
        if issubclass(origin, LambdaError):
            return SerializeStrategy.ERROR_CARRIER
        if issubclass(origin, Result):
            return SerializeStrategy.RESULT_WRAPPER
    return SerializeStrategy.GENERIC


def strategy_for_value(value: Any) -> SerializeStrategy:
    if isinstance(value, AlbTargetGroupResponse):
        return SerializeStrategy.PASSTHROUGH
    if isinstance(value, LambdaError):
        return SerializeStrategy.ERROR_CARRIER
    if isinstance(value, Result):
        return SerializeStrategy.RESULT_WRAPPER
    return SerializeStrategy.GENERIC


class AlbSerializer:
    def __init__(
        self, output_type: Optional[Any] = None, builder: Optional[ResponseBuilder] = None
    ):
        self.output_type = output_type
        self.strategy = select_serialize_strategy(output_type)
        self.builder = builder or get_default_builder()

    def to_alb_response(self, value: Any) -> AlbTargetGroupResponse:
        """Serialize a handler result. Never raises."""
        # Responses, errors and results keep their meaning whatever was declared.
        strategy = strategy_for_value(value)
        if self.strategy not in (None, SerializeStrategy.GENERIC, strategy):
            logger.warning(
                f"Handler declared {self.output_type!r} but returned {type(value).__name__}"
            )

        if strategy == SerializeStrategy.PASSTHROUGH:
            return value

        if strategy == SerializeStrategy.ERROR_CARRIER:
            return self.builder.create_plain_text(500, str(value))

        if strategy == SerializeStrategy.RESULT_WRAPPER:
            if isinstance(value, Ok):
                return self.builder.create_json_from_obj(200, value.value)
            if isinstance(value, Err):
                return self.builder.create_plain_text(
                    500, f"Internal Server Error: {value.cause!r}"
                )

        return self.builder.create_json_from_obj(200, value)


def to_alb_response(value: Any) -> AlbTargetGroupResponse:
    """Serialize a value with the strategy matching its runtime type."""
    return AlbSerializer().to_alb_response(value)
