"""
ALB request deserialization.

A handler either takes the raw AlbTargetGroupRequest (passthrough) or a type
marked with RpcRequest, which is decoded from the JSON request body.
"""

import base64
import binascii
import inspect
from enum import Enum
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from mu.alb.models.alb import AlbTargetGroupRequest
from mu.runtime.core.exceptions import DeserializationError
from mu.runtime.models.context import ExecutionContext


class RpcRequest:
    """
    Marker for request types decoded from the ALB request body.

        class CreateUser(BaseModel, RpcRequest):
            email: str
            name: str
    """


class DeserializeStrategy(str, Enum):
    PASSTHROUGH = "passthrough"
    BODY_DECODE = "body_decode"


def select_deserialize_strategy(input_type: Optional[Any]) -> DeserializeStrategy:
    """
    Pick the strategy for a declared handler input type.

    Raises:
        TypeError: the type is neither the raw request nor an RpcRequest
    """
    if input_type is None or input_type is Any:
        return DeserializeStrategy.PASSTHROUGH
    if inspect.isclass(input_type):
        if issubclass(input_type, AlbTargetGroupRequest):
            return DeserializeStrategy.PASSTHROUGH
        if issubclass(input_type, RpcRequest):
            return DeserializeStrategy.BODY_DECODE
    raise TypeError(
        f"{input_type!r} cannot be built from an ALB request: "
        "take AlbTargetGroupRequest or mark the type with RpcRequest"
    )


class AlbDeserializer:
    def __init__(self, input_type: Optional[Any] = None):
        self.input_type = input_type
        self.strategy = select_deserialize_strategy(input_type)
        self._adapter = (
            TypeAdapter(input_type) if self.strategy == DeserializeStrategy.BODY_DECODE else None
        )

    def from_alb_request(self, request: AlbTargetGroupRequest, context: ExecutionContext) -> Any:
        """
        Turn the ALB request into the handler's input.

        Raises:
            DeserializationError: the body is missing or does not match the type
        """
        if self.strategy == DeserializeStrategy.PASSTHROUGH:
            return request

        if request.body is None:
            raise DeserializationError("No payload defined")

        body = request.body
        try:
            if request.isBase64Encoded:
                body = base64.b64decode(body, validate=True)
            return self._adapter.validate_json(body)
        except (ValidationError, binascii.Error) as e:
            raise DeserializationError(f"Failed {e}") from e
