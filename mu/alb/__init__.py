"""
Application Load Balancer adapter.

Handles HTTP requests forwarded by an ALB target group: request
deserialization, a centralised response serialization mechanism, and
response builders that always produce a response the load balancer accepts.
"""

from mu.alb.core import response
from mu.alb.core.deserializer import AlbDeserializer, RpcRequest
from mu.alb.core.serializer import AlbSerializer, to_alb_response
from mu.alb.models.alb import AlbTargetGroupRequest, AlbTargetGroupResponse, Body
from mu.alb.services.runtime import AlbRequestHandler, listen_events, listen_events_with
from mu.runtime import ExecutionContext, LambdaError
from mu.runtime.models.result import Err, Ok, Result

__all__ = [
    "AlbDeserializer",
    "AlbRequestHandler",
    "AlbSerializer",
    "AlbTargetGroupRequest",
    "AlbTargetGroupResponse",
    "Body",
    "Err",
    "ExecutionContext",
    "LambdaError",
    "Ok",
    "Result",
    "RpcRequest",
    "listen_events",
    "listen_events_with",
    "response",
    "to_alb_response",
]
