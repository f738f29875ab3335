# mu/alb/models/alb.py

"""
Pydantic models for the AWS Application Load Balancer Lambda target event structure.

Reference: https://docs.aws.amazon.com/elasticloadbalancing/latest/application/lambda-functions.html

The response model guards the two details that make the load balancer answer
with a 502: the body must always be present, and only one of `headers` /
`multiValueHeaders` may be sent.
"""

from typing import Any, Dict, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_serializer,
    model_validator,
)


class ElbContext(BaseModel):
    """ALB request context object."""

    targetGroupArn: Optional[str] = None


class AlbTargetGroupRequestContext(BaseModel):
    elb: ElbContext = Field(default_factory=ElbContext)


class AlbTargetGroupRequest(BaseModel):
    """
    AWS ALB Lambda target group request.

    Single- or multi-value maps are populated depending on the target group's
    multi-value headers setting. Unknown keys are kept.
    """

    httpMethod: Optional[str] = None
    path: Optional[str] = None
    queryStringParameters: Optional[Dict[str, str]] = None
    multiValueQueryStringParameters: Optional[Dict[str, List[str]]] = None
    headers: Optional[Dict[str, str]] = None
    multiValueHeaders: Optional[Dict[str, List[str]]] = None
    requestContext: AlbTargetGroupRequestContext = Field(
        default_factory=AlbTargetGroupRequestContext
    )
    isBase64Encoded: bool = False
    body: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class Body(BaseModel):
    """Response body: either Empty or Text. Empty is sent as an empty string."""

    text: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def empty(cls) -> "Body":
        return cls()

    @classmethod
    def of(cls, text: Optional[str]) -> "Body":
        return cls(text=text)

    @property
    def is_empty(self) -> bool:
        return self.text is None

    def __str__(self) -> str:
        return self.text or ""


class AlbTargetGroupResponse(BaseModel):
    """
    AWS ALB Lambda target group response.

    Use model_dump() (or the runtime's JSON encoder) to get the wire format:
    the inactive header map and a missing status description are left out.
    """

    statusCode: int
    statusDescription: Optional[str] = None
    headers: Optional[Dict[str, str]] = None
    multiValueHeaders: Optional[Dict[str, List[str]]] = None
    body: Body = Field(default_factory=Body)
    isBase64Encoded: bool = False

    model_config = ConfigDict(frozen=True)

    @field_validator("body", mode="before")
    @classmethod
    def _coerce_body(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return Body(text=value)
        return value

    @model_validator(mode="after")
    def _exactly_one_header_map(self) -> "AlbTargetGroupResponse":
        if (self.headers is None) == (self.multiValueHeaders is None):
            raise ValueError("exactly one of 'headers' or 'multiValueHeaders' must be set")
        return self

    @field_serializer("body")
    def _serialize_body(self, body: Body) -> str:
        return str(body)

    @model_serializer(mode="wrap")
    def _drop_unset_slots(self, handler) -> Dict[str, Any]:
        data = handler(self)
        for key in ("headers", "multiValueHeaders", "statusDescription"):
            if data.get(key) is None:
                data.pop(key, None)
        return data
