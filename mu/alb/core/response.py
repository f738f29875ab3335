"""
ALB Response Builder

Creates normalised AlbTargetGroupResponse objects. Every response carries a
body (Empty when none is given) and exactly one header map, chosen by the
builder's HeaderMode, so the load balancer never rejects it with a 502.
"""

import functools
import logging
from enum import Enum
from http import HTTPStatus
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic_core import PydanticSerializationError, to_json

from mu.alb.config import AlbSettings
from mu.alb.models.alb import AlbTargetGroupResponse, Body

logger = logging.getLogger("mu.alb.response")

# Header names
CONTENT_TYPE = "Content-Type"
LOCATION = "Location"

# Known content types
JSON = "application/json"
PLAIN_TEXT = "text/plain"

HeaderValues = Union[str, List[str]]


class HeaderMode(str, Enum):
    SINGLE_VALUE = "single_value"
    MULTI_VALUE = "multi_value"


def create_header_for(header_name: str, value: str) -> Dict[str, str]:
    """Creates a single entry header map for the given name and value."""
    return {header_name: value}


def create_optional_header_for(header_name: str, value: Optional[str]) -> Dict[str, str]:
    """Creates a single entry header map, or an empty one when there is no value."""
    if value is None:
        return {}
    return create_header_for(header_name, value)


def _status_description(status_code: int) -> str:
    try:
        return f"{status_code} {HTTPStatus(status_code).phrase}"
    except ValueError:
        return f"{status_code} Response"


class ResponseBuilder:
    """
    Builds ALB responses for one HeaderMode.
    """

    def __init__(self, mode: HeaderMode = HeaderMode.SINGLE_VALUE):
        self.mode = mode

    def create(
        self,
        status_code: int,
        body: Optional[str] = None,
        headers: Optional[Mapping[str, HeaderValues]] = None,
    ) -> AlbTargetGroupResponse:
        """
        Creates a normalised AlbTargetGroupResponse.

        Args:
            status_code: HTTP status code
            body: response text; None produces an Empty body
            headers: copied into the header map active for this builder's mode
        """
        headers = headers or {}
        single: Optional[Dict[str, str]] = None
        multi: Optional[Dict[str, List[str]]] = None

        if self.mode == HeaderMode.MULTI_VALUE:
            multi = {
                name: list(value) if isinstance(value, list) else [value]
                for name, value in headers.items()
            }
        else:
            single = {
                name: ", ".join(value) if isinstance(value, list) else value
                for name, value in headers.items()
            }

        return AlbTargetGroupResponse(
            statusCode=status_code,
            statusDescription=_status_description(status_code),
            headers=single,
            multiValueHeaders=multi,
            body=Body.of(body),
            isBase64Encoded=False,
        )

    def create_with_content_type(
        self, status_code: int, body: Optional[str], content_type: str
    ) -> AlbTargetGroupResponse:
        return self.create(status_code, body, create_header_for(CONTENT_TYPE, content_type))

    def create_json(self, status_code: int, body: Optional[str] = None) -> AlbTargetGroupResponse:
        """Creates a response wrapping an (already serialized) JSON body."""
        return self.create_with_content_type(status_code, body, JSON)

    def create_plain_text(
        self, status_code: int, body: Optional[str] = None
    ) -> AlbTargetGroupResponse:
        return self.create_with_content_type(status_code, body, PLAIN_TEXT)

    def create_json_from_obj(self, status_code: int, value: Any) -> AlbTargetGroupResponse:
        """
        Creates a response wrapping a serializable object as JSON.

        Serialization failures never escape: they become a 500 plain text
        response carrying the serializer's message.
        """
        try:
            serialized = to_json(value, by_alias=True).decode("utf-8")
        except (PydanticSerializationError, TypeError, ValueError) as e:
            logger.warning(
                f"Failed to serialize {type(value).__name__} response",
                extra={"error_detail": str(e)},
            )
            return self.create_plain_text(500, str(e))
        return self.create_json(status_code, serialized)

    def create_json_from_optional(
        self, status_code: int, value: Optional[Any]
    ) -> AlbTargetGroupResponse:
        """Like create_json_from_obj, but None yields an Empty body without headers."""
        if value is None:
            return self.create(status_code)
        return self.create_json_from_obj(status_code, value)


@functools.lru_cache(maxsize=1)
def get_default_builder() -> ResponseBuilder:
    """Process-wide builder, with the mode taken from AlbSettings."""
    settings = AlbSettings()
    mode = HeaderMode.MULTI_VALUE if settings.ALB_MULTI_VALUE_HEADERS else HeaderMode.SINGLE_VALUE
    return ResponseBuilder(mode)


def create(
    status_code: int,
    body: Optional[str] = None,
    headers: Optional[Mapping[str, HeaderValues]] = None,
) -> AlbTargetGroupResponse:
    return get_default_builder().create(status_code, body, headers)


def create_with_content_type(
    status_code: int, body: Optional[str], content_type: str
) -> AlbTargetGroupResponse:
    return get_default_builder().create_with_content_type(status_code, body, content_type)


def create_json(status_code: int, body: Optional[str] = None) -> AlbTargetGroupResponse:
    return get_default_builder().create_json(status_code, body)


def create_plain_text(status_code: int, body: Optional[str] = None) -> AlbTargetGroupResponse:
    return get_default_builder().create_plain_text(status_code, body)


def create_json_from_obj(status_code: int, value: Any) -> AlbTargetGroupResponse:
    return get_default_builder().create_json_from_obj(status_code, value)


def create_json_from_optional(status_code: int, value: Optional[Any]) -> AlbTargetGroupResponse:
    return get_default_builder().create_json_from_optional(status_code, value)
