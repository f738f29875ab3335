"""
ALB adapter configuration definition.
"""

from pydantic import Field

from mu.common.core.config import BaseAppConfig


class AlbSettings(BaseAppConfig):
    """
    Settings for the ALB request/response adapter.
    """

    # Must match the target group's "multi value headers" attribute.
    ALB_MULTI_VALUE_HEADERS: bool = Field(
        default=False, description="Send multiValueHeaders instead of headers"
    )
