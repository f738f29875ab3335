"""
Data model definitions package.
"""

from .alb import (
    AlbTargetGroupRequest,
    AlbTargetGroupRequestContext,
    AlbTargetGroupResponse,
    Body,
    ElbContext,
)

__all__ = [
    "AlbTargetGroupRequest",
    "AlbTargetGroupRequestContext",
    "AlbTargetGroupResponse",
    "Body",
    "ElbContext",
]
