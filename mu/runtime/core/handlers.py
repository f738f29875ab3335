"""
Handler introspection helpers.

Strategies are picked once, when a handler is registered, from what its
signature declares.
"""

import inspect
import typing
from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass(frozen=True)
class HandlerSignature:
    input_type: Optional[Any] = None
    output_type: Optional[Any] = None
    accepts_context: bool = True


def inspect_handler(func: Callable) -> HandlerSignature:
    """
    Read the declared input/output types of a handler.

    Undeclared (or unresolvable) annotations are reported as None.
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return HandlerSignature()

    target = func if inspect.isroutine(func) else type(func).__call__
    try:
        hints = typing.get_type_hints(target)
    except Exception:
        hints = {}

    positional = [
        p
        for p in signature.parameters.values()
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.VAR_POSITIONAL)
    ]
    input_type = hints.get(positional[0].name) if positional else None
    accepts_context = len(positional) >= 2 or any(
        p.kind == p.VAR_POSITIONAL for p in positional
    )

    return HandlerSignature(
        input_type=input_type,
        output_type=hints.get("return"),
        accepts_context=accepts_context,
    )


async def call_handler(func: Callable, *args) -> Any:
    """Call a plain or coroutine handler and return its result."""
    result = func(*args)
    if inspect.isawaitable(result):
        result = await result
    return result
