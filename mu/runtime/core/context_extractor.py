"""
Execution context extraction.

Builds the ExecutionContext out of the headers the Runtime API sends along
with every /invocation/next response.
"""

import logging
from typing import Mapping, Optional, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError

from mu.runtime.config import RuntimeConfig
from mu.runtime.core.exceptions import ProtocolError
from mu.runtime.models.context import ClientContext, CognitoIdentity, ExecutionContext

logger = logging.getLogger("mu.runtime.context_extractor")

REQUEST_ID_HEADER = "lambda-runtime-aws-request-id"
DEADLINE_HEADER = "lambda-runtime-deadline-ms"
FUNCTION_ARN_HEADER = "lambda-runtime-invoked-function-arn"
TRACE_ID_HEADER = "lambda-runtime-trace-id"
CLIENT_CONTEXT_HEADER = "lambda-runtime-client-context"
COGNITO_IDENTITY_HEADER = "lambda-runtime-cognito-identity"

M = TypeVar("M", bound=BaseModel)


def create_execution_context_from(
    headers: Union[httpx.Headers, Mapping[str, str]], config: RuntimeConfig
) -> ExecutionContext:
    """
    Extract the ExecutionContext from Runtime API response headers.

    Header names are matched case-insensitively.

    Raises:
        ProtocolError: a required header is missing, the deadline is not a
            number, or an optional JSON header is malformed
    """
    headers = httpx.Headers(headers)

    return ExecutionContext(
        request_id=_required(headers, REQUEST_ID_HEADER),
        deadline=_deadline(headers),
        invoked_function_arn=_required(headers, FUNCTION_ARN_HEADER),
        xray_trace_id=_required(headers, TRACE_ID_HEADER),
        client_context=_optional_json(headers, CLIENT_CONTEXT_HEADER, ClientContext),
        identity=_optional_json(headers, COGNITO_IDENTITY_HEADER, CognitoIdentity),
        config=config,
    )


def _required(headers: httpx.Headers, name: str) -> str:
    value = headers.get(name)
    if value is None:
        raise ProtocolError(name, "missing header; this is a bug in the Runtime API")
    return value


def _deadline(headers: httpx.Headers) -> int:
    raw = _required(headers, DEADLINE_HEADER)
    digits = raw.strip()
    # Epoch milliseconds: plain ASCII digits only (no sign, underscores or unicode digits).
    if not (digits.isascii() and digits.isdigit()):
        raise ProtocolError(DEADLINE_HEADER, f"not a number: {raw!r}")
    return int(digits, 10)


def _optional_json(headers: httpx.Headers, name: str, model: Type[M]) -> Optional[M]:
    raw = headers.get(name)
    if raw is None:
        return None
    try:
        return model.model_validate_json(raw)
    except ValidationError as e:
        logger.error(
            f"Malformed {name} header",
            extra={"header": name, "error_detail": str(e)},
        )
        raise ProtocolError(name, str(e)) from e
