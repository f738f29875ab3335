"""
Lambda Runtime API Client

Abstracts the communication with the Lambda Runtime API, as documented here:
https://docs.aws.amazon.com/lambda/latest/dg/runtimes-api.html

Only the three invocation operations are supported: fetch the next event,
publish a successful response and publish an error.
"""

import logging
from typing import Any, Optional

import httpx
from pydantic_core import PydanticSerializationError, to_json

from mu.common.core.http_client import HttpClientFactory
from mu.runtime.config import RuntimeConfig
from mu.runtime.core.context_extractor import create_execution_context_from
from mu.runtime.core.exceptions import (
    RuntimeApiError,
    RuntimeApiNetworkError,
    SerializationError,
)
from mu.runtime.models.invocation import ErrorReport, RawInvocation

logger = logging.getLogger("mu.runtime.lambda_api")

API_VERSION = "2018-06-01"


def encode_payload(payload: Any) -> bytes:
    """
    Encode a handler result (or any wire model) as compact JSON.

    Pydantic models and dataclasses are dumped by alias.

    Raises:
        SerializationError: the value has no JSON representation
    """
    try:
        return to_json(payload, by_alias=True)
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise SerializationError(f"Unable to serialize {type(payload).__name__}: {e}") from e


class RuntimeApiClient:
    def __init__(self, config: RuntimeConfig, client: Optional[httpx.AsyncClient] = None):
        """
        Args:
            config: RuntimeConfig instance; its endpoint must point to the Runtime API
            client: httpx.AsyncClient to reuse across invocations (created when omitted)
        """
        self.config = config
        self.client = client or HttpClientFactory().create_async_client()
        self.base_url = f"http://{config.endpoint}/{API_VERSION}/runtime"

    async def __aenter__(self) -> "RuntimeApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def fetch_next_message(self) -> RawInvocation:
        """
        Fetch the next event to be processed (long poll).

        Returns:
            The raw event bytes and the ExecutionContext built from the headers

        Raises:
            RuntimeApiNetworkError: the Runtime API is unreachable
            RuntimeApiError: the Runtime API answered with a non-2xx status
            ProtocolError: the invocation headers are missing or malformed
        """
        url = f"{self.base_url}/invocation/next"
        response = await self._send("GET", url)

        if not response.is_success:
            raise RuntimeApiError(_read_error_message(response), status_code=response.status_code)

        context = create_execution_context_from(response.headers, self.config)
        logger.debug(
            f"Received invocation {context.request_id}",
            extra={"aws_request_id": context.request_id, "payload_size": len(response.content)},
        )
        return RawInvocation(payload=response.content, context=context)

    async def publish_response(self, request_id: str, payload: Any) -> None:
        """Publish a response in case of successful execution."""
        await self._post_message(request_id, "response", payload)

    async def publish_error(self, request_id: str, payload: ErrorReport) -> None:
        """Publish an error response."""
        await self._post_message(request_id, "error", payload)

    async def _post_message(self, request_id: str, path: str, payload: Any) -> None:
        content = encode_payload(payload)
        url = f"{self.base_url}/invocation/{request_id}/{path}"

        response = await self._send(
            "POST",
            url,
            content=content,
            headers={"content-type": "application/json"},
        )

        if not response.is_success:
            raise RuntimeApiError(_read_error_message(response), status_code=response.status_code)

    async def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            return await self.client.request(method, url, **kwargs)
        except httpx.RequestError as e:
            logger.error(
                f"Runtime API request failed: {method} {url}",
                extra={
                    "target_url": url,
                    "error_type": type(e).__name__,
                    "error_detail": str(e),
                },
            )
            raise RuntimeApiNetworkError(e) from e


def _read_error_message(response: httpx.Response) -> str:
    message = response.content.decode("utf-8", errors="replace")
    return message or f"Runtime API returned {response.status_code}"
