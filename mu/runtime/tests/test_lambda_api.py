import json

import httpx
import pytest
import respx

from mu.runtime.core.exceptions import (
    ProtocolError,
    RuntimeApiError,
    RuntimeApiNetworkError,
    SerializationError,
)
from mu.runtime.models.invocation import ErrorReport
from mu.runtime.services.lambda_api import RuntimeApiClient, encode_payload


class TestFetchingNextMessage:
    @pytest.mark.asyncio
    @respx.mock
    async def test_should_handle_successful_requests(
        self, runtime_config, runtime_api_url, invocation_headers
    ):
        next_endpoint = respx.get(f"{runtime_api_url}/invocation/next").mock(
            return_value=httpx.Response(
                200, headers=invocation_headers, content=b'{ "body": "hello" }'
            )
        )

        async with RuntimeApiClient(runtime_config) as api:
            invocation = await api.fetch_next_message()

        assert next_endpoint.called
        assert invocation.payload == b'{ "body": "hello" }'
        assert invocation.request_id == "0000-0001"
        assert invocation.context.deadline == 1000

    @pytest.mark.asyncio
    @respx.mock
    async def test_should_handle_connection_failures(self, runtime_config, runtime_api_url):
        respx.get(f"{runtime_api_url}/invocation/next").mock(
            side_effect=httpx.ConnectError("Connection refused")
        )

        async with RuntimeApiClient(runtime_config) as api:
            with pytest.raises(RuntimeApiNetworkError) as exc:
                await api.fetch_next_message()

        assert str(exc.value).startswith("error trying to connect: Connection refused")
        assert isinstance(exc.value.cause, httpx.ConnectError)

    @pytest.mark.asyncio
    @respx.mock
    async def test_should_surface_error_body(self, runtime_config, runtime_api_url):
        respx.get(f"{runtime_api_url}/invocation/next").mock(
            return_value=httpx.Response(500, content=b"Runtime API is shutting down")
        )

        async with RuntimeApiClient(runtime_config) as api:
            with pytest.raises(RuntimeApiError) as exc:
                await api.fetch_next_message()

        assert str(exc.value) == "Runtime API is shutting down"
        assert exc.value.status_code == 500

    @pytest.mark.asyncio
    @respx.mock
    async def test_should_reject_invocations_without_request_id(
        self, runtime_config, runtime_api_url, invocation_headers
    ):
        del invocation_headers["lambda-runtime-aws-request-id"]
        respx.get(f"{runtime_api_url}/invocation/next").mock(
            return_value=httpx.Response(200, headers=invocation_headers, content=b"{}")
        )

        async with RuntimeApiClient(runtime_config) as api:
            with pytest.raises(ProtocolError):
                await api.fetch_next_message()


class TestPublishSuccessfulResponse:
    @pytest.mark.asyncio
    @respx.mock
    async def test_should_be_able_to_publish_response(self, runtime_config, runtime_api_url):
        success_endpoint = respx.post(f"{runtime_api_url}/invocation/0000-0001/response").mock(
            return_value=httpx.Response(202)
        )

        async with RuntimeApiClient(runtime_config) as api:
            await api.publish_response("0000-0001", "42")

        assert success_endpoint.call_count == 1
        request = success_endpoint.calls.last.request
        assert request.content == b'"42"'
        assert request.headers["content-type"] == "application/json"

    @pytest.mark.asyncio
    @respx.mock
    async def test_should_handle_failures(self, runtime_config, runtime_api_url):
        respx.post(f"{runtime_api_url}/invocation/0000-0001/response").mock(
            side_effect=httpx.ConnectError("Connection refused")
        )

        async with RuntimeApiClient(runtime_config) as api:
            with pytest.raises(RuntimeApiNetworkError) as exc:
                await api.publish_response("0000-0001", "42")

        assert "Connection refused" in str(exc.value)

    @pytest.mark.asyncio
    @respx.mock
    async def test_should_surface_rejections(self, runtime_config, runtime_api_url):
        respx.post(f"{runtime_api_url}/invocation/0000-0001/response").mock(
            return_value=httpx.Response(413, content=b'{"errorType":"RequestTooLarge"}')
        )

        async with RuntimeApiClient(runtime_config) as api:
            with pytest.raises(RuntimeApiError) as exc:
                await api.publish_response("0000-0001", "x" * 10)

        assert exc.value.status_code == 413
        assert "RequestTooLarge" in str(exc.value)

    @pytest.mark.asyncio
    @respx.mock(assert_all_called=False)
    async def test_unserializable_payload_is_not_sent(self, runtime_config, runtime_api_url):
        success_endpoint = respx.post(f"{runtime_api_url}/invocation/0000-0001/response")

        async with RuntimeApiClient(runtime_config) as api:
            with pytest.raises(SerializationError):
                await api.publish_response("0000-0001", object())

        assert not success_endpoint.called


class TestPublishErrorResponse:
    @pytest.mark.asyncio
    @respx.mock
    async def test_should_publish_error_messages(self, runtime_config, runtime_api_url):
        error_endpoint = respx.post(f"{runtime_api_url}/invocation/0000-0001/error").mock(
            return_value=httpx.Response(202)
        )

        async with RuntimeApiClient(runtime_config) as api:
            await api.publish_error(
                "0000-0001",
                ErrorReport(error_type="CompileError", error_message="Not implemented"),
            )

        assert error_endpoint.calls.last.request.content == (
            b'{"errorType":"CompileError","errorMessage":"Not implemented"}'
        )

    @pytest.mark.asyncio
    @respx.mock
    async def test_should_handle_failures(self, runtime_config, runtime_api_url):
        respx.post(f"{runtime_api_url}/invocation/0000-0001/error").mock(
            side_effect=httpx.ConnectError("Connection refused")
        )

        async with RuntimeApiClient(runtime_config) as api:
            with pytest.raises(RuntimeApiNetworkError):
                await api.publish_error(
                    "0000-0001",
                    ErrorReport(error_type="CompileError", error_message="Not implemented"),
                )


def test_encode_payload_uses_wire_aliases():
    report = ErrorReport(error_type="ValueError", error_message="boom")

    assert json.loads(encode_payload(report)) == {
        "errorType": "ValueError",
        "errorMessage": "boom",
    }


def test_encode_payload_plain_values():
    assert encode_payload(42) == b"42"
    assert encode_payload(None) == b"null"
    assert json.loads(encode_payload({"name": "John"})) == {"name": "John"}
