import pytest

from mu.alb.core.response import get_default_builder
from mu.runtime.config import RuntimeConfig
from mu.runtime.models.context import ExecutionContext

ENDPOINT = "127.0.0.1:9001"


@pytest.fixture(autouse=True)
def _single_value_headers(monkeypatch):
    """Every test starts from the default (single value) header mode."""
    monkeypatch.delenv("ALB_MULTI_VALUE_HEADERS", raising=False)
    get_default_builder.cache_clear()
    yield
    get_default_builder.cache_clear()


@pytest.fixture
def runtime_config():
    return RuntimeConfig(
        AWS_LAMBDA_RUNTIME_API=ENDPOINT,
        AWS_LAMBDA_FUNCTION_NAME="alb-function",
        AWS_LAMBDA_FUNCTION_MEMORY_SIZE=256,
        AWS_LAMBDA_FUNCTION_VERSION="$LATEST",
        AWS_LAMBDA_LOG_STREAM_NAME="2024/01/01/[$LATEST]0000",
        AWS_LAMBDA_LOG_GROUP_NAME="/aws/lambda/alb-function",
    )


@pytest.fixture
def runtime_api_url():
    return f"http://{ENDPOINT}/2018-06-01/runtime"


@pytest.fixture
def execution_context(runtime_config):
    return ExecutionContext(
        request_id="0000-0001",
        deadline=1000,
        invoked_function_arn="arn::something",
        xray_trace_id="0001-0001",
        config=runtime_config,
    )


@pytest.fixture
def alb_request():
    """ALB target group request as sent to the Lambda function."""
    return {
        "requestContext": {
            "elb": {
                "targetGroupArn": "arn:aws:elasticloadbalancing:us-east-2:123456789012:targetgroup/lambda-279XGJDqGZ5rsrHC2Fjr/49e9d65c45c6791a"
            }
        },
        "httpMethod": "POST",
        "path": "/users",
        "queryStringParameters": {"query": "1234ABCD"},
        "headers": {
            "accept": "application/json",
            "content-type": "application/json",
            "host": "lambda-alb-123578498.us-east-2.elb.amazonaws.com",
            "x-amzn-trace-id": "Root=1-5c536348-3d683b8b04734faae651f476",
            "x-forwarded-for": "72.12.164.125",
            "x-forwarded-port": "80",
            "x-forwarded-proto": "http",
        },
        "body": '{"email": "john@example.com", "name": "John"}',
        "isBase64Encoded": False,
    }
