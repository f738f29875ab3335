import pytest

from mu.common.core.request_context import clear_request_context
from mu.runtime.config import RuntimeConfig

ENDPOINT = "127.0.0.1:9001"


@pytest.fixture
def runtime_config():
    """RuntimeConfig pointing at the mocked Runtime API (no environment needed)."""
    return RuntimeConfig(
        AWS_LAMBDA_RUNTIME_API=ENDPOINT,
        AWS_LAMBDA_FUNCTION_NAME="test-function",
        AWS_LAMBDA_FUNCTION_MEMORY_SIZE=128,
        AWS_LAMBDA_FUNCTION_VERSION="$LATEST",
        AWS_LAMBDA_LOG_STREAM_NAME="2024/01/01/[$LATEST]0000",
        AWS_LAMBDA_LOG_GROUP_NAME="/aws/lambda/test-function",
    )


@pytest.fixture
def runtime_api_url():
    return f"http://{ENDPOINT}/2018-06-01/runtime"


@pytest.fixture
def invocation_headers():
    return {
        "lambda-runtime-aws-request-id": "0000-0001",
        "lambda-runtime-deadline-ms": "1000",
        "lambda-runtime-invoked-function-arn": "arn::something",
        "lambda-runtime-trace-id": "0001-0001",
    }


@pytest.fixture(autouse=True)
def _clear_request_context():
    yield
    clear_request_context()
