"""
Runtime configuration definition.

Loads the Lambda execution environment variables once at process start and
provides them as an immutable Pydantic model.
Uses pydantic-settings for type safety; every field is required.
"""

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from mu.runtime.core.exceptions import ConfigError


class RuntimeConfig(BaseSettings):
    """
    Process-lifetime settings provided by the Lambda execution environment.
    """

    AWS_LAMBDA_RUNTIME_API: str = Field(
        ..., min_length=1, description="Runtime API host and port (host:port)"
    )
    AWS_LAMBDA_FUNCTION_NAME: str = Field(..., description="Function name")
    AWS_LAMBDA_FUNCTION_MEMORY_SIZE: int = Field(..., description="Memory available (MB)")
    AWS_LAMBDA_FUNCTION_VERSION: str = Field(..., description="Function version")
    AWS_LAMBDA_LOG_STREAM_NAME: str = Field(..., description="CloudWatch log stream")
    AWS_LAMBDA_LOG_GROUP_NAME: str = Field(..., description="CloudWatch log group")

    model_config = SettingsConfigDict(case_sensitive=True, extra="ignore", frozen=True)

    @property
    def endpoint(self) -> str:
        return self.AWS_LAMBDA_RUNTIME_API

    @property
    def function_name(self) -> str:
        return self.AWS_LAMBDA_FUNCTION_NAME

    @property
    def memory(self) -> int:
        return self.AWS_LAMBDA_FUNCTION_MEMORY_SIZE

    @property
    def version(self) -> str:
        return self.AWS_LAMBDA_FUNCTION_VERSION

    @property
    def log_stream(self) -> str:
        return self.AWS_LAMBDA_LOG_STREAM_NAME

    @property
    def log_group(self) -> str:
        return self.AWS_LAMBDA_LOG_GROUP_NAME


def load_config(**overrides) -> RuntimeConfig:
    """
    Build the RuntimeConfig from the environment.

    Keyword overrides take precedence over environment variables.

    Raises:
        ConfigError: a variable is missing or cannot be parsed
    """
    try:
        return RuntimeConfig(**overrides)
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
        raise ConfigError(f"Invalid Lambda runtime environment ({fields}): {e}") from e
