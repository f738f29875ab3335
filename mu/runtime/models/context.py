"""
Execution context models.

One ExecutionContext is created for every event fetched from the Runtime API
and discarded once the invocation is reported back.
"""

import time
from typing import Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from mu.common.core.trace import TraceId
from mu.runtime.config import RuntimeConfig


class ClientApplication(BaseModel):
    """Mobile client application that invoked the function (AWS Mobile SDK)."""

    installation_id: str = Field(alias="installationId")
    app_title: str = Field(alias="appTitle")
    app_version_name: str = Field(alias="appVersionName")
    app_version_code: str = Field(alias="appVersionCode")
    app_package_name: str = Field(alias="appPackageName")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ClientContext(BaseModel):
    """Lambda-Runtime-Client-Context header payload."""

    client: ClientApplication
    custom: Dict[str, str] = Field(default_factory=dict)
    environment: Dict[str, str] = Field(
        default_factory=dict, validation_alias=AliasChoices("environment", "env")
    )

    model_config = ConfigDict(frozen=True)


class CognitoIdentity(BaseModel):
    """Lambda-Runtime-Cognito-Identity header payload."""

    identity_id: str = Field(alias="cognitoIdentityId")
    identity_pool_id: str = Field(alias="cognitoIdentityPoolId")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ExecutionContext(BaseModel):
    """
    Per-invocation context handed to the handler next to the event.

    The deadline is informational: the runtime never enforces it.
    """

    request_id: str
    deadline: int  # epoch milliseconds
    invoked_function_arn: str
    xray_trace_id: str
    client_context: Optional[ClientContext] = None
    identity: Optional[CognitoIdentity] = None
    config: RuntimeConfig

    model_config = ConfigDict(frozen=True)

    @property
    def trace(self) -> TraceId:
        return TraceId.parse(self.xray_trace_id)

    def remaining_time_ms(self) -> int:
        """Milliseconds left before the Lambda service times the invocation out."""
        return self.deadline - int(time.time() * 1000)
