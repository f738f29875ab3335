"""
Common Configuration
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Shipped with the package; JSON lines on stdout.
DEFAULT_LOG_CONFIG_PATH = str(Path(__file__).with_name("runtime_log.yaml"))


class BaseAppConfig(BaseSettings):
    """
    Common application settings.
    """

    LOG_LEVEL: str = Field(default="INFO", description="Log level")
    LOG_CONFIG_PATH: str = Field(
        default=DEFAULT_LOG_CONFIG_PATH, description="YAML logging configuration path"
    )

    model_config = SettingsConfigDict(case_sensitive=True, extra="ignore")
