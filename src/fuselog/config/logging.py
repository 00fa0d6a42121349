"""
Logging Configuration.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..levels import Level


class LoggingSettings(BaseSettings):
    """
    Global sink configuration.
    Prefix: FUSELOG_
    """

    model_config = SettingsConfigDict(
        env_prefix="FUSELOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    level: str = Field(default="INFO", description="Threshold for the main and fuse loggers")
    syslog: bool = Field(default=False, description="Send records to the local syslog daemon")

    # CloudWatch Logs sink, enabled when all three are set
    cloudwatch_region: str = Field(default="", description="AWS region of the log group")
    cloudwatch_group: str = Field(default="", description="CloudWatch log group name")
    cloudwatch_stream: str = Field(default="", description="CloudWatch log stream name")

    @field_validator("level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        return Level.parse(value).label

    @property
    def cloudwatch_enabled(self) -> bool:
        return bool(self.cloudwatch_region and self.cloudwatch_group and self.cloudwatch_stream)
