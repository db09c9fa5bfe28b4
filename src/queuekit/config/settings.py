"""Application settings and configuration."""

from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProviderSettings(BaseSettings):
    """Queue provider configuration."""

    type: Literal["sqs", "custom"] = Field(default="sqs", description="Queue provider type")

    # AWS SQS configuration
    sqs_region: str = Field(default="us-east-1", description="AWS region for SQS")
    sqs_endpoint_url: str = Field(
        default="", description="Override endpoint URL (e.g. a local SQS emulator)"
    )
    aws_access_key_id: str = Field(default="", description="AWS access key ID")
    aws_secret_access_key: str = Field(default="", description="AWS secret access key")
    aws_session_token: str = Field(default="", description="AWS session token")
    default_wait_time_seconds: int = Field(
        default=20,
        ge=0,
        le=20,
        description="ReceiveMessageWaitTimeSeconds applied to new queues",
    )

    # Custom provider configuration
    custom_module: str = Field(
        default="", description="Python module path for custom queue provider"
    )
    custom_class: str = Field(default="", description="Class name for custom queue provider")
    custom_config: dict[str, Any] = Field(
        default_factory=dict, description="Custom configuration passed to provider"
    )

    def client_config(self) -> dict[str, Any]:
        """Keyword arguments for ``boto3.client("sqs", ...)``."""
        config: dict[str, Any] = {"region_name": self.sqs_region}
        if self.sqs_endpoint_url:
            config["endpoint_url"] = self.sqs_endpoint_url
        if self.aws_access_key_id:
            config["aws_access_key_id"] = self.aws_access_key_id
            config["aws_secret_access_key"] = self.aws_secret_access_key
        if self.aws_session_token:
            config["aws_session_token"] = self.aws_session_token
        return config


class CodecSettings(BaseSettings):
    """Payload codec configuration."""

    serializer: Literal["pickle", "json"] = Field(
        default="pickle", description="Payload serialization format"
    )
    compression_level: int = Field(
        default=9, ge=0, le=9, description="zlib compression level"
    )


class MonitoringSettings(BaseSettings):
    """Monitoring and observability configuration."""

    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["json", "text"] = Field(default="json", description="Log format")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")
        return v.upper()


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="QUEUEKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    provider: ProviderSettings = Field(default_factory=ProviderSettings)
    codec: CodecSettings = Field(default_factory=CodecSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)


# Global settings instance
settings = Settings()
