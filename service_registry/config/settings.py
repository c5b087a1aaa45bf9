"""Validated settings models."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


class LoggingSettings(BaseModel):
    """Where and how much the registry logs."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = False
    level: LogLevel = "INFO"
    # "stderr", "stdout", or a file path
    sink: str = "stderr"
    format: str = DEFAULT_LOG_FORMAT

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value):
        return value.upper() if isinstance(value, str) else value


class RegistrySettings(BaseModel):
    """Behaviour of the binding table."""

    model_config = ConfigDict(extra="forbid")

    qualify_method_names: bool = False


class Settings(BaseModel):
    """Top-level settings."""

    model_config = ConfigDict(extra="forbid")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    registry: RegistrySettings = Field(default_factory=RegistrySettings)
