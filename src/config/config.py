from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.exceptions.openai.openai_key_error import OpenAIKeyError


class Config(BaseSettings):
    """
    Application settings loaded from environment variables and .env files.

    Holds the OpenAI credential and completion parameters, the HTTP bind
    address and the logging options for the forecast announcer service.
    """

    # OpenAI Configuration
    openai_api_key: str = Field(..., description="OpenAI API key used for forecast completions")
    openai_model: str = Field(default="gpt-4", description="Chat completion model identifier")
    openai_temperature: float = Field(default=0.8, ge=0.0, le=2.0, description="Sampling temperature")
    openai_timeout: Optional[float] = Field(
        default=None, gt=0, description="Request timeout in seconds (client default when unset)"
    )
    openai_max_retries: int = Field(default=2, ge=0, description="Retries performed by the OpenAI client")

    # Forecast Configuration
    forecast_strict_schema: bool = Field(
        default=False, description="Reject forecasts that do not contain day1..day5 strings"
    )

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="FastAPI host")
    api_port: int = Field(
        default=3001,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("port", "api_port"),
        description="FastAPI port",
    )

    # Logging Configuration
    environment: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="text", description="Log format (json/text)")
    log_dir: Optional[str] = Field(default=None, description="Directory for log files (console only when unset)")

    @field_validator("openai_api_key")
    def validate_openai_api_key(cls, v):
        # Check whether OpenAI Key is provided
        if not v or not v.strip():
            raise OpenAIKeyError("OpenAI API key is required")
        return v

    @field_validator("log_level")
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    def validate_log_format(cls, v):
        if v.lower() not in ("json", "text"):
            raise ValueError(f"Invalid log format: {v}. Must be 'json' or 'text'")
        return v.lower()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )


config = Config()
