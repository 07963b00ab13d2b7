from src.exceptions.base import ForecastAnnouncerError
from src.exceptions.forecast import (
    EmptyCompletionError,
    ForecastParseError,
    ForecastSchemaError,
    ForecastServiceError,
    ProviderRequestError,
)
from src.exceptions.openai import OpenAIKeyError

__all__ = [
    "ForecastAnnouncerError",
    "EmptyCompletionError",
    "ForecastParseError",
    "ForecastSchemaError",
    "ForecastServiceError",
    "ProviderRequestError",
    "OpenAIKeyError",
]
