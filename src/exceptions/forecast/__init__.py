from src.exceptions.forecast.empty_completion_error import EmptyCompletionError
from src.exceptions.forecast.forecast_parse_error import ForecastParseError
from src.exceptions.forecast.forecast_schema_error import ForecastSchemaError
from src.exceptions.forecast.forecast_service_error import ForecastServiceError
from src.exceptions.forecast.provider_request_error import ProviderRequestError

__all__ = [
    "EmptyCompletionError",
    "ForecastParseError",
    "ForecastSchemaError",
    "ForecastServiceError",
    "ProviderRequestError",
]
