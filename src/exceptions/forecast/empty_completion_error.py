from src.exceptions.forecast.forecast_service_error import ForecastServiceError


class EmptyCompletionError(ForecastServiceError):
    """Exception for completions that carry no text content."""

    pass
