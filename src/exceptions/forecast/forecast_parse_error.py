from src.exceptions.forecast.forecast_service_error import ForecastServiceError


class ForecastParseError(ForecastServiceError):
    """Exception for completion text that is not valid JSON."""

    pass
