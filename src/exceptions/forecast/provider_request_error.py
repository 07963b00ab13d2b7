from src.exceptions.forecast.forecast_service_error import ForecastServiceError


class ProviderRequestError(ForecastServiceError):
    """Exception for errors raised by the completion provider client."""

    pass
