from src.models.forecast.forecast_request import ForecastRequest
from src.models.forecast.forecast_response import ForecastDays, ForecastResponse

__all__ = ["ForecastDays", "ForecastRequest", "ForecastResponse"]
