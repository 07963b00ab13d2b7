from fastapi import Request

from src.services.forecast_service import ForecastService


def get_forecast_service(request: Request) -> ForecastService:
    """
    Resolve the forecast service created during application startup.

    Args:
        request: Incoming request carrying the application state

    Returns:
        The application's ForecastService instance
    """
    return request.app.state.forecast_service
