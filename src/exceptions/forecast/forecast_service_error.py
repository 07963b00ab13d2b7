from src.exceptions.base import ForecastAnnouncerError


class ForecastServiceError(ForecastAnnouncerError):
    """Base exception for forecast service errors."""

    pass
