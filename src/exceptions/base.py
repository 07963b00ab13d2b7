class ForecastAnnouncerError(Exception):
    """Base exception for all forecast announcer errors."""

    pass
