from src.exceptions.base import ForecastAnnouncerError


class OpenAIKeyError(ForecastAnnouncerError):
    """Exception for a missing or empty OpenAI API key."""

    pass
