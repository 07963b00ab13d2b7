from src.exceptions.forecast.forecast_parse_error import ForecastParseError


class ForecastSchemaError(ForecastParseError):
    """Exception for parsed forecasts missing the expected day fields."""

    pass
