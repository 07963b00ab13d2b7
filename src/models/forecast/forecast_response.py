from typing import Any

from pydantic import BaseModel, Field


class ForecastDays(BaseModel):
    """Five-day forecast in the shape requested from the model."""

    day1: str = Field(..., description="Day 1 forecast")
    day2: str = Field(..., description="Day 2 forecast")
    day3: str = Field(..., description="Day 3 forecast")
    day4: str = Field(..., description="Day 4 forecast")
    day5: str = Field(..., description="Day 5 forecast")


class ForecastResponse(BaseModel):
    """Response model wrapping the parsed forecast."""

    result: Any = Field(..., description="Forecast object as returned by the model")
