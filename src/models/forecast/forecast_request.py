from typing import Optional

from pydantic import BaseModel, Field


class ForecastRequest(BaseModel):
    """Request model for announcer forecasts."""

    location: Optional[str] = Field(
        default=None,
        description="City or place name to forecast",
        examples=["Austin"],
    )
