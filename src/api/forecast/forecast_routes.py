from typing import Optional

import structlog
from fastapi import APIRouter, Body, Depends, HTTPException, status

from src.api.dependencies import get_forecast_service
from src.exceptions.forecast import (
    EmptyCompletionError,
    ForecastParseError,
    ProviderRequestError,
)
from src.models.forecast import ForecastRequest, ForecastResponse
from src.services.forecast_service import ForecastService

logger = structlog.get_logger(__name__)

MISSING_LOCATION_MESSAGE = "Please provide a location in the request body."
GENERIC_ERROR_MESSAGE = "Internal Server Error"

# Create router
router = APIRouter(prefix="/forecast", tags=["Forecast"])


@router.post("", summary="Get Announcer Forecast", response_model=ForecastResponse)
async def create_forecast(
    request: Optional[ForecastRequest] = Body(default=None),
    forecast_service: ForecastService = Depends(get_forecast_service),
):
    """
    Get a five-day weather forecast for a location in the style of a sports announcer.

    The forecast text is generated by an OpenAI chat model and returned as the
    parsed JSON object the model produced, normally with keys ``day1`` to ``day5``.

    Args:
        request: The request payload containing the location.
        forecast_service: Service issuing the completion request.

    Returns:
        ``{"result": <forecast>}``

    Raises:
        HTTPException: 400 if no location is given, 500 for any provider or parse failure.
    """
    location = request.location if request else None
    if not location or not location.strip():
        logger.warning("Forecast request without location")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=MISSING_LOCATION_MESSAGE,
        )

    logger.info("API request: Get forecast", location=location)
    try:
        forecast = await forecast_service.get_forecast(location)
        return ForecastResponse(result=forecast)

    except (EmptyCompletionError, ForecastParseError) as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        )

    except ProviderRequestError as e:
        logger.error("Forecast provider request failed", location=location, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e) or GENERIC_ERROR_MESSAGE,
        )

    except Exception as e:
        logger.error("Failed to get forecast", location=location, error=str(e), exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e) or GENERIC_ERROR_MESSAGE,
        )
