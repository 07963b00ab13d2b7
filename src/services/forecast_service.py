import json
import textwrap
from datetime import datetime
from typing import Any, Dict, Optional

import httpx
import openai
import structlog
from openai import AsyncOpenAI
from pydantic import ValidationError

from src.config.config import Config
from src.exceptions.forecast import (
    EmptyCompletionError,
    ForecastParseError,
    ForecastSchemaError,
    ProviderRequestError,
)
from src.models.forecast.forecast_response import ForecastDays

logger = structlog.get_logger(__name__)

EMPTY_COMPLETION_MESSAGE = "No response from OpenAI."
PARSE_FAILURE_MESSAGE = "Failed to parse forecast data."

FORECAST_PROMPT_TEMPLATE = textwrap.dedent(
    """
    Give a five-day weather forecast for {location} in the style of a sports announcer.
    Respond ONLY in this strict JSON format:

    {{
      "day1": "Exciting Day 1 forecast here...",
      "day2": "Day 2 keeps the action going...",
      "day3": "Midweek heat or chill on Day 3...",
      "day4": "Approaching the weekend with Day 4...",
      "day5": "Final day of the week showdown..."
    }}
    """
)


def _reject_constant(name: str):
    # NaN and Infinity are not JSON
    raise ValueError(f"Invalid JSON constant: {name}")


def build_forecast_prompt(location: str) -> str:
    """Build the announcer-style forecast instruction for a location."""
    return FORECAST_PROMPT_TEMPLATE.format(location=location)


class ForecastService:
    """
    Service that turns a location into an announcer-style five-day forecast.

    Each call issues exactly one chat completion request and parses the
    returned text as JSON. Nothing is cached or retried here; retries, if
    any, are the OpenAI client's own.
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str = "gpt-4",
        temperature: float = 0.8,
        strict_schema: bool = False,
    ):
        self.client = client
        self.model = model
        self.temperature = temperature
        self.strict_schema = strict_schema

    @classmethod
    def from_config(cls, settings: Config) -> "ForecastService":
        """
        Create a service and its OpenAI client from application settings.

        Args:
            settings: Loaded application configuration

        Returns:
            ForecastService bound to a new AsyncOpenAI client
        """
        client_kwargs: Dict[str, Any] = {
            "api_key": settings.openai_api_key,
            "max_retries": settings.openai_max_retries,
        }
        if settings.openai_timeout is not None:
            client_kwargs["timeout"] = httpx.Timeout(settings.openai_timeout, connect=10.0)

        logger.info(
            "Creating forecast service",
            model=settings.openai_model,
            temperature=settings.openai_temperature,
            timeout=settings.openai_timeout,
            max_retries=settings.openai_max_retries,
            strict_schema=settings.forecast_strict_schema,
        )
        return cls(
            client=AsyncOpenAI(**client_kwargs),
            model=settings.openai_model,
            temperature=settings.openai_temperature,
            strict_schema=settings.forecast_strict_schema,
        )

    async def _request_completion(self, prompt: str) -> Optional[str]:
        """
        Send the prompt to the chat completion endpoint.

        Returns:
            Text content of the first choice, or None if there is none

        Raises:
            ProviderRequestError: If the OpenAI client raises
        """
        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
            )
        except openai.OpenAIError as e:
            logger.warning("Completion request failed", model=self.model, error=str(e))
            raise ProviderRequestError(str(e)) from e

        if not completion.choices:
            return None
        return completion.choices[0].message.content

    def _parse_forecast(self, content: str) -> Any:
        try:
            forecast = json.loads(content, parse_constant=_reject_constant)
        except ValueError as e:
            logger.error("JSON parsing error", error=str(e))
            raise ForecastParseError(PARSE_FAILURE_MESSAGE) from e

        if self.strict_schema:
            try:
                ForecastDays.model_validate(forecast)
            except ValidationError as e:
                logger.error("Forecast failed schema validation", error=str(e))
                raise ForecastSchemaError(PARSE_FAILURE_MESSAGE) from e

        return forecast

    async def get_forecast(self, location: str) -> Any:
        """
        Get an announcer-style five-day forecast for a location.

        Args:
            location: Non-empty location name, embedded verbatim in the prompt

        Returns:
            The parsed JSON value produced by the model

        Raises:
            EmptyCompletionError: If the model returned no text
            ForecastParseError: If the text is not JSON (or, in strict mode,
                not a day1..day5 object)
            ProviderRequestError: If the OpenAI request failed
        """
        start_time = datetime.now()
        logger.info("Requesting forecast", location=location, model=self.model)

        content = await self._request_completion(build_forecast_prompt(location))
        if not content:
            logger.warning("Empty completion received", location=location)
            raise EmptyCompletionError(EMPTY_COMPLETION_MESSAGE)

        forecast = self._parse_forecast(content)

        logger.info(
            "Forecast generated",
            location=location,
            duration_seconds=(datetime.now() - start_time).total_seconds(),
        )
        return forecast

    async def close(self):
        """Close the underlying OpenAI client."""
        await self.client.close()
