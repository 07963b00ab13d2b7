from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest

from src.config.config import Config
from src.exceptions.forecast import (
    EmptyCompletionError,
    ForecastParseError,
    ForecastSchemaError,
    ProviderRequestError,
)
from src.services.forecast_service import ForecastService, build_forecast_prompt
from tests.conftest import make_completion


class TestBuildForecastPrompt:
    """Test cases for prompt construction."""

    def test_prompt_contains_location_verbatim(self):
        prompt = build_forecast_prompt("São Paulo, BR")

        assert "forecast for São Paulo, BR in the style of a sports announcer" in prompt

    def test_prompt_requests_five_day_keys(self):
        prompt = build_forecast_prompt("Austin")

        assert "strict JSON" in prompt
        for day in ("day1", "day2", "day3", "day4", "day5"):
            assert f'"{day}"' in prompt

    def test_prompt_keeps_braces_in_location(self):
        """Locations are inserted as data, not as format fields."""
        prompt = build_forecast_prompt("{weird} town")

        assert "{weird} town" in prompt


class TestForecastService:
    """Test cases for the ForecastService class."""

    @pytest.mark.asyncio
    async def test_get_forecast_success(self, forecast_service, mock_openai_client):
        result = await forecast_service.get_forecast("Austin")

        assert result == {
            "day1": "Sunny skies!",
            "day2": "Clouds roll in",
            "day3": "Rain delay!",
            "day4": "Clearing up",
            "day5": "Championship weather",
        }
        mock_openai_client.chat.completions.create.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_get_forecast_request_parameters(self, forecast_service, mock_openai_client):
        await forecast_service.get_forecast("Austin")

        call_kwargs = mock_openai_client.chat.completions.create.call_args.kwargs
        assert call_kwargs["model"] == "gpt-4"
        assert call_kwargs["temperature"] == 0.8
        assert len(call_kwargs["messages"]) == 1
        assert call_kwargs["messages"][0]["role"] == "user"
        assert call_kwargs["messages"][0]["content"] == build_forecast_prompt("Austin")

    @pytest.mark.asyncio
    async def test_get_forecast_passes_through_partial_object(self, forecast_service, mock_openai_client):
        mock_openai_client.chat.completions.create.return_value = make_completion('{"day1": "Only one"}')

        result = await forecast_service.get_forecast("Austin")

        assert result == {"day1": "Only one"}

    @pytest.mark.asyncio
    async def test_get_forecast_empty_content(self, forecast_service, mock_openai_client):
        mock_openai_client.chat.completions.create.return_value = make_completion("")

        with pytest.raises(EmptyCompletionError, match="No response from OpenAI."):
            await forecast_service.get_forecast("Austin")

    @pytest.mark.asyncio
    async def test_get_forecast_null_content(self, forecast_service, mock_openai_client):
        mock_openai_client.chat.completions.create.return_value = make_completion(None)

        with pytest.raises(EmptyCompletionError):
            await forecast_service.get_forecast("Austin")

    @pytest.mark.asyncio
    async def test_get_forecast_no_choices(self, forecast_service, mock_openai_client):
        mock_openai_client.chat.completions.create.return_value = make_completion(None, with_choice=False)

        with pytest.raises(EmptyCompletionError):
            await forecast_service.get_forecast("Austin")

    @pytest.mark.asyncio
    async def test_get_forecast_invalid_json(self, forecast_service, mock_openai_client):
        mock_openai_client.chat.completions.create.return_value = make_completion(
            "Folks, it's going to be a scorcher!"
        )

        with pytest.raises(ForecastParseError, match="Failed to parse forecast data.") as exc_info:
            await forecast_service.get_forecast("Austin")

        assert "scorcher" not in str(exc_info.value)
        assert mock_openai_client.chat.completions.create.await_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_text", ["NaN", '{"day1": Infinity}', "-Infinity"])
    async def test_get_forecast_rejects_non_standard_constants(
        self, forecast_service, mock_openai_client, raw_text
    ):
        mock_openai_client.chat.completions.create.return_value = make_completion(raw_text)

        with pytest.raises(ForecastParseError, match="Failed to parse forecast data."):
            await forecast_service.get_forecast("Austin")

    @pytest.mark.asyncio
    async def test_get_forecast_provider_error(self, forecast_service, mock_openai_client):
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        mock_openai_client.chat.completions.create.side_effect = openai.APIConnectionError(request=request)

        with pytest.raises(ProviderRequestError, match="Connection error."):
            await forecast_service.get_forecast("Austin")

    @pytest.mark.asyncio
    async def test_get_forecast_unexpected_error_propagates(self, forecast_service, mock_openai_client):
        mock_openai_client.chat.completions.create.side_effect = RuntimeError("socket closed")

        with pytest.raises(RuntimeError, match="socket closed"):
            await forecast_service.get_forecast("Austin")

    @pytest.mark.asyncio
    async def test_strict_schema_rejects_missing_days(self, mock_openai_client):
        mock_openai_client.chat.completions.create.return_value = make_completion('{"day1": "Only one"}')
        service = ForecastService(client=mock_openai_client, strict_schema=True)

        with pytest.raises(ForecastSchemaError, match="Failed to parse forecast data."):
            await service.get_forecast("Austin")

    @pytest.mark.asyncio
    async def test_strict_schema_accepts_complete_forecast(self, mock_openai_client):
        service = ForecastService(client=mock_openai_client, strict_schema=True)

        result = await service.get_forecast("Austin")

        assert result["day5"] == "Championship weather"

    @pytest.mark.asyncio
    async def test_close_closes_client(self, forecast_service, mock_openai_client):
        await forecast_service.close()

        mock_openai_client.close.assert_awaited_once()


class TestForecastServiceFromConfig:
    """Test cases for building the service from settings."""

    def test_from_config_uses_settings(self):
        settings = Config(
            _env_file=None,
            openai_api_key="sk-test",
            openai_model="gpt-4o",
            openai_temperature=0.5,
            forecast_strict_schema=True,
        )

        service = ForecastService.from_config(settings)

        assert service.model == "gpt-4o"
        assert service.temperature == 0.5
        assert service.strict_schema is True
        assert service.client.api_key == "sk-test"
        assert service.client.max_retries == 2

    def test_from_config_with_timeout(self):
        settings = Config(_env_file=None, openai_api_key="sk-test", openai_timeout=5.0, openai_max_retries=0)

        service = ForecastService.from_config(settings)

        assert service.client.max_retries == 0
        assert service.client.timeout.read == 5.0
