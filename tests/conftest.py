import os

os.environ.setdefault("OPENAI_API_KEY", "test-openai-key")

from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from openai.types.chat import ChatCompletion, ChatCompletionMessage
from openai.types.chat.chat_completion import Choice

from src.services.forecast_service import ForecastService

AUSTIN_FORECAST_TEXT = (
    '{"day1":"Sunny skies!","day2":"Clouds roll in","day3":"Rain delay!",'
    '"day4":"Clearing up","day5":"Championship weather"}'
)


def make_completion(content: Optional[str], with_choice: bool = True) -> ChatCompletion:
    """Build a chat completion as returned by the OpenAI SDK."""
    choices = []
    if with_choice:
        choices.append(
            Choice(
                finish_reason="stop",
                index=0,
                message=ChatCompletionMessage(role="assistant", content=content),
            )
        )
    return ChatCompletion(
        id="chatcmpl-test",
        choices=choices,
        created=1700000000,
        model="gpt-4",
        object="chat.completion",
    )


@pytest.fixture
def austin_forecast_text():
    """Provider text for the Austin end-to-end example."""
    return AUSTIN_FORECAST_TEXT


@pytest.fixture
def mock_openai_client():
    """Mock AsyncOpenAI client answering with the Austin forecast."""
    mock_client = MagicMock()
    mock_client.chat.completions.create = AsyncMock(
        return_value=make_completion(AUSTIN_FORECAST_TEXT)
    )
    mock_client.close = AsyncMock()
    return mock_client


@pytest.fixture
def forecast_service(mock_openai_client):
    """Forecast service bound to the mock OpenAI client."""
    return ForecastService(client=mock_openai_client, model="gpt-4", temperature=0.8)


@pytest.fixture
def client(forecast_service):
    """Test client for an app using the mocked forecast service."""
    from main import create_app

    app = create_app(forecast_service=forecast_service)
    with TestClient(app) as test_client:
        yield test_client
