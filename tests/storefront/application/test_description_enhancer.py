"""Tests for Gemini-backed copy rewriting and its fallbacks."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from storefront.enhancement.gemini import FALLBACK_REVIEW, DescriptionEnhancer
from storefront.utils.settings import Settings


@pytest.fixture
def mock_client():
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=SimpleNamespace(text="  Fresh copy.  "))
    return client


@pytest.mark.asyncio
async def test_enhance_returns_model_text(mock_client):
    enhancer = DescriptionEnhancer(mock_client, model="test-model", temperature=0.7)

    result = await enhancer.enhance("Smart Watch Pro", "A watch.")

    assert result == "Fresh copy."
    kwargs = mock_client.aio.models.generate_content.call_args.kwargs
    assert kwargs["model"] == "test-model"
    assert "Smart Watch Pro" in kwargs["contents"]
    assert "A watch." in kwargs["contents"]
    assert kwargs["config"].temperature == 0.7


@pytest.mark.asyncio
async def test_enhance_falls_back_on_error(mock_client):
    mock_client.aio.models.generate_content = AsyncMock(side_effect=RuntimeError("quota exceeded"))
    enhancer = DescriptionEnhancer(mock_client)

    assert await enhancer.enhance("Smart Watch Pro", "A watch.") == "A watch."


@pytest.mark.asyncio
async def test_enhance_falls_back_on_empty_reply(mock_client):
    mock_client.aio.models.generate_content = AsyncMock(return_value=SimpleNamespace(text=None))
    enhancer = DescriptionEnhancer(mock_client)

    assert await enhancer.enhance("Smart Watch Pro", "A watch.") == "A watch."


@pytest.mark.asyncio
async def test_enhance_without_client_returns_current_text():
    enhancer = DescriptionEnhancer(client=None)
    assert await enhancer.enhance("Smart Watch Pro", "A watch.") == "A watch."


@pytest.mark.asyncio
async def test_suggest_review(mock_client):
    enhancer = DescriptionEnhancer(mock_client)

    assert await enhancer.suggest_review("Leather Backpack") == "Fresh copy."
    assert mock_client.aio.models.generate_content.call_args.kwargs["config"].temperature == 0.8


@pytest.mark.asyncio
async def test_suggest_review_fallback(mock_client):
    mock_client.aio.models.generate_content = AsyncMock(side_effect=TimeoutError())
    enhancer = DescriptionEnhancer(mock_client)

    assert await enhancer.suggest_review("Leather Backpack") == FALLBACK_REVIEW


def test_from_settings_without_key_has_no_client(tmp_path):
    enhancer = DescriptionEnhancer.from_settings(Settings(state_dir=tmp_path))
    assert enhancer._client is None


@pytest.mark.asyncio
async def test_controller_enhancement_does_not_change_product(shop, mock_client):
    shop.enhancer = DescriptionEnhancer(mock_client)

    assert await shop.enhance_description("p1") == "Fresh copy."
    assert shop.find_product("p1").description.startswith("An advanced smart watch")


@pytest.mark.asyncio
async def test_controller_enhancement_of_unknown_product(shop, mock_client):
    shop.enhancer = DescriptionEnhancer(mock_client)

    assert await shop.enhance_description("ghost") is None
    mock_client.aio.models.generate_content.assert_not_called()
