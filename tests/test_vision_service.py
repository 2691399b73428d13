"""Tests for food analysis service."""

import asyncio

from nutrilog.services.images import to_data_url
from nutrilog.services.vision import FoodAnalysisService
from tests.conftest import FakeVisionClient


def _service(client: FakeVisionClient) -> FoodAnalysisService:
    return FoodAnalysisService(
        client=client,
        model="gpt-5.2",
        reasoning_effort="low",
        store=False,
    )


def test_analyze_image_returns_structured_items() -> None:
    client = FakeVisionClient()

    result = asyncio.run(_service(client).analyze_image(b"\xff\xd8\xffimage"))

    assert result.success
    assert result.food_items[0].food_name == "Grilled chicken"
    assert result.total_nutrition.calories == 510
    assert client.calls[0]["image_data_url"].startswith("data:image/jpeg;base64,")


def test_analyze_image_malformed_output() -> None:
    client = FakeVisionClient(output="not json")

    result = asyncio.run(_service(client).analyze_image(b"image"))

    assert not result.success
    assert result.error == "Failed to parse nutrition data from image analysis"


def test_analyze_image_invalid_values() -> None:
    client = FakeVisionClient(output='{"success": true, "total_nutrition": {"calories": -5}}')

    result = asyncio.run(_service(client).analyze_image(b"image"))

    assert not result.success


def test_analyze_description_fills_missing_description() -> None:
    client = FakeVisionClient(
        output='{"success": true, "food_items": [], '
        '"total_nutrition": {"calories": 90, "protein": null, "carbs": 23, '
        '"fats": null, "fiber": 2.6}, "meal_description": "", "error": null}'
    )

    result = asyncio.run(_service(client).analyze_description("a banana"))

    assert result.success
    assert result.meal_description == "a banana"
    assert '"a banana"' in client.calls[0]["prompt"]
    assert client.calls[0]["image_data_url"] is None


def test_analyze_description_not_food() -> None:
    client = FakeVisionClient(
        output='{"success": false, "food_items": [], "total_nutrition": null, '
        '"meal_description": "", "error": "Not a food description"}'
    )

    result = asyncio.run(_service(client).analyze_description("a chair"))

    assert not result.success
    assert result.error == "Not a food description"
    assert result.meal_description == ""


def test_analyze_description_malformed_output() -> None:
    result = asyncio.run(
        _service(FakeVisionClient(output="{")).analyze_description("soup")
    )
    assert result.error == "Failed to parse nutrition data"


def test_to_data_url_uses_png_header() -> None:
    url = to_data_url(b"\x89PNG\r\n\x1a\n" + b"rest")
    assert url.startswith("data:image/png;base64,")


def test_to_data_url_detects_webp() -> None:
    url = to_data_url(b"RIFF\x00\x00\x00\x00WEBPVP8 ")
    assert url.startswith("data:image/webp;base64,")


def test_to_data_url_defaults_to_jpeg() -> None:
    assert to_data_url(b"unknown").startswith("data:image/jpeg;base64,")
