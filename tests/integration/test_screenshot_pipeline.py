"""
Интеграционные тесты: OcrInvoker + OCRSpaceClient + разбор.

HTTP подменяется через httpx.MockTransport. Тест с настоящим OCR.space
запускается только при наличии ключа и скриншота.
"""

import asyncio
import os
from pathlib import Path

import httpx
import pytest

from config.settings import DATA_DIR
from livecommerce_ocr.application.factory import MetricsComponentFactory
from livecommerce_ocr.extraction.infrastructure.ocr_space_client import OCRSpaceClient

DUAL_SCREEN_TEXT = (
    "TikTok Shop LIVE\n"
    "GMV Langsung: Rp 1.250.000\n"
    "Waktu siaran 1 jam 45 menit\n"
    "Shopee Live\n"
    "Penjualan (Rp)\n2.480.500\n"
    "Produk Terjual 37\n"
    "Waktu 02:10:05\n"
)


class FakeSleep:
    def __init__(self):
        self.waits = []

    async def __call__(self, seconds):
        self.waits.append(seconds)


def ocr_space_payload(text):
    return {
        "OCRExitCode": 1,
        "IsErroredOnProcessing": False,
        "ParsedResults": [{"ParsedText": text, "TextOrientation": "0"}],
    }


@pytest.fixture
def screenshot(tmp_path):
    """Fixture: локальный файл скриншота (содержимое для мока не важно)."""
    path = tmp_path / "dual_live.png"
    path.write_bytes(b"\x89PNG fake")
    return path


def make_invoker(handler, sleep=None):
    provider = OCRSpaceClient(
        endpoint="https://ocr.test/parse/image",
        timeout_ms=1000,
        transport=httpx.MockTransport(handler),
    )
    invoker = MetricsComponentFactory.create_invoker(api_key="test-key", provider=provider)
    if sleep is not None:
        invoker._sleep = sleep
    return invoker


def test_dual_platform_screenshot_envelope(screenshot):
    """Тест: составной скриншот -> обе платформы, primary по максимальному GMV."""
    invoker = make_invoker(lambda request: httpx.Response(200, json=ocr_space_payload(DUAL_SCREEN_TEXT)))

    result = asyncio.run(invoker.extract_metrics_from_image(image_path=screenshot))
    data = result.to_dict()

    assert data["success"] is True
    assert data["isDualPlatform"] is True
    assert data["primaryPlatform"] == "SHOPEE"
    assert data["platform"] == "SHOPEE"
    assert data["parsedGMV"] == 2480500
    assert data["parsedDuration"] == "2 jam 10 menit"
    assert data["rawText"] == DUAL_SCREEN_TEXT
    assert [p["platform"] for p in data["platforms"]] == ["SHOPEE", "TIKTOK"]
    assert data["platforms"][1]["parsedGMV"] == 1250000
    assert data["platforms"][1]["parsedDuration"] == "1 jam"


def test_retry_after_provider_errors(screenshot):
    """Тест: две ошибки OCR.space, затем успех на третьей попытке."""
    responses = iter([
        httpx.Response(200, json={"IsErroredOnProcessing": True, "ErrorMessage": ["E500: busy"]}),
        httpx.Response(503, json={}),
        httpx.Response(200, json=ocr_space_payload("GMV Rp 75.000")),
    ])
    sleep = FakeSleep()
    invoker = make_invoker(lambda request: next(responses), sleep)

    result = asyncio.run(invoker.extract_metrics_from_image(image_path=screenshot))

    assert result.success is True
    assert result.parsed_gmv == 75000
    assert sleep.waits == [2, 4]


def test_invalid_api_key_failure_envelope(screenshot):
    """Тест: ошибка ключа не повторяется, конверт ошибки в camelCase."""
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={
            "IsErroredOnProcessing": True,
            "ErrorMessage": ["The API key is invalid"],
        })

    invoker = make_invoker(handler, FakeSleep())
    result = asyncio.run(invoker.extract_metrics_from_image(image_path=screenshot))

    assert len(calls) == 1
    assert result.to_dict() == {
        "success": False,
        "error": "The API key is invalid",
        "errorKind": "ProviderProcessingError",
        "rawText": None,
        "parsedGMV": 0.0,
    }


@pytest.mark.parametrize("payload", [
    {"ParsedResults": ["oops"]},
    {"ParsedResults": [{"ParsedText": 12345}]},
])
def test_malformed_reply_becomes_failure_envelope(screenshot, payload):
    """Тест: ответ OCR.space неожиданной формы -> повторы и конверт ошибки, без исключения."""
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=payload)

    sleep = FakeSleep()
    invoker = make_invoker(handler, sleep)
    result = asyncio.run(invoker.extract_metrics_from_image(image_path=screenshot))

    assert result.success is False
    assert result.error_kind in ("EmptyProviderResponse", "NoTextDetected")
    assert result.parsed_gmv == 0
    assert len(calls) == 4
    assert sleep.waits == [2, 4, 6]


@pytest.fixture
def live_screenshot():
    """Fixture: реальный скриншот для проверки с настоящим OCR.space."""
    if not os.getenv("OCRSPACE_API_KEY"):
        pytest.skip("OCRSPACE_API_KEY not set")
    path = Path(os.getenv("LIVE_SCREENSHOT", str(DATA_DIR / "input" / "live.jpg")))
    if not path.exists():
        pytest.skip(f"Screenshot not found: {path}")
    return path


def test_real_ocr_space_returns_envelope(live_screenshot):
    invoker = MetricsComponentFactory.create_invoker()
    result = asyncio.run(invoker.extract_metrics_from_image(image_path=live_screenshot))

    data = result.to_dict()
    assert data["success"] is result.success
    assert "parsedGMV" in data
    assert "rawText" in data
    if result.success:
        assert result.raw_text
        assert "platforms" in data
        assert data["primaryPlatform"] in ("TIKTOK", "SHOPEE")
    else:
        assert data["errorKind"]
        assert data["parsedGMV"] == 0
