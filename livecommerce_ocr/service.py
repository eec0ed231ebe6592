"""
Публичный API LiveCommerce OCR.

    from livecommerce_ocr import extract_metrics_from_image

    result = await extract_metrics_from_image(image_path="live.jpg")
    if result.success:
        print(result.primary_platform, result.parsed_gmv, result.parsed_duration)

Чистые функции (без сети) доступны отдельно для тестов и переиспользования.
"""

from pathlib import Path
from typing import Optional, Union

from contracts.metrics_dto import ExtractionOutcome
from .application.factory import MetricsComponentFactory
from .extraction.ocr_invoker import ExtractionResult
from .post_ocr.gmv_extractor import is_valid_gmv
from .post_ocr.orchestrator import ExtractionOrchestrator

_orchestrator = ExtractionOrchestrator()
_gmv = _orchestrator.gmv_extractor
_duration = _orchestrator.duration_extractor


async def extract_metrics_from_image(
    image_path: Optional[Union[str, Path]] = None,
    image_url: Optional[str] = None,
    api_key: Optional[str] = None
) -> ExtractionResult:
    """OCR скриншота + разбор метрик. Никогда не бросает доменных исключений."""
    invoker = MetricsComponentFactory.create_invoker(api_key=api_key, orchestrator=_orchestrator)
    return await invoker.extract_metrics_from_image(image_path=image_path, image_url=image_url)


def detect_and_parse_platform(text: str) -> ExtractionOutcome:
    return _orchestrator.parse(text)


def parse_tiktok_gmv(text: str) -> float:
    return _gmv.extract_tiktok(text) or 0.0


def parse_shopee_gmv(text: str) -> float:
    return _gmv.extract_shopee(text) or 0.0


def parse_tiktok_duration(text: str) -> Optional[str]:
    return _duration.extract_tiktok(text)


def parse_shopee_duration(text: str) -> Optional[str]:
    return _duration.extract_shopee(text)


__all__ = [
    "extract_metrics_from_image",
    "detect_and_parse_platform",
    "parse_tiktok_gmv",
    "parse_shopee_gmv",
    "parse_tiktok_duration",
    "parse_shopee_duration",
    "is_valid_gmv",
]
