"""
Контракты DTO между доменами проекта LiveCommerce OCR.

Все контракты используют Pydantic v2 для валидации.

Контракты:
- Вход: ExtractionRequest
- Extraction -> Post-OCR: OcrReading
- Post-OCR -> вызывающая сторона: ExtractionOutcome, ExtractionSuccess, ExtractionFailure
"""

from .metrics_dto import (
    ExtractionFailure,
    ExtractionOutcome,
    ExtractionRequest,
    ExtractionSuccess,
    OcrReading,
    Platform,
    PlatformReading,
)

__all__ = [
    "ExtractionRequest",
    "OcrReading",
    "Platform",
    "PlatformReading",
    "ExtractionOutcome",
    "ExtractionSuccess",
    "ExtractionFailure",
]
