"""
Домен Extraction: вызов OCR.space с повторами.

Граница домена: contracts.metrics_dto.OcrReading
"""

from .infrastructure.ocr_space_client import OCRSpaceClient
from .ocr_invoker import OcrInvoker

__all__ = [
    "OCRSpaceClient",
    "OcrInvoker",
]
