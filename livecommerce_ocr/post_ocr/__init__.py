"""
Домен Post-OCR: разбор текста OCR в метрики.

Нормализация -> детекция платформ -> GMV / длительность -> ExtractionOutcome.
"""

from .duration_extractor import DurationExtractor
from .gmv_extractor import GMVExtractor, is_valid_gmv
from .number_normalizer import NumberNormalizer, apply_multiplier, clean_number
from .orchestrator import ExtractionOrchestrator
from .platform_detector import PlatformDetector, PlatformSignals
from .text_normalizer import TextNormalizer, normalize_text

__all__ = [
    "DurationExtractor",
    "GMVExtractor",
    "is_valid_gmv",
    "NumberNormalizer",
    "apply_multiplier",
    "clean_number",
    "ExtractionOrchestrator",
    "PlatformDetector",
    "PlatformSignals",
    "TextNormalizer",
    "normalize_text",
]
