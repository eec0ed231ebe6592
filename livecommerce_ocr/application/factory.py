"""
Фабрика для создания компонентов LiveCommerce OCR.

Собирает Extraction (OCR.space + повторы) и Post-OCR разбор
через единый интерфейс.
"""

from typing import Optional

from loguru import logger

from config.settings import OCR_MAX_RETRIES, OCR_SPACE_ENDPOINT, OCR_TIMEOUT_MS
from ..domain.events import EventSink
from ..domain.interfaces import IOCRProvider
from ..extraction.infrastructure.ocr_space_client import OCRSpaceClient
from ..extraction.ocr_invoker import OcrInvoker
from ..post_ocr.orchestrator import ExtractionOrchestrator


class MetricsComponentFactory:
    """
    Фабрика компонентов.

    - create_ocr_provider: одна попытка OCR
    - create_orchestrator: Post-OCR разбор текста
    - create_invoker: всё вместе, с повторами
    """

    @staticmethod
    def create_ocr_provider(
        endpoint: str = OCR_SPACE_ENDPOINT,
        timeout_ms: int = OCR_TIMEOUT_MS
    ) -> IOCRProvider:
        logger.debug("[Factory] Создание OCR провайдера")
        return OCRSpaceClient(endpoint=endpoint, timeout_ms=timeout_ms)

    @staticmethod
    def create_orchestrator(events: Optional[EventSink] = None) -> ExtractionOrchestrator:
        logger.debug("[Factory] Создание оркестратора разбора")
        return ExtractionOrchestrator(events=events)

    @staticmethod
    def create_invoker(
        api_key: Optional[str] = None,
        provider: Optional[IOCRProvider] = None,
        orchestrator: Optional[ExtractionOrchestrator] = None,
        max_retries: int = OCR_MAX_RETRIES,
        events: Optional[EventSink] = None
    ) -> OcrInvoker:
        """
        Создает OcrInvoker.

        Args:
            api_key: Ключ OCR.space (по умолчанию из settings)
            provider: Провайдер OCR (опционально)
            orchestrator: Оркестратор разбора (опционально)
            max_retries: Лимит повторов
            events: Sink событий разбора (опционально)
        """
        logger.debug("[Factory] Создание OcrInvoker")

        if provider is None:
            provider = MetricsComponentFactory.create_ocr_provider()

        if orchestrator is None:
            orchestrator = MetricsComponentFactory.create_orchestrator(events)

        return OcrInvoker(
            provider=provider,
            orchestrator=orchestrator,
            api_key=api_key,
            max_retries=max_retries,
        )
