"""
Интерфейсы (абстрактные классы) для домена Extraction.

Домен Extraction отвечает за:
1. Один вызов внешнего OCR (IOCRProvider)
2. Повторы с backoff и передачу текста в Post-OCR разбор (OcrInvoker)
"""

from abc import ABC, abstractmethod

from contracts.metrics_dto import ExtractionRequest, OcrReading


class IOCRProvider(ABC):
    """Интерфейс для провайдеров OCR (домен Extraction)."""

    @abstractmethod
    async def recognize(self, request: ExtractionRequest, api_key: str) -> OcrReading:
        """
        Выполняет ОДНУ попытку распознавания.

        Args:
            request: Источник изображения (файл или URL)
            api_key: Ключ сервиса

        Returns:
            OcrReading с непустым raw_text

        Raises:
            OCRProcessingError: пустой ответ, ошибка провайдера, нет текста, сеть
        """
        pass
