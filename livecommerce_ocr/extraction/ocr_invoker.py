"""
OcrInvoker: вызов OCR с повторами + передача текста в Post-OCR разбор.

Политика повторов:
- MissingImageSource / MissingCredential: сразу ошибка, без повторов
- Остальные ошибки OCR повторяются до max_retries раз
- Ошибка с "API" в сообщении (ключ/авторизация) не повторяется
- Пауза перед попыткой k+1 = backoff_step * (k + 1): 2s, 4s, 6s

Все доменные ошибки превращаются в ExtractionFailure: наружу исключения не уходят.
"""

import asyncio
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, Union

from loguru import logger
from pydantic import ValidationError

from config.settings import (
    OCR_BACKOFF_STEP_SECONDS,
    OCR_MAX_RETRIES,
    OCR_SPACE_API_KEY,
    RAW_TEXT_PREVIEW_CHARS,
)
from contracts.metrics_dto import ExtractionFailure, ExtractionRequest, ExtractionSuccess
from ..domain.exceptions import (
    ExtractionConfigurationError,
    ExtractionError,
    MissingCredentialError,
    MissingImageSourceError,
    OCRProcessingError,
)
from ..domain.interfaces import IOCRProvider
from ..post_ocr.orchestrator import ExtractionOrchestrator
from .infrastructure.ocr_space_client import OCRSpaceClient

ExtractionResult = Union[ExtractionSuccess, ExtractionFailure]

# Маркер ошибок авторизации в сообщении провайдера
CREDENTIAL_ERROR_TOKEN = "API"


class OcrInvoker:
    """
    Точка входа домена Extraction.

    Координирует:
    1. Проверку запроса и ключа
    2. Попытки OCR с backoff
    3. Разбор текста через ExtractionOrchestrator
    """

    def __init__(
        self,
        provider: Optional[IOCRProvider] = None,
        orchestrator: Optional[ExtractionOrchestrator] = None,
        api_key: Optional[str] = None,
        max_retries: int = OCR_MAX_RETRIES,
        backoff_step: float = OCR_BACKOFF_STEP_SECONDS,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None
    ):
        """
        Args:
            provider: Провайдер OCR (по умолчанию OCRSpaceClient)
            orchestrator: Post-OCR разбор
            api_key: Ключ OCR.space (по умолчанию из settings)
            max_retries: Сколько раз повторять после первой попытки
            backoff_step: Шаг паузы между попытками (секунды)
            sleep: Функция ожидания (по умолчанию asyncio.sleep)
        """
        self.provider = provider or OCRSpaceClient()
        self.orchestrator = orchestrator or ExtractionOrchestrator()
        self.api_key = OCR_SPACE_API_KEY if api_key is None else api_key
        self.max_retries = max(0, max_retries)
        self.backoff_step = backoff_step
        self._sleep = sleep or asyncio.sleep

    def backoff_delay(self, attempt: int) -> float:
        """Пауза после неудачной попытки attempt (с нуля)."""
        return self.backoff_step * (attempt + 1)

    def should_retry(self, error: ExtractionError, attempt: int) -> bool:
        if not error.retryable:
            return False
        if CREDENTIAL_ERROR_TOKEN in error.message:
            return False
        return attempt < self.max_retries

    async def extract_metrics_from_image(
        self,
        image_path: Optional[Union[str, Path]] = None,
        image_url: Optional[str] = None
    ) -> ExtractionResult:
        """
        Извлекает метрики из скриншота (файл ИЛИ URL).

        Returns:
            ExtractionSuccess или ExtractionFailure
        """
        try:
            request = ExtractionRequest(
                image_path=str(image_path) if image_path else None,
                image_url=image_url,
            )
        except ValidationError as e:
            return self._failure(MissingImageSourceError(
                message="No valid image path or URL provided",
                component="OcrInvoker",
                original_error=e
            ))
        return await self.extract(request)

    async def extract(self, request: ExtractionRequest) -> ExtractionResult:
        try:
            self._check_request(request)
        except ExtractionConfigurationError as e:
            return self._failure(e)

        total_attempts = self.max_retries + 1
        last_error: Optional[ExtractionError] = None
        waited = 0.0

        for attempt in range(total_attempts):
            logger.info(f"[OcrInvoker] Попытка {attempt + 1}/{total_attempts}: {request.source_label}")

            try:
                reading = await self.provider.recognize(request, self.api_key)
            except ExtractionConfigurationError as e:
                return self._failure(e)
            except OCRProcessingError as e:
                last_error = e
                logger.warning(f"[OcrInvoker] Попытка {attempt + 1} неудачна: {e.message}")

                if not self.should_retry(e, attempt):
                    break

                delay = self.backoff_delay(attempt)
                logger.info(f"[OcrInvoker] Повтор через {delay:g}s")
                await self._sleep(delay)
                waited += delay
                continue

            logger.info(f"[OcrInvoker] OCR успешно, длина текста: {len(reading.raw_text)}")
            logger.debug(f"[OcrInvoker] Текст: {reading.raw_text[:RAW_TEXT_PREVIEW_CHARS]}")

            outcome = self.orchestrator.parse(reading.raw_text)
            logger.info(
                f"[OcrInvoker] Готово: {outcome.primary_platform.value}, GMV {outcome.parsed_gmv}, "
                f"длительность {outcome.parsed_duration or 'не найдена'} "
                f"(попыток: {attempt + 1}, ожидание: {waited:g}s)"
            )
            return ExtractionSuccess.build(reading, outcome)

        logger.error(f"[OcrInvoker] Все попытки OCR неудачны (ожидание: {waited:g}s)")
        return self._failure(last_error)

    async def extract_many(self, requests: List[ExtractionRequest]) -> List[ExtractionResult]:
        """Несколько скриншотов параллельно. Общего состояния у запросов нет."""
        return list(await asyncio.gather(*(self.extract(r) for r in requests)))

    def _check_request(self, request: ExtractionRequest) -> None:
        if request.image_path and not Path(request.image_path).is_file():
            raise MissingImageSourceError(
                message=f"No valid image path or URL provided: {request.image_path}",
                component="OcrInvoker"
            )

        if not self.api_key:
            logger.error("[OcrInvoker] OCRSPACE_API_KEY не задан")
            raise MissingCredentialError(
                message="OCRSPACE_API_KEY not configured",
                component="OcrInvoker"
            )

    def _failure(self, error: ExtractionError) -> ExtractionFailure:
        logger.error(f"[OcrInvoker] Ошибка ({error.error_kind}): {error.message}")
        return ExtractionFailure(error=error.message, error_kind=error.error_kind)
