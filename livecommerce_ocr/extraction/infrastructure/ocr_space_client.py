"""
OCR: OCR.space API интеграция.

Одна попытка распознавания:
- Отправка multipart формы (файл ИЛИ url) на OCR.space
- Классификация ответа (пустой ответ / ошибка провайдера / нет текста)
- Формирование OcrReading

КОНТРАКТЫ:
  Входные: ExtractionRequest + ключ сервиса
  Выходные: OcrReading (raw_text = ParsedResults[0].ParsedText)

Повторы здесь НЕ выполняются, это зона OcrInvoker.
"""

import asyncio
import mimetypes
import time
from pathlib import Path
from typing import Any, Dict, Optional

import httpx
from loguru import logger

from config.settings import (
    OCR_ENGINE,
    OCR_LANGUAGE,
    OCR_SPACE_ENDPOINT,
    OCR_TIMEOUT_MS,
)
from contracts.metrics_dto import ExtractionRequest, OcrReading
from ...domain.exceptions import (
    EmptyProviderResponseError,
    MissingImageSourceError,
    NoTextDetectedError,
    OCRTransportError,
    ProviderProcessingError,
)
from ...domain.interfaces import IOCRProvider


class OCRSpaceClient(IOCRProvider):
    """
    Обёртка над OCR.space API.

    Реализует интерфейс IOCRProvider.
    Параметры запроса фиксированы: eng, без overlay, детекция ориентации,
    масштабирование, Engine 2.
    """

    def __init__(
        self,
        endpoint: str = OCR_SPACE_ENDPOINT,
        timeout_ms: int = OCR_TIMEOUT_MS,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Args:
            endpoint: URL OCR.space
            timeout_ms: Таймаут одного запроса (мс)
            transport: Транспорт httpx (для тестов - httpx.MockTransport)
        """
        self.endpoint = endpoint
        self.timeout_ms = timeout_ms
        self._transport = transport

        logger.debug(f"[OCRSpaceClient] Инициализирован: {endpoint}, timeout={timeout_ms}ms")

    def build_form(self, api_key: str) -> Dict[str, str]:
        return {
            "apikey": api_key,
            "language": OCR_LANGUAGE,
            "isOverlayRequired": "false",
            "detectOrientation": "true",
            "scale": "true",
            "OCREngine": OCR_ENGINE,
        }

    async def recognize(self, request: ExtractionRequest, api_key: str) -> OcrReading:
        """
        Распознаёт текст на скриншоте (одна попытка).

        Raises:
            OCRTransportError: сеть, таймаут, HTTP статус
            EmptyProviderResponseError, ProviderProcessingError, NoTextDetectedError
        """
        form = self.build_form(api_key)
        files = None

        if request.image_path:
            path = Path(request.image_path)
            if not path.is_file():
                raise MissingImageSourceError(
                    message=f"No valid image path or URL provided: {path}",
                    component="OCRSpaceClient"
                )
            content = await asyncio.to_thread(path.read_bytes)
            logger.debug(f"[OCRSpaceClient] Файл: {path.name}, {len(content) / 1024:.2f} KB")
            mime = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
            files = {"file": (path.name, content, mime)}
        else:
            # (None, value) = обычное поле формы, чтобы запрос остался multipart
            files = {"url": (None, request.image_url)}

        logger.info(f"[OCRSpaceClient] Отправка в OCR.space: {request.source_label}")
        started = time.perf_counter()

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_ms / 1000,
                transport=self._transport
            ) as client:
                response = await client.post(self.endpoint, data=form, files=files)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise OCRTransportError(
                message=str(e) or type(e).__name__,
                component="OCRSpaceClient",
                original_error=e
            )

        logger.info(f"[OCRSpaceClient] Время ответа: {time.perf_counter() - started:.2f}s")

        return self._parse_response(response)

    def _parse_response(self, response: httpx.Response) -> OcrReading:
        """
        Классифицирует ответ OCR.space и формирует OcrReading.
        """
        try:
            data = response.json()
        except ValueError:
            data = None

        if not data or not isinstance(data, dict):
            raise EmptyProviderResponseError(
                message="Empty response from OCR.Space",
                component="OCRSpaceClient"
            )

        logger.debug(f"[OCRSpaceClient] OCR Exit Code: {data.get('OCRExitCode')}")

        if data.get("IsErroredOnProcessing"):
            error_msg = _first_error_message(data.get("ErrorMessage"))
            logger.error(f"[OCRSpaceClient] Ошибка обработки: {error_msg}")
            raise ProviderProcessingError(message=error_msg, component="OCRSpaceClient")

        results = data.get("ParsedResults") or []
        if not results or not isinstance(results, list):
            raise NoTextDetectedError(
                message="No text detected in image",
                component="OCRSpaceClient"
            )

        first = results[0]
        if not isinstance(first, dict):
            raise EmptyProviderResponseError(
                message="Empty response from OCR.Space",
                component="OCRSpaceClient"
            )

        raw_text = first.get("ParsedText")
        if not isinstance(raw_text, str) or not raw_text.strip():
            raise NoTextDetectedError(
                message="No text detected in image",
                component="OCRSpaceClient"
            )

        return OcrReading(
            raw_text=raw_text,
            confidence=_to_float(first.get("TextOrientation")),
        )


def _first_error_message(error_message: Any) -> str:
    """ErrorMessage бывает списком строк или строкой."""
    if isinstance(error_message, list) and error_message:
        return str(error_message[0])
    if isinstance(error_message, str) and error_message:
        return error_message
    return "Unknown OCR error"


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0
