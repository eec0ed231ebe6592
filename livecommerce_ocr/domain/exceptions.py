"""
Исключения для домена Extraction (OCR.space).

Каждое исключение несёт error_kind (попадает в ExtractionFailure)
и флаг retryable, который учитывает цикл повторов OcrInvoker.

Post-OCR разбор исключений наружу не бросает.
"""

from typing import Optional


class ExtractionError(Exception):
    """Базовое исключение для ошибок домена Extraction."""

    error_kind: str = "Unknown"
    retryable: bool = False

    def __init__(
        self,
        message: str,
        component: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        self.message = message
        self.component = component
        self.original_error = original_error
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"Extraction Error: {self.message}"
        if self.component:
            msg += f" (Component: {self.component})"
        if self.original_error:
            msg += f" [Original: {type(self.original_error).__name__}: {str(self.original_error)}]"
        return msg


class ExtractionConfigurationError(ExtractionError):
    """Ошибка конфигурации или запроса. Повтор не поможет."""
    pass


class MissingImageSourceError(ExtractionConfigurationError):
    """Не передан ни файл, ни URL (или файл не существует)."""
    error_kind = "MissingImageSource"


class MissingCredentialError(ExtractionConfigurationError):
    """Не задан ключ OCR.space."""
    error_kind = "MissingCredential"


class OCRProcessingError(ExtractionError):
    """Ошибка обработки OCR. По умолчанию повторяется."""
    retryable = True


class EmptyProviderResponseError(OCRProcessingError):
    """Пустое тело ответа OCR.space."""
    error_kind = "EmptyProviderResponse"


class ProviderProcessingError(OCRProcessingError):
    """OCR.space вернул IsErroredOnProcessing = true."""
    error_kind = "ProviderProcessingError"


class NoTextDetectedError(OCRProcessingError):
    """ParsedResults пуст: текста на изображении не найдено."""
    error_kind = "NoTextDetected"


class OCRTransportError(OCRProcessingError):
    """Сетевая ошибка, таймаут или HTTP статус != 2xx."""
    error_kind = "NetworkOrTimeout"
