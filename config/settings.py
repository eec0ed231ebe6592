"""
Настройки проекта LiveCommerce OCR.

ВАЖНО: Перед запуском укажите ключ OCR.space через переменную окружения OCRSPACE_API_KEY!
"""

import os
from pathlib import Path

# =============================================================================
# ПУТИ ПРОЕКТА
# =============================================================================
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"
OUTPUT_DIR = DATA_DIR / "output"


# =============================================================================
# OCR.SPACE API
# =============================================================================
# Ключ сервиса. Без него любой вызов OCR завершается ошибкой без повторов.
OCR_SPACE_API_KEY = os.getenv("OCRSPACE_API_KEY")

OCR_SPACE_ENDPOINT = os.getenv("OCRSPACE_ENDPOINT", "https://api.ocr.space/parse/image")

# Таймаут одного запроса (мс)
OCR_TIMEOUT_MS = int(os.getenv("OCR_TIMEOUT_MS", "45000"))

# Сколько раз повторять запрос после первой неудачи
OCR_MAX_RETRIES = int(os.getenv("OCR_MAX_RETRIES", "3"))

# Пауза перед попыткой k+1 = OCR_BACKOFF_STEP_SECONDS * (k + 1): 2s, 4s, 6s
OCR_BACKOFF_STEP_SECONDS = 2

# Фиксированные параметры запроса
OCR_LANGUAGE = "eng"
OCR_ENGINE = "2"  # Engine 2 точнее распознаёт цифры

# Сколько символов сырого текста писать в лог
RAW_TEXT_PREVIEW_CHARS = 500


# =============================================================================
# НАСТРОЙКИ ЛОКАЛИ
# =============================================================================
# Индонезийский формат: точка = тысячи, запятая = дробь
DEFAULT_LOCALE = "id_ID"


# =============================================================================
# НАСТРОЙКИ ИЗВЛЕЧЕНИЯ GMV / ДЛИТЕЛЬНОСТИ
# =============================================================================
# Эвристический порог для fallback-правил Shopee: меньшие числа обычно
# количество товаров или заказов, а не выручка.
SHOPEE_MIN_GMV = 1000.0

# Сколько символов после "PENJUALAN" просматривать в поиске числа
SHOPEE_LABEL_WINDOW = 50

# Валидация суммы (10 миллиардов рупий)
GMV_MIN = 0.0
GMV_MAX = 10_000_000_000.0

# Generic-парсер длительности: "<N> JAM" без метки принимается только до суток
GENERIC_DURATION_MAX_HOURS = 24


# =============================================================================
# ПРОВЕРКА КОНФИГУРАЦИИ
# =============================================================================
def validate_config():
    """Проверяет корректность конфигурации."""
    errors = []

    if not OCR_SPACE_API_KEY:
        errors.append(
            "OCRSPACE_API_KEY не указан!\n"
            "Задайте ключ OCR.space через переменную окружения."
        )

    if OCR_TIMEOUT_MS <= 0:
        errors.append(f"OCR_TIMEOUT_MS должен быть > 0, получено: {OCR_TIMEOUT_MS}")

    if OCR_MAX_RETRIES < 0:
        errors.append(f"OCR_MAX_RETRIES должен быть >= 0, получено: {OCR_MAX_RETRIES}")

    if errors:
        raise ValueError("\n".join(errors))

    return True
