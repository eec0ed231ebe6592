import re
from typing import Dict

_WHITESPACE = re.compile(r"\s+")

# Типичные ошибки OCR в ключевом слове GMV
GMV_MISREADS: Dict[str, str] = {
    "BMV": "GMV",
    "GMY": "GMV",
    "GMW": "GMV",
}


class TextNormalizer:
    """
    Элемент-функция: готовит сырой текст OCR к поиску паттернов.

    1. Все пробельные последовательности (включая переносы строк) -> один пробел
    2. Верхний регистр
    3. Исправление ошибок OCR в "GMV"

    Идемпотентна: normalize(normalize(x)) == normalize(x).
    """

    def __init__(self, misreads: Dict[str, str] = None):
        self.misreads = GMV_MISREADS if misreads is None else misreads

    def normalize(self, text: str) -> str:
        if not text:
            return ""

        clean = _WHITESPACE.sub(" ", text).strip().upper()
        for wrong, right in self.misreads.items():
            clean = clean.replace(wrong, right)
        return clean


_default = TextNormalizer()


def normalize_text(text: str) -> str:
    return _default.normalize(text)
