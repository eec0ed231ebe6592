import re
from typing import Optional

from ..locales.locale_config import CurrencyConfig, get_currency_config
from config.settings import DEFAULT_LOCALE

# Числовой токен OCR: цифры, точки, запятые (минимум одна цифра) и необязательный "K"
NUMERIC_TOKEN = r"[\d.,]*\d[\d.,]*K?"

_NON_NUMERIC = re.compile(r"[^\d.]")
_LEADING_FLOAT = re.compile(r"\d+(?:\.\d*)?|\.\d+")


class NumberNormalizer:
    """
    Элемент-функция: переводит числовой токен OCR в float.

    Формат разделителей берётся из CurrencyConfig (по умолчанию id_ID):
    "1.234.567,89" -> 1234567.89, "12K" -> 12000.
    Никогда не бросает исключений: мусор -> 0.
    """

    def __init__(self, currency: Optional[CurrencyConfig] = None):
        self.currency = currency or get_currency_config(DEFAULT_LOCALE)

    def clean_number(self, token: str) -> float:
        """
        ЦКП: число (float) или 0.0, если токен не разбирается.
        """
        if not isinstance(token, str) or not token:
            return 0.0

        # Убираем разделитель тысяч, разделитель дроби -> точка
        cleaned = token.replace(self.currency.thousands_separator, "")
        if self.currency.decimal_separator != ".":
            cleaned = cleaned.replace(self.currency.decimal_separator, ".")

        cleaned = _NON_NUMERIC.sub("", cleaned)

        # Берём самый длинный корректный префикс: "1.5.3" -> 1.5
        match = _LEADING_FLOAT.match(cleaned)
        if not match:
            return 0.0

        try:
            return float(match.group(0))
        except ValueError:
            return 0.0

    def apply_multiplier(self, token: str) -> float:
        """
        Учитывает суффикс-множитель ("K" = 1000) и нормализует число.
        """
        if not isinstance(token, str):
            return 0.0

        upper = token.strip().upper()
        for suffix, factor in self.currency.multipliers.items():
            if upper.endswith(suffix):
                return self.clean_number(upper[:-len(suffix)]) * factor

        return self.clean_number(upper)


_default = NumberNormalizer()


def clean_number(token: str) -> float:
    return _default.clean_number(token)


def apply_multiplier(token: str) -> float:
    return _default.apply_multiplier(token)
