"""
DTO для конфигурации числового формата локали.

Содержит параметры валюты, нужные NumberNormalizer:
- Разделитель дроби и тысяч
- Суффиксы-множители ("K" = тысячи)

Использует Pydantic для валидации структуры конфигурации.
"""

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class CurrencyConfig(BaseModel):
    """Конфигурация валюты."""

    model_config = ConfigDict(frozen=True)

    decimal_separator: str = Field(..., description='Разделитель дроби ("," или ".")')
    thousands_separator: str = Field(..., description='Разделитель тысяч (".", ",", пробел)')
    multipliers: Dict[str, float] = Field(
        default_factory=lambda: {"K": 1000.0},
        description='Суффиксы сокращений ("12K" = 12000)'
    )

    @field_validator('decimal_separator', 'thousands_separator')
    @classmethod
    def validate_separators(cls, v):
        if v not in [",", ".", " "]:
            raise ValueError(f'Разделитель должен быть одним из [",", ".", " "], получено: {v}')
        return v

    @model_validator(mode="after")
    def separators_differ(self) -> "CurrencyConfig":
        if self.decimal_separator == self.thousands_separator:
            raise ValueError("decimal_separator и thousands_separator должны различаться")
        return self


# Индонезия: Rp 1.234.567,89
ID_ID_CURRENCY = CurrencyConfig(
    decimal_separator=",",
    thousands_separator=".",
)

CURRENCIES: Dict[str, CurrencyConfig] = {
    "id_ID": ID_ID_CURRENCY,
}


def get_currency_config(locale_code: str) -> CurrencyConfig:
    """Возвращает конфигурацию валюты для локали (KeyError если локаль неизвестна)."""
    return CURRENCIES[locale_code]
