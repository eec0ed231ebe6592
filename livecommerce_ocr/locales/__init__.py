from .locale_config import CurrencyConfig, ID_ID_CURRENCY, get_currency_config

__all__ = ["CurrencyConfig", "ID_ID_CURRENCY", "get_currency_config"]
