"""
Извлечение GMV (Gross Merchandise Value) из текста OCR.

TikTok: метка "GMV" ("GMV LANGSUNG" = прямой GMV эфира, приоритетнее общего).
Shopee: метка "PENJUALAN" (варианты "PENJUALAN(RP)", "Penjualan (Rp)\\n142.350").

Все суммы в рупиях, формат id_ID: "Rp 1.234.567" / "Rp 12,5K".
"""

import re
from typing import List, Optional

from config.settings import GMV_MAX, GMV_MIN, SHOPEE_LABEL_WINDOW, SHOPEE_MIN_GMV
from ..domain.events import EventSink, loguru_sink
from .number_normalizer import NUMERIC_TOKEN, NumberNormalizer
from .rule_chain import ExtractionRule, RuleChain, greater_than, is_positive
from .text_normalizer import TextNormalizer

_FLAGS = re.IGNORECASE

GMV_LANGSUNG_PATTERN = re.compile(rf"GMV\s*LANGSUNG[^A-Za-z]*RP\s*({NUMERIC_TOKEN})", _FLAGS)
GMV_PATTERN = re.compile(rf"GMV[^A-Za-z]*RP\s*({NUMERIC_TOKEN})", _FLAGS)
RUPIAH_PATTERN = re.compile(rf"RP\s*({NUMERIC_TOKEN})", _FLAGS)
NUMBER_PATTERN = re.compile(NUMERIC_TOKEN, _FLAGS)

# "PENJUALAN RP 1", "PENJUALAN(RP) 1", "PENJUALAN (RP) 1"
PENJUALAN_PATTERN = re.compile(rf"PENJUALAN[\s(]*RP[)\s]*({NUMERIC_TOKEN})", _FLAGS)
TOTAL_PENJUALAN_PATTERN = re.compile(rf"TOTAL\s*PENJUALAN[\s(]*RP[)\s]*({NUMERIC_TOKEN})", _FLAGS)

PENJUALAN = "PENJUALAN"
PRODUK_TERJUAL = "PRODUK TERJUAL"


def is_valid_gmv(gmv: Optional[float]) -> bool:
    """GMV валиден в интервале (0, 10 млрд)."""
    if gmv is None:
        return False
    return GMV_MIN < gmv < GMV_MAX


class GMVExtractor:
    """
    Извлекает GMV по цепочкам правил отдельно для каждой платформы.

    Внутри "не найдено" = None. Снаружи (parse_*_gmv) это превращается в 0.
    """

    def __init__(
        self,
        number_normalizer: Optional[NumberNormalizer] = None,
        text_normalizer: Optional[TextNormalizer] = None,
        events: Optional[EventSink] = None,
        shopee_min_gmv: float = SHOPEE_MIN_GMV,
        label_window: int = SHOPEE_LABEL_WINDOW
    ):
        self.numbers = number_normalizer or NumberNormalizer()
        self.text_normalizer = text_normalizer or TextNormalizer()
        self.events = events or loguru_sink
        self.shopee_min_gmv = shopee_min_gmv
        self.label_window = label_window

        above_min = greater_than(shopee_min_gmv)

        self.tiktok_chain = RuleChain("TikTokGMV", (
            ExtractionRule("gmv_langsung", self._gmv_langsung, is_positive),
            ExtractionRule("gmv_label", self._gmv_label, is_positive),
            ExtractionRule("max_rupiah", self._max_rupiah, is_positive),
        ), self.events)

        self.shopee_chain = RuleChain("ShopeeGMV", (
            ExtractionRule("penjualan_label", self._penjualan_label, is_positive),
            ExtractionRule("after_penjualan", self._after_penjualan, above_min),
            ExtractionRule("total_penjualan", self._total_penjualan, is_positive),
            ExtractionRule("produk_terjual_max_rupiah", self._produk_terjual_max, above_min),
            ExtractionRule("penjualan_max_rupiah", self._penjualan_max, above_min),
        ), self.events)

    # ------------------------------------------------------------------
    # Публичный API
    # ------------------------------------------------------------------

    def extract_tiktok(self, text: str) -> Optional[float]:
        match = self.tiktok_chain.run(self.text_normalizer.normalize(text))
        return match.value if match else None

    def extract_shopee(self, text: str) -> Optional[float]:
        match = self.shopee_chain.run(self.text_normalizer.normalize(text))
        return match.value if match else None

    # ------------------------------------------------------------------
    # TikTok
    # ------------------------------------------------------------------

    def _gmv_langsung(self, text: str) -> Optional[float]:
        return self._first_amount(GMV_LANGSUNG_PATTERN, text)

    def _gmv_label(self, text: str) -> Optional[float]:
        return self._first_amount(GMV_PATTERN, text)

    def _max_rupiah(self, text: str) -> Optional[float]:
        amounts = [a for a in self._rupiah_amounts(text) if a > 0]
        return max(amounts) if amounts else None

    # ------------------------------------------------------------------
    # Shopee
    # ------------------------------------------------------------------

    def _penjualan_label(self, text: str) -> Optional[float]:
        return self._first_amount(PENJUALAN_PATTERN, text)

    def _after_penjualan(self, text: str) -> Optional[float]:
        index = text.find(PENJUALAN)
        if index == -1:
            return None

        window = text[index:index + self.label_window]
        match = NUMBER_PATTERN.search(window)
        if not match:
            return None
        return self.numbers.apply_multiplier(match.group(0))

    def _total_penjualan(self, text: str) -> Optional[float]:
        return self._first_amount(TOTAL_PENJUALAN_PATTERN, text)

    def _produk_terjual_max(self, text: str) -> Optional[float]:
        if PRODUK_TERJUAL not in text:
            return None
        amounts = [a for a in self._rupiah_amounts(text) if a > self.shopee_min_gmv]
        return max(amounts) if amounts else None

    def _penjualan_max(self, text: str) -> Optional[float]:
        amounts = [a for a in self._rupiah_amounts(text) if a > self.shopee_min_gmv]
        if not amounts:
            return None

        if PENJUALAN not in text:
            # Без метки Shopee это, скорее всего, суммы TikTok с того же скриншота
            self.events(
                "warning",
                "[ShopeeGMV] Найдены суммы RP, но нет 'PENJUALAN' - пропускаем",
                component="ShopeeGMV", amounts=amounts,
            )
            return None

        return max(amounts)

    # ------------------------------------------------------------------
    # Общие помощники
    # ------------------------------------------------------------------

    def _first_amount(self, pattern: "re.Pattern", text: str) -> Optional[float]:
        match = pattern.search(text)
        if not match:
            return None
        return self.numbers.apply_multiplier(match.group(1))

    def _rupiah_amounts(self, text: str) -> List[float]:
        return [self.numbers.apply_multiplier(m.group(1)) for m in RUPIAH_PATTERN.finditer(text)]
