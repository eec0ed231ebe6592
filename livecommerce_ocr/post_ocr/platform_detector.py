from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..domain.events import EventSink, loguru_sink
from .text_normalizer import TextNormalizer

TIKTOK_KEYWORDS: Tuple[str, ...] = ("TIKTOK", "GMV")
# Оба слова вместе тоже означают TikTok ("Durasi LIVE")
TIKTOK_KEYWORD_PAIR: Tuple[str, str] = ("LIVE", "DURASI")

SHOPEE_KEYWORDS: Tuple[str, ...] = (
    "SHOPEE",
    "PENJUALAN",
    "PRODUK TERJUAL",
    "PERSENTASE KLIK",
    "PESANAN",
)


@dataclass(frozen=True)
class PlatformSignals:
    """Результат детекции платформ. Обе могут быть True одновременно."""
    tiktok: bool
    shopee: bool
    tiktok_keywords: Tuple[str, ...] = field(default_factory=tuple)
    shopee_keywords: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_dual(self) -> bool:
        return self.tiktok and self.shopee


class PlatformDetector:
    """
    Определяет, к каким платформам относится скриншот.

    Работает по ключевым словам в нормализованном тексте. Скриншот может
    быть составным (TikTok + Shopee), поэтому признаки независимы.
    """

    def __init__(
        self,
        text_normalizer: Optional[TextNormalizer] = None,
        events: Optional[EventSink] = None
    ):
        self.text_normalizer = text_normalizer or TextNormalizer()
        self.events = events or loguru_sink

    def detect(self, text: str) -> PlatformSignals:
        """
        ЦКП: PlatformSignals с флагами TikTok / Shopee.

        Args:
            text: Текст OCR (нормализуется повторно, это безопасно)
        """
        clean = self.text_normalizer.normalize(text)

        tiktok_found = tuple(kw for kw in TIKTOK_KEYWORDS if kw in clean)
        if all(kw in clean for kw in TIKTOK_KEYWORD_PAIR):
            tiktok_found += TIKTOK_KEYWORD_PAIR

        shopee_found = tuple(kw for kw in SHOPEE_KEYWORDS if kw in clean)

        signals = PlatformSignals(
            tiktok=bool(tiktok_found),
            shopee=bool(shopee_found),
            tiktok_keywords=tiktok_found,
            shopee_keywords=shopee_found,
        )

        self.events(
            "debug",
            f"[PlatformDetector] TikTok={signals.tiktok}, Shopee={signals.shopee}",
            component="PlatformDetector",
            tiktok_keywords=list(tiktok_found),
            shopee_keywords=list(shopee_found),
            text_length=len(clean),
        )
        return signals
