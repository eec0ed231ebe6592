"""
Извлечение длительности live-эфира.

Форматы (индонезийский интерфейс):
- "Durasi Live: 2 jam 30 menit"
- "Durasi: 45 menit" / "45 mnt"
- "01:45:30" (H:MM:SS, секунды отбрасываются)
- "2 jam 15 menit" без метки

Результат: "2 jam 30 menit", "45 menit", "1 jam" или None.
"""

import re
from typing import Optional

from config.settings import GENERIC_DURATION_MAX_HOURS
from ..domain.events import EventSink, loguru_sink
from .rule_chain import ExtractionRule, RuleChain
from .text_normalizer import TextNormalizer

_FLAGS = re.IGNORECASE
_MINUTES = r"(?:MENIT|MNT)"

# Shopee: метка "DURASI" может идти с "LIVE"
DURASI_LIVE_HOURS = re.compile(rf"DURASI(?:\s*LIVE)?[:\s]*(\d+)\s*JAM(?:\s*(\d+)\s*{_MINUTES})?", _FLAGS)
DURASI_LIVE_MINUTES = re.compile(rf"DURASI(?:\s*LIVE)?[:\s]*(\d+)\s*{_MINUTES}", _FLAGS)
CLOCK = re.compile(r"(\d{1,2}):(\d{2}):(\d{2})")
BARE_HOURS = re.compile(rf"(\d+)\s*JAM(?:\s*(\d+)\s*{_MINUTES})?", _FLAGS)

# Generic: только "DURASI" без "LIVE"
DURASI_HOURS = re.compile(rf"DURASI[:\s]*(\d+)\s*JAM(?:\s*(\d+)\s*{_MINUTES})?", _FLAGS)
DURASI_MINUTES = re.compile(rf"DURASI[:\s]*(\d+)\s*{_MINUTES}", _FLAGS)
HOURS_ONLY = re.compile(r"(\d+)\s*JAM", _FLAGS)


def format_duration(hours: int, minutes: int) -> Optional[str]:
    """(2, 30) -> "2 jam 30 menit", (0, 20) -> "20 menit", (0, 0) -> None."""
    parts = []
    if hours > 0:
        parts.append(f"{hours} jam")
    if minutes > 0:
        parts.append(f"{minutes} menit")
    return " ".join(parts) or None


def _group_int(match: "re.Match", index: int) -> int:
    value = match.group(index)
    return int(value) if value else 0


def _hours_minutes(pattern: "re.Pattern"):
    def extract(text: str) -> Optional[str]:
        match = pattern.search(text)
        if not match:
            return None
        return format_duration(_group_int(match, 1), _group_int(match, 2))
    return extract


def _minutes_only(pattern: "re.Pattern"):
    def extract(text: str) -> Optional[str]:
        match = pattern.search(text)
        if not match:
            return None
        return format_duration(0, _group_int(match, 1))
    return extract


class DurationExtractor:
    """
    Две цепочки правил:
    - shopee_chain: 4 правила (DURASI+JAM, DURASI+MENIT, H:MM:SS, "N JAM")
    - generic_chain: 3 правила, fallback без платформенной специфики
      (DURASI+JAM, DURASI+MENIT, "N JAM" при N <= 24)

    У TikTok своей цепочки нет, для него используется generic_chain.
    """

    def __init__(
        self,
        text_normalizer: Optional[TextNormalizer] = None,
        events: Optional[EventSink] = None,
        max_generic_hours: int = GENERIC_DURATION_MAX_HOURS
    ):
        self.text_normalizer = text_normalizer or TextNormalizer()
        self.events = events or loguru_sink
        self.max_generic_hours = max_generic_hours

        self.shopee_chain = RuleChain("ShopeeDuration", (
            ExtractionRule("durasi_hours", _hours_minutes(DURASI_LIVE_HOURS)),
            ExtractionRule("durasi_minutes", _minutes_only(DURASI_LIVE_MINUTES)),
            ExtractionRule("clock", _hours_minutes(CLOCK)),
            ExtractionRule("bare_hours", _hours_minutes(BARE_HOURS)),
        ), self.events)

        self.generic_chain = RuleChain("GenericDuration", (
            ExtractionRule("durasi_hours", _hours_minutes(DURASI_HOURS)),
            ExtractionRule("durasi_minutes", _minutes_only(DURASI_MINUTES)),
            ExtractionRule("hours_only", self._capped_hours),
        ), self.events)

    def extract_shopee(self, text: str) -> Optional[str]:
        return self._run(self.shopee_chain, text)

    def extract_generic(self, text: str) -> Optional[str]:
        return self._run(self.generic_chain, text)

    def extract_tiktok(self, text: str) -> Optional[str]:
        return self.extract_generic(text)

    def _run(self, chain: RuleChain, text: str) -> Optional[str]:
        match = chain.run(self.text_normalizer.normalize(text))
        return match.value if match else None

    def _capped_hours(self, text: str) -> Optional[str]:
        match = HOURS_ONLY.search(text)
        if not match:
            return None
        hours = int(match.group(1))
        if not 0 < hours <= self.max_generic_hours:
            return None
        return format_duration(hours, 0)
