"""
Оркестратор Post-OCR разбора.

Сырой текст -> нормализация -> детекция платформ -> GMV + длительность
по каждой платформе -> ExtractionOutcome.

ЦКП: ExtractionOutcome (platforms отсортированы по GMV, primary = максимум).
"""

from typing import Callable, List, Optional, Tuple

from contracts.metrics_dto import ExtractionOutcome, Platform, PlatformReading
from ..domain.events import EventSink, loguru_sink
from .duration_extractor import DurationExtractor
from .gmv_extractor import GMVExtractor
from .platform_detector import PlatformDetector, PlatformSignals
from .text_normalizer import TextNormalizer


class ExtractionOrchestrator:
    """
    Собирает метрики по всем платформам одного скриншота.

    Порядок обработки фиксирован: сначала TikTok, затем Shopee.
    Платформа попадает в результат только при GMV > 0.
    """

    def __init__(
        self,
        text_normalizer: Optional[TextNormalizer] = None,
        detector: Optional[PlatformDetector] = None,
        gmv_extractor: Optional[GMVExtractor] = None,
        duration_extractor: Optional[DurationExtractor] = None,
        events: Optional[EventSink] = None
    ):
        self.events = events or loguru_sink
        self.text_normalizer = text_normalizer or TextNormalizer()
        self.detector = detector or PlatformDetector(self.text_normalizer, self.events)
        self.gmv_extractor = gmv_extractor or GMVExtractor(
            text_normalizer=self.text_normalizer, events=self.events
        )
        self.duration_extractor = duration_extractor or DurationExtractor(
            text_normalizer=self.text_normalizer, events=self.events
        )

    def _plan(
        self, signals: PlatformSignals
    ) -> List[Tuple[Platform, Callable[[str], Optional[float]], Callable[[str], Optional[str]]]]:
        plan = []
        if signals.tiktok:
            plan.append((
                Platform.TIKTOK,
                self.gmv_extractor.extract_tiktok,
                self.duration_extractor.extract_tiktok,
            ))
        if signals.shopee:
            plan.append((
                Platform.SHOPEE,
                self.gmv_extractor.extract_shopee,
                self.duration_extractor.extract_shopee,
            ))
        return plan

    def parse(self, raw_text: str) -> ExtractionOutcome:
        """
        Разбирает текст OCR.

        Args:
            raw_text: ParsedText от OCR.space

        Returns:
            ExtractionOutcome (пустой platforms, primary = TIKTOK, если ничего не найдено)
        """
        text = self.text_normalizer.normalize(raw_text)
        signals = self.detector.detect(text)

        readings: List[PlatformReading] = []
        for platform, extract_gmv, extract_duration in self._plan(signals):
            gmv = extract_gmv(text)
            if not gmv or gmv <= 0:
                self.events(
                    "info",
                    f"[Orchestrator] {platform.value}: ключевые слова есть, GMV не найден",
                    component="Orchestrator", platform=platform.value,
                )
                continue

            duration = extract_duration(text)
            readings.append(PlatformReading(
                platform=platform,
                parsed_gmv=gmv,
                parsed_duration=duration,
            ))
            self.events(
                "info",
                f"[Orchestrator] {platform.value}: GMV {gmv}, длительность {duration or 'не найдена'}",
                component="Orchestrator", platform=platform.value, gmv=gmv, duration=duration,
            )

        outcome = ExtractionOutcome.from_readings(readings)

        self.events(
            "info",
            f"[Orchestrator] Платформ найдено: {len(outcome.platforms)}, "
            f"primary: {outcome.primary_platform.value}",
            component="Orchestrator",
            platforms=[r.platform.value for r in outcome.platforms],
            primary=outcome.primary_platform.value,
            dual=outcome.is_dual_platform,
        )
        return outcome
