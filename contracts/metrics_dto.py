"""
DTO контракт: OCR (Extraction) -> Post-OCR (Parsing) -> вызывающая сторона (бот).

Содержит:
- ExtractionRequest: что распознавать (локальный файл ИЛИ URL)
- OcrReading: сырой текст от OCR.space
- PlatformReading: метрики одной платформы
- ExtractionOutcome: итог разбора всех платформ скриншота
- ExtractionSuccess / ExtractionFailure: конверты ответа

ВАЛИДАЦИЯ: Pydantic v2, все модели неизменяемые (frozen).
Внешний формат (to_dict) использует camelCase: rawText, parsedGMV, primaryPlatform...
"""

from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class Platform(str, Enum):
    """Платформа live-commerce."""
    TIKTOK = "TIKTOK"
    SHOPEE = "SHOPEE"


class _Contract(BaseModel):
    """Общая конфигурация контрактов: frozen + camelCase алиасы."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
    )

    def to_dict(self) -> Dict[str, Any]:
        """Словарь во внешнем формате (camelCase, enum -> str)."""
        return self.model_dump(mode="json", by_alias=True)


# ============================================================================
# ВХОД
# ============================================================================

class ExtractionRequest(_Contract):
    """Запрос на извлечение метрик. Ровно один источник изображения."""

    image_path: Optional[str] = Field(None, description="Путь к локальному файлу скриншота")
    image_url: Optional[str] = Field(None, description="URL скриншота")

    @model_validator(mode="after")
    def exactly_one_source(self) -> "ExtractionRequest":
        if not self.image_path and not self.image_url:
            raise ValueError("No valid image path or URL provided")
        if self.image_path and self.image_url:
            raise ValueError("Укажите только один источник: image_path или image_url")
        return self

    @property
    def source_label(self) -> str:
        return self.image_path or self.image_url or "unknown"


class OcrReading(_Contract):
    """Сырой результат OCR.space."""

    raw_text: str = Field(..., min_length=1, description="ParsedText первого результата")
    confidence: float = Field(0.0, description="TextOrientation из ответа провайдера")


# ============================================================================
# РЕЗУЛЬТАТ РАЗБОРА
# ============================================================================

class PlatformReading(_Contract):
    """Метрики одной платформы. Создаётся только при GMV > 0."""

    platform: Platform
    parsed_gmv: float = Field(..., gt=0, alias="parsedGMV", description="GMV в рупиях")
    parsed_duration: Optional[str] = Field(None, description='Например "2 jam 30 menit"')


class ExtractionOutcome(_Contract):
    """
    Итог разбора одного OCR текста.

    platforms отсортированы по GMV (убывание), при равенстве сохраняется
    порядок обнаружения (TikTok раньше Shopee).
    platform / parsed_gmv / parsed_duration дублируют первую платформу
    для обратной совместимости.
    """

    platforms: List[PlatformReading] = Field(default_factory=list)
    primary_platform: Platform = Platform.TIKTOK
    is_dual_platform: bool = False
    platform: Platform = Platform.TIKTOK
    parsed_gmv: float = Field(0.0, ge=0, alias="parsedGMV")
    parsed_duration: Optional[str] = None

    @classmethod
    def from_readings(cls, readings: List[PlatformReading]) -> "ExtractionOutcome":
        """Собирает итог: сортировка по GMV, primary, флаг dual."""
        # sorted() стабилен: при равном GMV выигрывает платформа, найденная раньше
        ordered = sorted(readings, key=lambda r: r.parsed_gmv, reverse=True)

        if not ordered:
            return cls()

        first = ordered[0]
        return cls(
            platforms=ordered,
            primary_platform=first.platform,
            is_dual_platform=len(ordered) > 1,
            platform=first.platform,
            parsed_gmv=first.parsed_gmv,
            parsed_duration=first.parsed_duration,
        )


# ============================================================================
# КОНВЕРТЫ ОТВЕТА
# ============================================================================

class ExtractionSuccess(ExtractionOutcome):
    """Успешный ответ: сырой текст + итог разбора + confidence."""

    success: Literal[True] = True
    raw_text: str
    confidence: float = 0.0

    @classmethod
    def build(cls, reading: OcrReading, outcome: ExtractionOutcome) -> "ExtractionSuccess":
        return cls(
            raw_text=reading.raw_text,
            confidence=reading.confidence,
            **outcome.model_dump(),
        )


class ExtractionFailure(_Contract):
    """Неуспешный ответ: GMV = 0, текста нет."""

    success: Literal[False] = False
    error: str = Field(..., description="Человекочитаемое сообщение")
    error_kind: str = Field("Unknown", description="Тип ошибки (MissingCredential, NoTextDetected...)")
    raw_text: Optional[str] = None
    parsed_gmv: float = Field(0.0, alias="parsedGMV")

    @field_validator("raw_text")
    @classmethod
    def raw_text_absent(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            raise ValueError("raw_text должен отсутствовать в ExtractionFailure")
        return v

    @field_validator("parsed_gmv")
    @classmethod
    def gmv_is_zero(cls, v: float) -> float:
        if v != 0:
            raise ValueError("parsed_gmv должен быть 0 в ExtractionFailure")
        return v
