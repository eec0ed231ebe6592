"""
Структурированные события Post-OCR разбора.

Экстракторы не пишут в лог напрямую: они получают EventSink и отправляют
в него уровень, сообщение и поля. По умолчанию события уходят в loguru.
"""

from typing import Any, Callable, Dict, List, Tuple

from loguru import logger

# (level, message, **fields) -> None
EventSink = Callable[..., None]


def loguru_sink(level: str, message: str, **fields: Any) -> None:
    """Sink по умолчанию: loguru с полями в extra."""
    logger.bind(**fields).log(level.upper(), message)


class RecordingSink:
    """Sink, который копит события в памяти (тесты, отладочные скрипты)."""

    def __init__(self):
        self.events: List[Tuple[str, str, Dict[str, Any]]] = []

    def __call__(self, level: str, message: str, **fields: Any) -> None:
        self.events.append((level.upper(), message, fields))

    def messages(self, level: str = None) -> List[str]:
        return [m for lvl, m, _ in self.events if level is None or lvl == level.upper()]
