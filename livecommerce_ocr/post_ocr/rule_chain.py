"""
Цепочки правил извлечения.

Приоритет правил задаётся данными: RuleChain перебирает ExtractionRule
по порядку, первое принятое значение выигрывает, остальные не вызываются.

Правило состоит из:
- extract: текст -> значение или None (паттерн не найден)
- accept: принимает ли цепочка найденное значение (например, GMV > 1000)
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from ..domain.events import EventSink, loguru_sink


def is_present(value: Any) -> bool:
    return value is not None


def is_positive(value: float) -> bool:
    return value > 0


def greater_than(threshold: float) -> Callable[[float], bool]:
    def accept(value: float) -> bool:
        return value > threshold
    return accept


@dataclass(frozen=True)
class ExtractionRule:
    """Одно правило цепочки."""
    name: str
    extract: Callable[[str], Optional[Any]]
    accept: Callable[[Any], bool] = is_present


@dataclass(frozen=True)
class RuleMatch:
    """Значение, принятое цепочкой, и имя сработавшего правила."""
    rule: str
    value: Any


class RuleChain:
    """
    Упорядоченный список правил.

    Не бросает исключений: упавшее правило логируется и пропускается.
    """

    def __init__(
        self,
        name: str,
        rules: Sequence[ExtractionRule],
        events: Optional[EventSink] = None
    ):
        self.name = name
        self.rules = tuple(rules)
        self.events = events or loguru_sink

    @property
    def rule_names(self) -> tuple:
        return tuple(rule.name for rule in self.rules)

    def run(self, text: str) -> Optional[RuleMatch]:
        """
        ЦКП: RuleMatch первого принятого правила или None.
        """
        for priority, rule in enumerate(self.rules, 1):
            try:
                value = rule.extract(text)
            except (ValueError, TypeError, IndexError, re.error) as e:
                self.events(
                    "warning",
                    f"[{self.name}] Правило '{rule.name}' упало: {e}",
                    component=self.name, rule=rule.name,
                )
                continue

            if value is None:
                continue

            if not rule.accept(value):
                self.events(
                    "debug",
                    f"[{self.name}] Правило '{rule.name}' отклонило значение: {value}",
                    component=self.name, rule=rule.name, value=value,
                )
                continue

            self.events(
                "info",
                f"[{self.name}] Найдено (приоритет {priority}, '{rule.name}'): {value}",
                component=self.name, rule=rule.name, priority=priority, value=value,
            )
            return RuleMatch(rule=rule.name, value=value)

        self.events(
            "warning",
            f"[{self.name}] Ни одно правило не сработало",
            component=self.name,
        )
        return None
