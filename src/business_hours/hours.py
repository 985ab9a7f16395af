"""
BusinessHours — Часы работы, заданные текстом

Формат спецификации::

    sub-period[, sub-period...]

Пустая спецификация означает "открыто всегда". Подпериод имеет вид::

    scale {range [range ...]} [scale {range [range ...]}]

Шкалы (или их короткие коды):
    wday (wd)    1 (Monday) - 7 (Sunday) или mo, tu, we, th, fr, sa, su
    hour (hr)    0-23 или 12am 1am-11am 12noon 12pm 1pm-11pm
    minute (min) 0-59

Диапазон `v-v` с первым значением больше второго переходит через
границу домена. `v` — не точка: в шкале часов 9 означает 9:00-9:59.

Текст вне распознанных шкал по умолчанию игнорируется, поэтому опечатка
вроде `hr {9-17` (без закрывающей скобки) даёт "открыто всегда". Для
отказа на таком тексте используйте ParserConfig(strict=True). Шкала с
пустыми скобками (`hr {}`) всегда считается ошибкой.

Примеры:
    wd {Mon-Fri} hr {9am-4pm}                          пн-пт, 9:00-16:59
    wd {Mon Wed Fri} hr {9am-4pm}, wd {Tue Thu} hr {9am-2pm}
    minute {0-29}                                      каждые первые полчаса
    hour {12am-11am}                                   утро
"""

import logging
from typing import Any, FrozenSet, Optional, Tuple, Union

from business_hours.config import ParserConfig
from business_hours.core.cron import merge_crons
from business_hours.core.fields import TimeUnit
from business_hours.core.period import BusinessPeriod
from business_hours.errors import MissingSpecificationError
from business_hours.parser.expander import parse


logger = logging.getLogger(__name__)


class BusinessHours:
    """
    Часы работы: исходный текст и слитый набор периодов.

    Immutable: набор периодов вычисляется один раз при создании.
    Равенство — по покрываемым моментам времени, независимо от текста.
    """

    def __init__(self, spec: str, config: Optional[ParserConfig] = None):
        """
        Args:
            spec: Текст спецификации
            config: Конфигурация разбора

        Raises:
            MissingSpecificationError: Если spec равен None
            SpecificationError: Если spec не разбирается
        """
        if spec is None:
            raise MissingSpecificationError(spec)
        self._spec = spec
        self._periods: Tuple[BusinessPeriod, ...] = tuple(parse(spec, config))
        logger.debug("BusinessHours %r: %d periods", spec, len(self._periods))

    @property
    def periods(self) -> Tuple[BusinessPeriod, ...]:
        """Непересекающиеся периоды, отсортированные по start."""
        return self._periods

    @property
    def is_always_open(self) -> bool:
        return any(period.always_open() for period in self._periods)

    def is_open(self, instant: Any) -> bool:
        """
        Открыто ли в момент instant.

        Args:
            instant: datetime (или любой instant, содержащий минуты,
                часы и день недели)
        """
        return any(period.is_in_period(instant) for period in self._periods)

    def time_before_opening(
        self, instant: Any, unit: TimeUnit = TimeUnit.MINUTES
    ) -> Union[int, float]:
        """
        Время от instant до ближайшего открытия.

        Returns:
            Количество unit (>= 0), или UNBOUNDED, если открыто всегда
        """
        return min(period.time_before_opening(instant, unit) for period in self._periods)

    def opening_crons(self) -> FrozenSet[str]:
        """
        Cron-выражения для каждого открытия (пустое множество, если
        открыто всегда).
        """
        crons = (period.start_cron() for period in self._periods)
        return frozenset(str(cron) for cron in merge_crons(c for c in crons if c is not None))

    def closing_crons(self) -> FrozenSet[str]:
        """
        Cron-выражения для каждого закрытия (пустое множество, если
        открыто всегда).
        """
        crons = (period.end_cron() for period in self._periods)
        return frozenset(str(cron) for cron in merge_crons(c for c in crons if c is not None))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BusinessHours):
            return NotImplemented
        return frozenset(self._periods) == frozenset(other._periods)

    def __hash__(self) -> int:
        return hash(frozenset(self._periods))

    def __str__(self) -> str:
        return self._spec

    def __repr__(self) -> str:
        return f"BusinessHours({self._spec!r})"
