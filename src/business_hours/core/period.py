"""
BusinessPeriod — Непрерывный период открытия

Замкнутый интервал [start, end] между двумя PeriodicTemporal с одинаковым
набором полей. Период "всегда открыт", если end.increment() == start
(интервал покрывает весь циклический домен).

Merge:
- Сортировка по start
- Линейный проход с аккумулятором: пересечение (start внутри аккумулятора)
  или смежность (end.increment() == start) расширяют аккумулятор
- Результат — минимальный набор непересекающихся периодов
  с тем же покрытием, что и вход. O(n log n).
"""

import logging
from typing import Any, Final, Iterable, List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from business_hours.core.cron import CronExpression
from business_hours.core.fields import TimeUnit
from business_hours.core.temporal import PeriodicTemporal


logger = logging.getLogger(__name__)


# Результат time_before_opening для периода, открытого всегда
UNBOUNDED: Final[float] = float("inf")


class BusinessPeriod(BaseModel):
    """
    Период открытия [start, end].

    Immutable модель (frozen=True). Равенство — по start и end.
    """

    start: PeriodicTemporal = Field(..., description="Первая открытая точка")
    end: PeriodicTemporal = Field(..., description="Последняя открытая точка")

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @field_validator("end")
    @classmethod
    def validate_same_fields(cls, v: PeriodicTemporal, info) -> PeriodicTemporal:
        """Проверка, что start и end заданы на одном наборе полей."""
        if "start" in info.data:
            start = info.data["start"]
            if start.fields != v.fields:
                raise ValueError(
                    f"start and end must share the same fields: "
                    f"{[f.value for f in start.fields]} != {[f.value for f in v.fields]}"
                )
        return v

    def always_open(self) -> bool:
        """True, если период покрывает весь циклический домен."""
        return self.end.increment() == self.start

    def is_in_period(self, instant: Any) -> bool:
        """
        Попадает ли instant в период.

        Точность instant мельче самого мелкого поля игнорируется:
        09:15:59 входит в период, заканчивающийся минутой 15.
        """
        return self.start.compare_to(instant) <= 0 and self.end.compare_to(instant) >= 0

    def time_before_opening(self, instant: Any, unit: TimeUnit) -> Union[int, float]:
        """
        Время от instant до следующего открытия периода.

        Returns:
            UNBOUNDED, если период открыт всегда, иначе количество unit (>= 0)
        """
        return UNBOUNDED if self.always_open() else self.start.since(instant, unit)

    def start_cron(self) -> Optional[CronExpression]:
        """
        Cron, срабатывающий в момент открытия.

        Например, для периода 9:00-18:59 результат "0 9 * * *".
        None, если период открыт всегда.
        """
        return None if self.always_open() else CronExpression.from_temporal(self.start)

    def end_cron(self) -> Optional[CronExpression]:
        """Cron, срабатывающий в первую закрытую точку после периода."""
        return None if self.always_open() else CronExpression.from_temporal(self.end.increment())

    def __repr__(self) -> str:
        return f"BusinessPeriod(start={self.start!r}, end={self.end!r})"


# =============================================================================
# MERGE
# =============================================================================


def merge_periods(periods: Iterable[BusinessPeriod]) -> List[BusinessPeriod]:
    """
    Слияние пересекающихся и смежных периодов.

    Args:
        periods: Периоды на одном наборе полей (порядок не важен)

    Returns:
        Непересекающиеся периоды, отсортированные по start.
        Покрытие совпадает с покрытием входа.
    """
    sorted_periods = sorted(periods, key=lambda period: period.start)

    merged: List[BusinessPeriod] = []
    current: Optional[BusinessPeriod] = None
    for period in sorted_periods:
        if current is None:
            current = period
        elif current.is_in_period(period.start):
            # start внутри аккумулятора: расширяем до большего end
            current = BusinessPeriod(start=current.start, end=max(current.end, period.end))
        elif current.end.increment() == period.start:
            # смежные периоды
            current = BusinessPeriod(start=current.start, end=period.end)
        else:
            merged.append(current)
            current = period

    if current is not None:
        merged.append(current)

    logger.debug("Merged %d periods into %d", len(sorted_periods), len(merged))
    return merged
