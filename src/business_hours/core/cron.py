"""
CronExpression — Синтез и слияние cron-выражений

Cron строится по одной точке PeriodicTemporal на стандартном наборе
полей cron (minute hour day-of-month month day-of-week):
- поле поддерживается точкой → {значение точки}
- поле не поддерживается и крупнее самого мелкого поддерживаемого
  поля → весь домен (срабатывает при любом значении)
- поле не поддерживается и мельче → {minimum} (точный момент)

Слияние: два выражения сливаются, если различаются не более чем в одном
поле; различающиеся множества объединяются.

merge_crons — жадная свёртка слева направо: первое подходящее
выражение побеждает. Результат зависит от порядка входа и не обязательно
минимален (ранний merge может заблокировать более выгодный поздний).
"""

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Tuple

from business_hours.core.fields import CRON_FIELDS, TemporalField
from business_hours.core.temporal import PeriodicTemporal


logger = logging.getLogger(__name__)

WILDCARD = "*"


@dataclass(frozen=True)
class CronExpression:
    """
    Immutable cron-выражение: по одному непустому множеству значений
    на каждое поле CRON_FIELDS.
    """

    minute: FrozenSet[int]
    hour: FrozenSet[int]
    day_of_month: FrozenSet[int]
    month: FrozenSet[int]
    day_of_week: FrozenSet[int]

    def __post_init__(self) -> None:
        for field, values in zip(CRON_FIELDS, self._sets()):
            spec = field.spec
            if not values:
                raise ValueError(f"Cron field {field.value} must have at least one value")
            for value in values:
                spec.check_valid_value(value)

    @classmethod
    def from_temporal(cls, temporal: PeriodicTemporal) -> "CronExpression":
        """
        Cron, срабатывающий в каждое наступление точки temporal.

        Args:
            temporal: Точка на подмножестве полей cron

        Returns:
            CronExpression
        """
        finest_duration = min(field.spec.base_unit.duration for field in temporal.fields)

        sets = []
        for field in CRON_FIELDS:
            spec = field.spec
            if temporal.is_supported(field):
                sets.append(frozenset({temporal.get(field)}))
            elif spec.base_unit.duration > finest_duration:
                sets.append(frozenset(spec.all_values()))
            else:
                sets.append(frozenset({spec.minimum}))
        return cls(*sets)

    def _sets(self) -> Tuple[FrozenSet[int], ...]:
        return (self.minute, self.hour, self.day_of_month, self.month, self.day_of_week)

    def values(self, field: TemporalField) -> FrozenSet[int]:
        """Множество допустимых значений поля."""
        return self._sets()[CRON_FIELDS.index(field)]

    def can_merge_with(self, other: "CronExpression") -> bool:
        """True, если выражения различаются не более чем в одном поле."""
        differences = sum(1 for mine, theirs in zip(self._sets(), other._sets()) if mine != theirs)
        return differences <= 1

    def merge(self, other: "CronExpression") -> "CronExpression":
        """Объединение значений по каждому полю."""
        return CronExpression(*(mine | theirs for mine, theirs in zip(self._sets(), other._sets())))

    def __str__(self) -> str:
        return " ".join(
            _field_to_string(field, values) for field, values in zip(CRON_FIELDS, self._sets())
        )


def _field_to_string(field: TemporalField, values: FrozenSet[int]) -> str:
    """Wildcard для полного домена, иначе отсортированные непрерывные серии."""
    if values == frozenset(field.spec.all_values()):
        return WILDCARD
    return ",".join(
        str(first) if first == last else f"{first}-{last}" for first, last in _to_runs(values)
    )


def _to_runs(values: Iterable[int]) -> List[Tuple[int, int]]:
    """Максимальные непрерывные серии: {1,2,3,5} → [(1,3), (5,5)]."""
    runs: List[Tuple[int, int]] = []
    for value in sorted(values):
        if runs and runs[-1][1] == value - 1:
            runs[-1] = (runs[-1][0], value)
        else:
            runs.append((value, value))
    return runs


def merge_crons(crons: Iterable[CronExpression]) -> List[CronExpression]:
    """
    Жадное слияние cron-выражений.

    Для каждого выражения ищется первое уже слитое, с которым оно
    сливается; найденное удаляется и результат слияния добавляется
    в конец. Иначе выражение добавляется как новое.

    Args:
        crons: Выражения в порядке свёртки

    Returns:
        Слитые выражения
    """
    merged: List[CronExpression] = []
    count = 0
    for cron in crons:
        count += 1
        for index, candidate in enumerate(merged):
            if candidate.can_merge_with(cron):
                del merged[index]
                merged.append(candidate.merge(cron))
                break
        else:
            merged.append(cron)

    logger.debug("Merged %d cron expressions into %d", count, len(merged))
    return merged
