"""
Fields — Каталог циклических шкал и единиц времени

Статический реестр поддерживаемых шкал:
- MINUTE_OF_HOUR: 0-59
- HOUR_OF_DAY: 0-23
- DAY_OF_WEEK: 1 (Monday) - 7 (Sunday)
- DAY_OF_MONTH: 1-31 (переменный домен, только для cron)
- MONTH_OF_YEAR: 1-12

Rank задаёт порядок от самой мелкой шкалы к самой крупной.
Перенос (carry) при арифметике идёт от мелких шкал к крупным:
base_unit поля равен range_unit предыдущего поля.

Также содержит чтение полей из внешних instant (datetime, date, time).
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any, Dict, Final, Tuple

from business_hours.errors import FieldValueOutOfRangeError, UnsupportedFieldError


# =============================================================================
# ЕДИНИЦЫ ВРЕМЕНИ
# =============================================================================


class TimeUnit(str, Enum):
    """Единица измерения длительности."""

    MICROS = "micros"
    MILLIS = "millis"
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    YEARS = "years"

    @property
    def duration(self) -> timedelta:
        """Длительность одной единицы (MONTHS/YEARS — оценка по григорианскому году)."""
        return _UNIT_DURATIONS[self]


# Средняя длина григорианского года: 365.2425 дней
_SECONDS_PER_YEAR: Final[int] = 31_556_952

_UNIT_DURATIONS: Final[Dict[TimeUnit, timedelta]] = {
    TimeUnit.MICROS: timedelta(microseconds=1),
    TimeUnit.MILLIS: timedelta(milliseconds=1),
    TimeUnit.SECONDS: timedelta(seconds=1),
    TimeUnit.MINUTES: timedelta(minutes=1),
    TimeUnit.HOURS: timedelta(hours=1),
    TimeUnit.DAYS: timedelta(days=1),
    TimeUnit.WEEKS: timedelta(weeks=1),
    TimeUnit.MONTHS: timedelta(seconds=_SECONDS_PER_YEAR // 12),
    TimeUnit.YEARS: timedelta(seconds=_SECONDS_PER_YEAR),
}


def duration_in_unit(duration: timedelta, unit: TimeUnit) -> int:
    """
    Длительность, выраженная в целых единицах unit.

    Округление к нулю (а не floor) — для отрицательных длительностей
    -119 минут в часах дают -1, а не -2.

    Args:
        duration: Длительность (может быть отрицательной)
        unit: Целевая единица

    Returns:
        Целое количество единиц
    """
    micros = duration // TimeUnit.MICROS.duration
    unit_micros = unit.duration // TimeUnit.MICROS.duration
    quotient = abs(micros) // unit_micros
    return quotient if micros >= 0 else -quotient


# =============================================================================
# ПОЛЯ
# =============================================================================


class TemporalField(str, Enum):
    """Циклическая шкала."""

    MINUTE_OF_HOUR = "minute_of_hour"
    HOUR_OF_DAY = "hour_of_day"
    DAY_OF_WEEK = "day_of_week"
    DAY_OF_MONTH = "day_of_month"
    MONTH_OF_YEAR = "month_of_year"

    @property
    def spec(self) -> "FieldSpec":
        return FIELD_SPECS[self]


@dataclass(frozen=True)
class FieldSpec:
    """Описание шкалы: домен [minimum, maximum], единицы и rank.

    fixed_range=False означает, что реальный размер домена зависит от
    контекста (day-of-month: 28..31); такие поля не допускаются в
    PeriodicTemporal.
    """

    field: TemporalField
    minimum: int
    maximum: int
    base_unit: TimeUnit
    range_unit: TimeUnit
    rank: int
    fixed_range: bool = True

    @property
    def size(self) -> int:
        """Количество значений в домене."""
        return self.maximum - self.minimum + 1

    def contains(self, value: int) -> bool:
        return self.minimum <= value <= self.maximum

    def check_valid_value(self, value: int) -> int:
        """
        Проверка, что значение лежит в домене поля.

        Raises:
            FieldValueOutOfRangeError: Если значение вне [minimum, maximum]
        """
        if not self.contains(value):
            raise FieldValueOutOfRangeError(self.field.value, value, self.minimum, self.maximum)
        return value

    def all_values(self) -> Tuple[int, ...]:
        return tuple(range(self.minimum, self.maximum + 1))


FIELD_SPECS: Final[Dict[TemporalField, FieldSpec]] = {
    TemporalField.MINUTE_OF_HOUR: FieldSpec(
        field=TemporalField.MINUTE_OF_HOUR,
        minimum=0,
        maximum=59,
        base_unit=TimeUnit.MINUTES,
        range_unit=TimeUnit.HOURS,
        rank=0,
    ),
    TemporalField.HOUR_OF_DAY: FieldSpec(
        field=TemporalField.HOUR_OF_DAY,
        minimum=0,
        maximum=23,
        base_unit=TimeUnit.HOURS,
        range_unit=TimeUnit.DAYS,
        rank=1,
    ),
    TemporalField.DAY_OF_WEEK: FieldSpec(
        field=TemporalField.DAY_OF_WEEK,
        minimum=1,
        maximum=7,
        base_unit=TimeUnit.DAYS,
        range_unit=TimeUnit.WEEKS,
        rank=2,
    ),
    TemporalField.DAY_OF_MONTH: FieldSpec(
        field=TemporalField.DAY_OF_MONTH,
        minimum=1,
        maximum=31,
        base_unit=TimeUnit.DAYS,
        range_unit=TimeUnit.MONTHS,
        rank=3,
        fixed_range=False,
    ),
    TemporalField.MONTH_OF_YEAR: FieldSpec(
        field=TemporalField.MONTH_OF_YEAR,
        minimum=1,
        maximum=12,
        base_unit=TimeUnit.MONTHS,
        range_unit=TimeUnit.YEARS,
        rank=4,
    ),
}

# Стандартный порядок полей cron: minute hour day-of-month month day-of-week
CRON_FIELDS: Final[Tuple[TemporalField, ...]] = (
    TemporalField.MINUTE_OF_HOUR,
    TemporalField.HOUR_OF_DAY,
    TemporalField.DAY_OF_MONTH,
    TemporalField.MONTH_OF_YEAR,
    TemporalField.DAY_OF_WEEK,
)


# =============================================================================
# ЧТЕНИЕ ВНЕШНИХ INSTANT
# =============================================================================


def read_field(instant: Any, field: TemporalField) -> int:
    """
    Значение поля из внешнего instant.

    Поддерживаются datetime (все поля), date (день недели, день месяца,
    месяц), time (минуты, часы) и любой объект с методом get(field)
    (PeriodicTemporal).

    Raises:
        UnsupportedFieldError: Если instant не содержит поле
    """
    if isinstance(instant, (datetime, time)):
        if field is TemporalField.MINUTE_OF_HOUR:
            return instant.minute
        if field is TemporalField.HOUR_OF_DAY:
            return instant.hour
    if isinstance(instant, date):
        # datetime является подклассом date
        if field is TemporalField.DAY_OF_WEEK:
            return instant.isoweekday()
        if field is TemporalField.DAY_OF_MONTH:
            return instant.day
        if field is TemporalField.MONTH_OF_YEAR:
            return instant.month
    if isinstance(instant, (datetime, date, time)):
        raise UnsupportedFieldError(field.value)
    return instant.get(field)


def precision_of(instant: Any) -> TimeUnit:
    """Самая мелкая единица, которую instant способен выразить."""
    if isinstance(instant, (datetime, time)):
        return TimeUnit.MICROS
    if isinstance(instant, date):
        return TimeUnit.DAYS
    return instant.precision


def time_of_day(instant: Any) -> timedelta:
    """
    Часть instant внутри суток (для date — ноль).

    Для PeriodicTemporal суммируются только поля мельче суток.
    """
    if isinstance(instant, (datetime, time)):
        return timedelta(
            hours=instant.hour,
            minutes=instant.minute,
            seconds=instant.second,
            microseconds=instant.microsecond,
        )
    if isinstance(instant, date):
        return timedelta(0)
    total = timedelta(0)
    for field in instant.fields:
        spec = field.spec
        if spec.base_unit.duration < TimeUnit.DAYS.duration:
            total += (instant.get(field) - spec.minimum) * spec.base_unit.duration
    return total


def remainder_below(instant: Any, unit: TimeUnit) -> timedelta:
    """
    Остаток instant мельче unit, в точности самого instant.

    Например, для 11:30:01 и unit=MINUTES остаток равен 1 секунде.
    Если точность instant не мельче unit — остаток нулевой.
    """
    if precision_of(instant).duration >= unit.duration:
        return timedelta(0)
    return time_of_day(instant) % min(unit.duration, TimeUnit.DAYS.duration)
