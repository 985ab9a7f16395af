"""
Syntax — Правила разбора значений для каждой шкалы

Каждое разбираемое поле описывается записью FieldSyntax:
- pattern: регулярное выражение field-clause `scale { ... }`
- parse: функция, превращающая токен значения в целое

Поддерживаемые шкалы:
    minute (min)  : 0-59
    hour (hr)     : 0-23, либо 12am, 1am-11am, 12noon, 12pm, 1pm-11pm
    wday (wd)     : 1 (Monday) - 7 (Sunday), либо mo, tu, we, th, fr, sa, su
                    (значимы только две первые буквы, регистр не важен)
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, Final, Optional, Pattern, Tuple

from business_hours.core.fields import TemporalField
from business_hours.errors import (
    MalformedFieldValueError,
    MalformedHourError,
    MalformedWeekdayError,
)


# =============================================================================
# ПАРСЕРЫ ЗНАЧЕНИЙ
# =============================================================================

_INTEGER_PATTERN: Final[Pattern[str]] = re.compile(r"[0-9]+")

_TWELVE_HOURS_PATTERN: Final[Pattern[str]] = re.compile(r"(\d{1,2})(am|noon|pm)", re.IGNORECASE)

WEEKDAYS_MAPPING: Final[Dict[str, int]] = {
    "mo": 1,
    "tu": 2,
    "we": 3,
    "th": 4,
    "fr": 5,
    "sa": 6,
    "su": 7,
}


def _parse_integer(value: str) -> Optional[int]:
    """Целое без знака и разделителей, иначе None."""
    if _INTEGER_PATTERN.fullmatch(value) is None:
        return None
    return int(value)


def parse_minute(value: str) -> int:
    """Минута: только целое число."""
    minute = _parse_integer(value)
    if minute is None:
        raise MalformedFieldValueError(value, TemporalField.MINUTE_OF_HOUR.value, "not an integer")
    return minute


def parse_hour(value: str) -> int:
    """
    Час в 24-часовом или 12-часовом формате.

    12am → 0 (полночь), 12pm/12noon → 12 (полдень),
    Npm → N + 12 для N != 12.

    Raises:
        MalformedHourError: Если значение не разбирается ни в одном формате
    """
    hour = _parse_integer(value)
    if hour is not None:
        return hour

    match = _TWELVE_HOURS_PATTERN.fullmatch(value)
    if match is None:
        raise MalformedHourError(value, TemporalField.HOUR_OF_DAY.value, "invalid hour format")

    hour = int(match.group(1))
    day_half = match.group(2).lower()
    if day_half == "am" and hour == 12:
        hour = 0
    elif day_half == "pm" and hour != 12:
        hour += 12
    return hour


def parse_weekday(value: str) -> int:
    """
    День недели: число или название (значимы две первые буквы).

    Raises:
        MalformedWeekdayError: Если значение не число и не известное сокращение
    """
    weekday = _parse_integer(value)
    if weekday is not None:
        return weekday

    weekday = WEEKDAYS_MAPPING.get(value[:2].lower()) if len(value) >= 2 else None
    if weekday is None:
        raise MalformedWeekdayError(value, TemporalField.DAY_OF_WEEK.value, "invalid weekday value")
    return weekday


# =============================================================================
# КАТАЛОГ СИНТАКСИСА
# =============================================================================


@dataclass(frozen=True)
class FieldSyntax:
    """Правило извлечения и разбора значений одной шкалы."""

    field: TemporalField
    pattern: Pattern[str]
    parse: Callable[[str], int]


FIELD_SYNTAX: Final[Tuple[FieldSyntax, ...]] = (
    FieldSyntax(
        field=TemporalField.MINUTE_OF_HOUR,
        pattern=re.compile(r"(?:minute|min)\s*\{(.*?)\}"),
        parse=parse_minute,
    ),
    FieldSyntax(
        field=TemporalField.HOUR_OF_DAY,
        pattern=re.compile(r"(?:hour|hr)\s*\{(.*?)\}"),
        parse=parse_hour,
    ),
    FieldSyntax(
        field=TemporalField.DAY_OF_WEEK,
        pattern=re.compile(r"(?:wday|wd)\s*\{(.*?)\}"),
        parse=parse_weekday,
    ),
)
