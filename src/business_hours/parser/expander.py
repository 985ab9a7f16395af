"""
Expander — Превращение диапазонов в периоды открытия

Для одного подвыражения:
1. Декартово произведение диапазонов по шкалам (по одному на шкалу)
2. Для каждой комбинации самая мелкая шкала даёт непрерывный блок
   [min, max], а каждое значение более крупных шкал — отдельную точку.
   "hr {9}" означает весь интервал 9:00-9:59, а "hr {9 11}" — два
   отдельных интервала, которые затем объединяются merge.

Подвыражения, разделённые запятой, объединяются ("или"); все
кандидаты сливаются в минимальное покрытие.
"""

import itertools
import logging
from typing import Dict, List, Mapping, Optional, Set

from business_hours.config import ParserConfig
from business_hours.core.fields import TemporalField
from business_hours.core.period import BusinessPeriod, merge_periods
from business_hours.core.temporal import PeriodicTemporal
from business_hours.errors import MalformedSpecificationError, MissingSpecificationError
from business_hours.parser.ranges import ValueRange, accepted_ranges
from business_hours.parser.syntax import FIELD_SYNTAX


logger = logging.getLogger(__name__)


def range_combinations(
    ranges: Mapping[TemporalField, List[ValueRange]]
) -> List[Dict[TemporalField, ValueRange]]:
    """
    Все комбинации "по одному диапазону на шкалу".

    Количество комбинаций — произведение длин списков.
    """
    fields = sorted(ranges, key=lambda field: field.spec.rank)
    return [
        dict(zip(fields, combination))
        for combination in itertools.product(*(ranges[field] for field in fields))
    ]


def to_business_periods(combination: Mapping[TemporalField, ValueRange]) -> List[BusinessPeriod]:
    """
    Разбиение одной комбинации диапазонов на непрерывные периоды.

    Args:
        combination: field → примитивный (не wraparound) диапазон

    Returns:
        По одному периоду на каждую комбинацию значений крупных шкал
    """
    fields = sorted(combination, key=lambda field: field.spec.rank)
    finest, coarser = fields[0], fields[1:]
    finest_range = combination[finest]

    periods = []
    for point in itertools.product(*(combination[field].values() for field in coarser)):
        fixed = dict(zip(coarser, point))
        periods.append(
            BusinessPeriod(
                start=PeriodicTemporal.of({**fixed, finest: finest_range.start}),
                end=PeriodicTemporal.of({**fixed, finest: finest_range.end}),
            )
        )
    return periods


def _check_leftover(sub_period: str) -> None:
    leftover = sub_period
    for syntax in FIELD_SYNTAX:
        leftover = syntax.pattern.sub(" ", leftover)
    leftover = leftover.strip()
    if leftover:
        raise MalformedSpecificationError(sub_period, leftover)


def parse_sub_period(sub_period: str, config: Optional[ParserConfig] = None) -> Set[BusinessPeriod]:
    """
    Кандидаты-периоды одного подвыражения (без слияния).

    Raises:
        MalformedRangeError / MalformedFieldValueError: Некорректный токен
        MalformedSpecificationError: Лишний текст (только strict)
    """
    config = config or ParserConfig()
    if config.strict:
        _check_leftover(sub_period)

    periods: Set[BusinessPeriod] = set()
    for combination in range_combinations(accepted_ranges(sub_period)):
        periods.update(to_business_periods(combination))
    return periods


def parse(business_hours: str, config: Optional[ParserConfig] = None) -> List[BusinessPeriod]:
    """
    Разбор полной спецификации в минимальный набор периодов.

    Пустая спецификация означает "открыто всегда".

    Args:
        business_hours: Текст спецификации
        config: Конфигурация разбора (по умолчанию ParserConfig())

    Returns:
        Слитые периоды, отсортированные по start

    Raises:
        MissingSpecificationError: Если спецификация не строка (None)
        SpecificationError: Любая ошибка разбора (частичного результата нет)
    """
    if not isinstance(business_hours, str):
        raise MissingSpecificationError(business_hours)
    config = config or ParserConfig()

    candidates: Set[BusinessPeriod] = set()
    for sub_period in business_hours.split(config.sub_period_separator):
        candidates.update(parse_sub_period(sub_period, config))

    logger.debug("Parsed %r into %d candidate periods", business_hours, len(candidates))
    return merge_periods(candidates)
