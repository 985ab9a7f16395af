"""
business_hours — часы работы, заданные компактным текстом

Разбор спецификации вида "wd {Mon-Fri} hr {9am-5pm}" в минимальный набор
непересекающихся периодов, запросы "открыто ли" и "сколько до открытия",
синтез cron-выражений для открытий и закрытий.
"""

from business_hours.config import ParserConfig
from business_hours.core.cron import CronExpression, merge_crons
from business_hours.core.fields import TemporalField, TimeUnit
from business_hours.core.period import UNBOUNDED, BusinessPeriod, merge_periods
from business_hours.core.temporal import PeriodicTemporal
from business_hours.errors import (
    BusinessHoursError,
    FieldValueOutOfRangeError,
    MalformedFieldValueError,
    MalformedHourError,
    MalformedRangeError,
    MalformedSpecificationError,
    MalformedWeekdayError,
    MissingSpecificationError,
    NonContiguousFieldSetError,
    SpecificationError,
    TemporalError,
    UnsupportedFieldError,
    UnsupportedUnitError,
    VariableRangeFieldError,
)
from business_hours.hours import BusinessHours
from business_hours.parser.expander import parse

__all__ = [
    # Façade
    "BusinessHours",
    "ParserConfig",
    "parse",
    # Core types
    "BusinessPeriod",
    "CronExpression",
    "PeriodicTemporal",
    "TemporalField",
    "TimeUnit",
    "UNBOUNDED",
    "merge_crons",
    "merge_periods",
    # Errors
    "BusinessHoursError",
    "SpecificationError",
    "MalformedRangeError",
    "MalformedFieldValueError",
    "MalformedHourError",
    "MalformedWeekdayError",
    "MalformedSpecificationError",
    "MissingSpecificationError",
    "TemporalError",
    "NonContiguousFieldSetError",
    "VariableRangeFieldError",
    "FieldValueOutOfRangeError",
    "UnsupportedFieldError",
    "UnsupportedUnitError",
]
