"""
Core — циклические поля, точки, периоды и cron-выражения.

Не зависит от текстового формата спецификации.
"""

from business_hours.core.cron import CronExpression, merge_crons
from business_hours.core.fields import (
    CRON_FIELDS,
    FIELD_SPECS,
    FieldSpec,
    TemporalField,
    TimeUnit,
    duration_in_unit,
)
from business_hours.core.period import UNBOUNDED, BusinessPeriod, merge_periods
from business_hours.core.temporal import PeriodicTemporal

__all__ = [
    # Fields
    "CRON_FIELDS",
    "FIELD_SPECS",
    "FieldSpec",
    "TemporalField",
    "TimeUnit",
    "duration_in_unit",
    # Temporal
    "PeriodicTemporal",
    # Period
    "BusinessPeriod",
    "UNBOUNDED",
    "merge_periods",
    # Cron
    "CronExpression",
    "merge_crons",
]
