"""Parser — разбор текстовой спецификации в периоды открытия."""

from .expander import parse, parse_sub_period, range_combinations, to_business_periods
from .ranges import ValueRange, accepted_ranges, extract_tokens, parse_range
from .syntax import FIELD_SYNTAX, FieldSyntax, parse_hour, parse_minute, parse_weekday

__all__ = [
    "parse",
    "parse_sub_period",
    "range_combinations",
    "to_business_periods",
    "ValueRange",
    "accepted_ranges",
    "extract_tokens",
    "parse_range",
    "FIELD_SYNTAX",
    "FieldSyntax",
    "parse_hour",
    "parse_minute",
    "parse_weekday",
]
