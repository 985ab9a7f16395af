"""
Тесты для BusinessHours

Проверяемые свойства:
1. Всегда открыто при пустой спецификации
2. Wraparound диапазонов
3. Границы периодов с секундной точностью
4. Cron-выражения открытия и закрытия
5. Независимость от порядка подвыражений и эквивалентность покрытия
6. Ошибки разбора
"""

from datetime import datetime, time, timedelta

import pytest

from business_hours import (
    UNBOUNDED,
    BusinessHours,
    MalformedRangeError,
    MalformedSpecificationError,
    MissingSpecificationError,
    ParserConfig,
    TimeUnit,
    UnsupportedFieldError,
)
from business_hours.core.period import merge_periods
from business_hours.parser.expander import parse_sub_period


# 2024-01-01 это понедельник
MONDAY = datetime(2024, 1, 1)


def at(day_offset: int, hour: int, minute: int = 0, second: int = 0) -> datetime:
    """Момент недели: day_offset=0 — понедельник."""
    return MONDAY + timedelta(days=day_offset, hours=hour, minutes=minute, seconds=second)


def every_minute_of_week(step: int = 7):
    for offset in range(0, 7 * 24 * 60, step):
        yield MONDAY + timedelta(minutes=offset)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def office_hours() -> BusinessHours:
    """Пн-пт, 9:00-18:59."""
    return BusinessHours("wday{Mon-Fri} hr{9-18}")


# =============================================================================
# ТЕСТЫ: Always open
# =============================================================================


class TestAlwaysOpen:
    """Пустая спецификация — открыто всегда"""

    def test_open_everywhere(self):
        hours = BusinessHours("")
        assert hours.is_always_open
        assert all(hours.is_open(instant) for instant in every_minute_of_week(step=97))

    def test_time_before_opening_unbounded(self):
        hours = BusinessHours("")
        assert hours.time_before_opening(at(2, 13, 5)) == UNBOUNDED
        assert hours.time_before_opening(at(6, 23, 59), TimeUnit.SECONDS) == UNBOUNDED

    def test_no_crons(self):
        hours = BusinessHours("")
        assert hours.opening_crons() == frozenset()
        assert hours.closing_crons() == frozenset()

    def test_all_week_text_equals_empty(self):
        assert BusinessHours("wd {Mon-Sun}") == BusinessHours("")


# =============================================================================
# ТЕСТЫ: is_open
# =============================================================================


class TestIsOpen:
    """Тесты is_open"""

    def test_wraparound_hours(self):
        hours = BusinessHours("hr {21-03}")
        open_hours = {21, 22, 23, 0, 1, 2, 3}
        for hour in range(24):
            assert hours.is_open(at(2, hour, 30)) is (hour in open_hours)

    def test_wraparound_across_week_boundary(self):
        hours = BusinessHours("wd {Sun-Mon} hr {22-1}")
        assert hours.is_open(at(6, 23, 0))
        assert hours.is_open(at(0, 0, 30))
        assert not hours.is_open(at(1, 22, 0))

    @pytest.mark.parametrize(
        "hour,minute,second,expected",
        [
            (9, 0, 0, True),
            (8, 59, 59, False),
            (17, 59, 59, True),
            (18, 0, 0, False),
        ],
    )
    def test_boundaries(self, hour, minute, second, expected):
        hours = BusinessHours("hr {09-5pm}")
        assert hours.is_open(at(3, hour, minute, second)) is expected

    def test_weekdays(self, office_hours):
        assert office_hours.is_open(at(4, 18, 59))
        assert not office_hours.is_open(at(5, 10, 0))
        assert not office_hours.is_open(at(6, 10, 0))

    def test_time_without_weekday(self, office_hours):
        with pytest.raises(UnsupportedFieldError):
            office_hours.is_open(time(10, 0))

    def test_minute_scale(self):
        hours = BusinessHours("minute { 0-29 }")
        assert hours.is_open(at(0, 10, 29, 59))
        assert not hours.is_open(at(0, 10, 30))


# =============================================================================
# ТЕСТЫ: time_before_opening
# =============================================================================


class TestTimeBeforeOpening:
    """Тесты time_before_opening"""

    def test_before_opening_same_day(self, office_hours):
        assert office_hours.time_before_opening(at(0, 8, 0)) == 60

    def test_over_weekend(self, office_hours):
        """Пт 19:00 → Пн 9:00 = 62 часа"""
        assert office_hours.time_before_opening(at(4, 19, 0), TimeUnit.HOURS) == 62

    def test_while_open_counts_to_next_opening(self, office_hours):
        """Пн 10:00 → следующее открытие Вт 9:00"""
        assert office_hours.time_before_opening(at(0, 10, 0)) == 23 * 60

    def test_second_precision(self, office_hours):
        assert office_hours.time_before_opening(at(0, 8, 59, 30), TimeUnit.SECONDS) == 30

    def test_never_negative(self, office_hours):
        assert all(
            office_hours.time_before_opening(instant) >= 0 for instant in every_minute_of_week(step=113)
        )


# =============================================================================
# ТЕСТЫ: Crons
# =============================================================================


class TestCrons:
    """Тесты cron-выражений"""

    def test_opening_crons(self, office_hours):
        assert office_hours.opening_crons() == frozenset({"0 9 * * 1-5"})

    def test_closing_crons(self, office_hours):
        assert office_hours.closing_crons() == frozenset({"0 19 * * 1-5"})

    def test_daily_crons(self):
        hours = BusinessHours("hr {9am-4pm}")
        assert hours.opening_crons() == frozenset({"0 9 * * *"})
        assert hours.closing_crons() == frozenset({"0 17 * * *"})

    def test_half_hours(self):
        hours = BusinessHours("wd {Mon} minute {0-29}")
        assert hours.opening_crons() == frozenset({"0 * * * 1"})
        assert hours.closing_crons() == frozenset({"30 * * * 1"})

    def test_different_days_different_hours(self):
        hours = BusinessHours("wd {Mon Wed Fri} hr {9am-4pm}, wd {Tue Thu} hr {9am-2pm}")
        assert hours.opening_crons() == frozenset({"0 9 * * 1-5"})
        assert hours.closing_crons() == frozenset({"0 17 * * 1,3,5", "0 15 * * 2,4"})


# =============================================================================
# ТЕСТЫ: Равенство и свойства покрытия
# =============================================================================


class TestEquivalence:
    """Тесты равенства и эквивалентности покрытия"""

    def test_equal_regardless_of_text(self):
        assert BusinessHours("hr {9-10}") == BusinessHours("hr {9 10}")
        assert BusinessHours("hr {9-10}") == BusinessHours("hour{9am-10am}")
        assert BusinessHours("hr {9-10}") != BusinessHours("hr {9-11}")

    def test_hashable(self):
        assert len({BusinessHours("hr {9-10}"), BusinessHours("hr {9 10}")}) == 1

    def test_str_returns_original_text(self):
        text = "wd {Mon-Fri}  hr {9am-5pm}"
        assert str(BusinessHours(text)) == text

    def test_sub_period_order_irrelevant(self):
        first = BusinessHours("wd {Mon} hr {9-12}, wd {Tue} hr {14}, hr {22-2}")
        second = BusinessHours("hr {22-2}, wd {Tue} hr {14}, wd {Mon} hr {9-12}")
        assert first == second
        for instant in every_minute_of_week(step=31):
            assert first.is_open(instant) == second.is_open(instant)

    def test_merge_preserves_coverage(self):
        text = "wd {Mon Wed} hr {9-12 11-14}, hr {22-2}, wd {Sat} min {0-14 45-59}"
        hours = BusinessHours(text)
        candidates = set()
        for sub_period in text.split(","):
            candidates.update(parse_sub_period(sub_period))
        for instant in every_minute_of_week(step=11):
            expected = any(candidate.is_in_period(instant) for candidate in candidates)
            assert hours.is_open(instant) == expected

    def test_merged_periods_are_idempotent(self):
        hours = BusinessHours("wd {Mon Wed} hr {9-12 11-14}, hr {22-2}")
        assert set(merge_periods(hours.periods)) == set(hours.periods)

    def test_merged_periods_are_disjoint(self):
        periods = BusinessHours("wd {Mon Wed} hr {9-12 11-14}, hr {22-2}").periods
        for first in periods:
            for second in periods:
                if first != second:
                    assert not first.is_in_period(second.start)


# =============================================================================
# ТЕСТЫ: Ошибки
# =============================================================================


class TestErrors:
    """Тесты ошибок построения"""

    def test_malformed_range(self):
        with pytest.raises(MalformedRangeError):
            BusinessHours("min {10-11-12}")

    def test_missing_specification(self):
        with pytest.raises(MissingSpecificationError):
            BusinessHours(None)

    def test_empty_clause(self):
        with pytest.raises(MalformedRangeError):
            BusinessHours("wd {Mon-Fri} hr {}")

    def test_unclosed_clause(self):
        """Без strict незакрытая скобка игнорируется, со strict это ошибка"""
        assert BusinessHours("hr {9-17").is_always_open
        with pytest.raises(MalformedSpecificationError):
            BusinessHours("hr {9-17", ParserConfig(strict=True))
