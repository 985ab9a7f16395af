"""
Тесты для BusinessPeriod и merge_periods

Проверяет:
1. always_open / is_in_period / time_before_opening
2. Cron-выражения открытия и закрытия
3. Слияние пересекающихся и смежных периодов
4. Идемпотентность merge
"""

from datetime import time

import pytest
from pydantic import ValidationError

from business_hours.core.fields import TemporalField, TimeUnit
from business_hours.core.period import UNBOUNDED, BusinessPeriod, merge_periods
from business_hours.core.temporal import PeriodicTemporal


MINUTE = TemporalField.MINUTE_OF_HOUR
HOUR = TemporalField.HOUR_OF_DAY


def m(minute: int) -> PeriodicTemporal:
    return PeriodicTemporal.of({MINUTE: minute})


def period(start: int, end: int) -> BusinessPeriod:
    return BusinessPeriod(start=m(start), end=m(end))


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def ten_to_fifteen() -> BusinessPeriod:
    """Период: минуты 10-15 каждого часа."""
    return period(10, 15)


@pytest.fixture
def whole_hour() -> BusinessPeriod:
    """Период, открытый всегда."""
    return period(0, 59)


# =============================================================================
# ТЕСТЫ: BusinessPeriod
# =============================================================================


class TestBusinessPeriod:
    """Тесты одного периода"""

    def test_always_open(self, whole_hour):
        assert whole_hour.always_open()
        assert not period(1, 59).always_open()

    @pytest.mark.parametrize(
        "instant,expected",
        [
            (time(0, 10, 0), True),
            (time(0, 15, 59), True),
            (time(0, 16, 0), False),
            (time(0, 9, 59), False),
        ],
    )
    def test_is_in_period(self, ten_to_fifteen, instant, expected):
        assert ten_to_fifteen.is_in_period(instant) is expected

    def test_time_before_opening(self, ten_to_fifteen):
        assert ten_to_fifteen.time_before_opening(time(0, 9, 1), TimeUnit.SECONDS) == 59
        assert ten_to_fifteen.time_before_opening(time(0, 10, 0), TimeUnit.SECONDS) == 0
        assert ten_to_fifteen.time_before_opening(time(0, 10, 1), TimeUnit.SECONDS) == 3599

    def test_time_before_opening_always_open(self, whole_hour):
        assert whole_hour.time_before_opening(time(0, 0), TimeUnit.MINUTES) == UNBOUNDED

    def test_start_cron(self, ten_to_fifteen, whole_hour):
        assert str(ten_to_fifteen.start_cron()) == "10 * * * *"
        assert whole_hour.start_cron() is None

    def test_end_cron(self, ten_to_fifteen, whole_hour):
        """Закрытие — первая минута после периода"""
        assert str(ten_to_fifteen.end_cron()) == "16 * * * *"
        assert whole_hour.end_cron() is None

    def test_mismatched_fields_rejected(self):
        with pytest.raises(ValidationError):
            BusinessPeriod(start=m(0), end=PeriodicTemporal.of({HOUR: 1, MINUTE: 0}))

    def test_frozen(self, ten_to_fifteen):
        with pytest.raises(ValidationError):
            ten_to_fifteen.end = m(20)

    def test_equality(self):
        assert period(10, 15) == period(10, 15)
        assert period(10, 15) != period(10, 16)
        assert len({period(10, 15), period(10, 15)}) == 1


# =============================================================================
# ТЕСТЫ: merge_periods
# =============================================================================


class TestMergePeriods:
    """Тесты слияния периодов"""

    def test_overlap_and_adjacency(self):
        """[10,15] ∪ [12,20] ∪ [21,22] ∪ [24,27] → [10,22], [24,27]"""
        merged = merge_periods([period(10, 15), period(12, 20), period(21, 22), period(24, 27)])
        assert set(merged) == {period(10, 22), period(24, 27)}

    def test_input_order_irrelevant(self):
        merged = merge_periods([period(24, 27), period(21, 22), period(12, 20), period(10, 15)])
        assert set(merged) == {period(10, 22), period(24, 27)}

    def test_contained_period(self):
        """Вложенный период не сокращает end"""
        assert merge_periods([period(10, 30), period(12, 15)]) == [period(10, 30)]

    def test_duplicates(self):
        assert merge_periods([period(5, 6), period(5, 6)]) == [period(5, 6)]

    def test_result_sorted_by_start(self):
        merged = merge_periods([period(40, 41), period(1, 2), period(20, 21)])
        assert merged == [period(1, 2), period(20, 21), period(40, 41)]

    def test_idempotent(self):
        merged = merge_periods([period(10, 15), period(12, 20), period(21, 22), period(24, 27)])
        assert merge_periods(merged) == merged

    def test_full_cover_becomes_always_open(self):
        merged = merge_periods([period(0, 29), period(30, 59)])
        assert merged == [period(0, 59)]
        assert merged[0].always_open()

    def test_empty(self):
        assert merge_periods([]) == []
