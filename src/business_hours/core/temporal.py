"""
PeriodicTemporal — Точка в циклическом смешанном основании

Точка задаётся значениями на непрерывном (по rank) подмножестве полей
каталога, например {hour_of_day: 9, minute_of_hour: 30} или
{day_of_week: 1, hour_of_day: 9, minute_of_hour: 0}.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Набор полей непрерывен по rank (base_unit поля == range_unit предыдущего)
2. Все поля имеют фиксированный домен (day-of-month запрещён)
3. Равенство — по отображению field → value
4. Immutable: with_field/plus/minus возвращают новый экземпляр

АРИФМЕТИКА (перенос от мелких полей к крупным):
    offset    = value - minimum + carry
    new_value = minimum + offset mod size
    carry     = floor(offset / size)
"""

from datetime import timedelta
from typing import Any, Dict, Mapping, Tuple

from business_hours.core.fields import (
    TemporalField,
    TimeUnit,
    duration_in_unit,
    read_field,
    remainder_below,
)
from business_hours.errors import (
    NonContiguousFieldSetError,
    UnsupportedFieldError,
    UnsupportedUnitError,
    VariableRangeFieldError,
)


class PeriodicTemporal:
    """
    Immutable точка в циклическом пространстве полей.

    Создаётся через PeriodicTemporal.of(mapping). Поля хранятся
    отсортированными по rank: первое — самое мелкое.
    """

    __slots__ = ("_field_values",)

    def __init__(self, field_values: Tuple[Tuple[TemporalField, int], ...]):
        """
        Args:
            field_values: Пары (field, value), отсортированные по rank

        Raises:
            NonContiguousFieldSetError: Разрыв в наборе полей
            VariableRangeFieldError: Поле с переменным доменом
            FieldValueOutOfRangeError: Значение вне домена поля
        """
        field_values = tuple(field_values)
        if not field_values:
            raise NonContiguousFieldSetError("At least one field is required")

        previous = None
        for field, value in field_values:
            spec = field.spec
            if not spec.fixed_range:
                raise VariableRangeFieldError(
                    f"The fields must have a fixed range: {field.value}",
                    details={"field": field.value},
                )
            if previous is not None and spec.base_unit != previous.range_unit:
                raise NonContiguousFieldSetError(
                    f"The fields must be contiguous: {previous.field.value} -> {field.value}",
                    details={"fields": [f.value for f, _ in field_values]},
                )
            spec.check_valid_value(value)
            previous = spec

        object.__setattr__(self, "_field_values", field_values)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"PeriodicTemporal is immutable, cannot set {name!r}")

    @classmethod
    def of(cls, field_values: Mapping[TemporalField, int]) -> "PeriodicTemporal":
        """Построение из отображения field → value (порядок ключей не важен)."""
        ordered = sorted(field_values.items(), key=lambda item: item[0].spec.rank)
        return cls(tuple((field, int(value)) for field, value in ordered))

    @property
    def field_values(self) -> Tuple[Tuple[TemporalField, int], ...]:
        return self._field_values

    # -------------------------------------------------------------------------
    # Доступ к полям
    # -------------------------------------------------------------------------

    @property
    def fields(self) -> Tuple[TemporalField, ...]:
        return tuple(field for field, _ in self.field_values)

    @property
    def finest_field(self) -> TemporalField:
        return self.field_values[0][0]

    @property
    def coarsest_field(self) -> TemporalField:
        return self.field_values[-1][0]

    @property
    def precision(self) -> TimeUnit:
        """Единица самого мелкого поля."""
        return self.finest_field.spec.base_unit

    def is_supported(self, field: TemporalField) -> bool:
        return field in self.fields

    def is_supported_unit(self, unit: TimeUnit) -> bool:
        return any(field.spec.base_unit == unit for field in self.fields)

    def get(self, field: TemporalField) -> int:
        """
        Значение поля.

        Raises:
            UnsupportedFieldError: Если поле не входит в набор
        """
        for candidate, value in self.field_values:
            if candidate == field:
                return value
        raise UnsupportedFieldError(getattr(field, "value", str(field)))

    def as_dict(self) -> Dict[TemporalField, int]:
        return dict(self.field_values)

    # -------------------------------------------------------------------------
    # Immutable модификации
    # -------------------------------------------------------------------------

    def with_field(self, field: TemporalField, value: int) -> "PeriodicTemporal":
        """
        Копия с заменённым значением одного поля.

        Raises:
            UnsupportedFieldError: Если поле не входит в набор
            FieldValueOutOfRangeError: Если значение вне домена поля
        """
        if not self.is_supported(field):
            raise UnsupportedFieldError(getattr(field, "value", str(field)))
        field.spec.check_valid_value(value)
        values = self.as_dict()
        values[field] = value
        return PeriodicTemporal.of(values)

    def plus(self, amount: int, unit: TimeUnit) -> "PeriodicTemporal":
        """
        Модульное сложение с переносом в более крупные поля.

        Поля мельче unit не изменяются. Отрицательный amount допустим.

        Args:
            amount: Количество единиц (со знаком)
            unit: Единица, совпадающая с base_unit одного из полей

        Returns:
            Новый PeriodicTemporal

        Raises:
            UnsupportedUnitError: Если ни одно поле не измеряется в unit
        """
        if not self.is_supported_unit(unit):
            raise UnsupportedUnitError(getattr(unit, "value", str(unit)))

        carry = amount
        applying = False
        result = []
        for field, value in self.field_values:
            spec = field.spec
            if spec.base_unit == unit:
                applying = True
            if applying:
                offset = value - spec.minimum + carry
                value = spec.minimum + offset % spec.size
                carry = offset // spec.size
            result.append((field, value))
        return PeriodicTemporal(tuple(result))

    def minus(self, amount: int, unit: TimeUnit) -> "PeriodicTemporal":
        return self.plus(-amount, unit)

    def increment(self) -> "PeriodicTemporal":
        """Следующая точка: +1 в самом мелком поле."""
        return self.plus(1, self.precision)

    # -------------------------------------------------------------------------
    # Расстояния
    # -------------------------------------------------------------------------

    def duration_until(self, instant: Any) -> timedelta:
        """
        Знаковая длительность от этой точки до instant.

        Сумма разностей по полям этой точки, взвешенных длительностью
        base_unit поля, плюс остаток instant мельче самого мелкого поля
        (в точности instant). Результат может быть отрицательным.
        """
        total = timedelta(0)
        for field, value in self.field_values:
            total += (read_field(instant, field) - value) * field.spec.base_unit.duration
        return total + remainder_below(instant, self.precision)

    def _project(self, instant: Any) -> "PeriodicTemporal":
        return PeriodicTemporal.of({field: read_field(instant, field) for field in self.fields})

    def until(self, instant: Any, unit: TimeUnit) -> int:
        """
        Знаковое расстояние до instant в единицах unit.

        Instant сначала проецируется на поля этой точки, поэтому точность
        результата не выше самого мелкого поля.
        """
        return duration_in_unit(self.duration_until(self._project(instant)), unit)

    def since(self, instant: Any, unit: TimeUnit) -> int:
        """
        Время от instant до следующего наступления этой точки.

        Всегда неотрицательно: если точка уже прошла в текущем цикле,
        добавляется длительность полного цикла (range_unit самого
        крупного поля). Точность — точность instant.

        Args:
            instant: datetime, date, time или PeriodicTemporal
            unit: Единица результата

        Returns:
            Количество единиц unit (>= 0)
        """
        duration = -self.duration_until(instant)
        if duration < timedelta(0):
            duration += self.coarsest_field.spec.range_unit.duration
        return duration_in_unit(duration, unit)

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def compare_to(self, instant: Any) -> int:
        """Знак (-1, 0, 1) сравнения этой точки с instant."""
        distance = -self.until(instant, self.precision)
        return (distance > 0) - (distance < 0)

    def __lt__(self, other: Any) -> bool:
        return self.compare_to(other) < 0

    def __le__(self, other: Any) -> bool:
        return self.compare_to(other) <= 0

    def __gt__(self, other: Any) -> bool:
        return self.compare_to(other) > 0

    def __ge__(self, other: Any) -> bool:
        return self.compare_to(other) >= 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PeriodicTemporal):
            return NotImplemented
        return self._field_values == other._field_values

    def __hash__(self) -> int:
        return hash(self._field_values)

    def __repr__(self) -> str:
        values = ", ".join(f"{field.value}={value}" for field, value in reversed(self.field_values))
        return f"PeriodicTemporal({values})"
