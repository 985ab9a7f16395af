"""
Errors — Иерархия исключений business_hours

Все исключения наследуются от BusinessHoursError и несут словарь details
с контекстом (токен, поле, значение) для точного сообщения об ошибке.

Иерархия::

    BusinessHoursError
    ├── SpecificationError (ValueError)    - ошибки разбора текста спецификации
    │   ├── MalformedRangeError            - токен не является v или v-v
    │   ├── MalformedFieldValueError       - значение поля не разбирается
    │   │   ├── MalformedHourError
    │   │   └── MalformedWeekdayError
    │   ├── MalformedSpecificationError    - лишний текст (strict mode)
    │   └── MissingSpecificationError      - спецификация отсутствует (None)
    └── TemporalError                      - нарушения инвариантов PeriodicTemporal
        ├── NonContiguousFieldSetError
        ├── VariableRangeFieldError
        ├── FieldValueOutOfRangeError
        ├── UnsupportedFieldError
        └── UnsupportedUnitError

Ошибки разбора фатальны для одного вызова parse: частичного результата нет.
"""

from typing import Any, Dict, Optional


class BusinessHoursError(Exception):
    """Базовое исключение для всех ошибок business_hours."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


# =============================================================================
# ОШИБКИ РАЗБОРА
# =============================================================================


class SpecificationError(BusinessHoursError, ValueError):
    """Текст спецификации не может быть разобран."""


class MalformedRangeError(SpecificationError):
    """Токен не разбирается как `v` или `v1-v2`."""

    def __init__(self, token: str, field: Optional[str] = None) -> None:
        super().__init__(
            f"Invalid range: {token!r}",
            details={"token": token, "field": field},
        )
        self.token = token
        self.field = field


class MalformedFieldValueError(SpecificationError):
    """Значение поля не проходит правило разбора или вне домена."""

    def __init__(self, value: str, field: str, reason: str = "invalid value") -> None:
        super().__init__(
            f"Invalid {field} value {value!r}: {reason}",
            details={"value": value, "field": field, "reason": reason},
        )
        self.value = value
        self.field = field


class MalformedHourError(MalformedFieldValueError):
    """Час не разбирается ни в 24-часовом, ни в 12-часовом формате."""


class MalformedWeekdayError(MalformedFieldValueError):
    """День недели не является ни числом, ни известным сокращением."""


class MalformedSpecificationError(SpecificationError):
    """Подвыражение содержит текст вне распознанных field-clause."""

    def __init__(self, sub_period: str, leftover: str) -> None:
        super().__init__(
            f"Unrecognized text {leftover!r} in {sub_period!r}",
            details={"sub_period": sub_period, "leftover": leftover},
        )
        self.leftover = leftover


class MissingSpecificationError(SpecificationError, TypeError):
    """Текст спецификации отсутствует."""

    def __init__(self, received: Any = None) -> None:
        super().__init__(
            f"Business hours specification must be a string, got {type(received).__name__}",
            details={"received_type": type(received).__name__},
        )


# =============================================================================
# ОШИБКИ TEMPORAL
# =============================================================================


class TemporalError(BusinessHoursError):
    """Нарушение инвариантов PeriodicTemporal (ошибка программиста, не ввода)."""


class NonContiguousFieldSetError(TemporalError):
    """Набор полей имеет разрыв по rank."""


class VariableRangeFieldError(TemporalError):
    """Поле с переменным доменом (например, day-of-month)."""


class FieldValueOutOfRangeError(TemporalError, ValueError):
    """Значение вне домена поля."""

    def __init__(self, field: str, value: int, minimum: int, maximum: int) -> None:
        super().__init__(
            f"Invalid value for {field} (valid values {minimum} - {maximum}): {value}",
            details={"field": field, "value": value, "minimum": minimum, "maximum": maximum},
        )
        self.field = field
        self.value = value


class UnsupportedFieldError(TemporalError):
    """Поле не поддерживается данным instant."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Unsupported field: {field}", details={"field": field})
        self.field = field


class UnsupportedUnitError(TemporalError):
    """Единица не соответствует ни одному полю данного instant."""

    def __init__(self, unit: str) -> None:
        super().__init__(f"Unsupported unit: {unit}", details={"unit": unit})
        self.unit = unit
