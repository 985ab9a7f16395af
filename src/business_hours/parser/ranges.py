"""
Ranges — Разбор диапазонов значений одной шкалы

Из подвыражения извлекаются все field-clause шкалы (`hr {9-12 14}`),
содержимое скобок делится по пробелам на токены, каждый токен
разбирается как `v` или `v1-v2`:
- `v`       → [v, v]
- `v1-v2`   → [v1, v2] при v1 <= v2
- `v1-v2`   → [v1, max] и [min, v2] при v1 > v2 (wraparound)

Не упомянутая шкала получает диапазон на весь домен (не ограничена),
а упомянутая с пустыми скобками (`hr {}`) считается ошибкой.
Значения по умолчанию применяются только к отсутствующим шкалам,
никогда к некорректным.
"""

from typing import Dict, List

from pydantic import BaseModel, Field

from business_hours.core.fields import FieldSpec, TemporalField
from business_hours.errors import MalformedFieldValueError, MalformedRangeError
from business_hours.parser.syntax import FIELD_SYNTAX, FieldSyntax


class ValueRange(BaseModel):
    """
    Замкнутый диапазон [start, end] внутри домена одной шкалы.

    start > end означает wraparound: [start, max] ∪ [min, end].
    """

    start: int = Field(..., ge=0, description="Первое значение")
    end: int = Field(..., ge=0, description="Последнее значение")

    model_config = {"frozen": True}

    @classmethod
    def full(cls, spec: FieldSpec) -> "ValueRange":
        """Диапазон на весь домен шкалы."""
        return cls(start=spec.minimum, end=spec.maximum)

    @property
    def is_wraparound(self) -> bool:
        return self.start > self.end

    @property
    def length(self) -> int:
        """Количество значений (только для не-wraparound диапазона)."""
        return self.end - self.start + 1

    def values(self) -> range:
        return range(self.start, self.end + 1)

    def split(self, spec: FieldSpec) -> List["ValueRange"]:
        """Разбиение wraparound-диапазона на примитивные."""
        if not self.is_wraparound:
            return [self]
        return [
            ValueRange(start=self.start, end=spec.maximum),
            ValueRange(start=spec.minimum, end=self.end),
        ]


def extract_tokens(sub_period: str, syntax: FieldSyntax) -> List[str]:
    """
    Все токены шкалы в подвыражении, в порядке появления.

    Одна шкала может встречаться несколько раз: `hr {9} hr {14}`.

    Raises:
        MalformedRangeError: Если скобки шкалы пусты (`hr {}`)
    """
    tokens: List[str] = []
    for match in syntax.pattern.finditer(sub_period):
        clause_tokens = match.group(1).split()
        if not clause_tokens:
            raise MalformedRangeError(match.group(0), syntax.field.value)
        tokens.extend(clause_tokens)
    return tokens


def parse_range(token: str, syntax: FieldSyntax) -> List[ValueRange]:
    """
    Разбор одного токена в один или два примитивных диапазона.

    Raises:
        MalformedRangeError: Больше двух границ или пустая граница
        MalformedFieldValueError: Значение не разбирается или вне домена
    """
    field = syntax.field
    spec = field.spec

    boundaries = token.split("-")
    if len(boundaries) > 2 or any(not boundary for boundary in boundaries):
        raise MalformedRangeError(token, field.value)

    values = []
    for boundary in boundaries:
        value = syntax.parse(boundary)
        if not spec.contains(value):
            raise MalformedFieldValueError(
                boundary,
                field.value,
                f"out of range {spec.minimum}-{spec.maximum}",
            )
        values.append(value)

    start, end = values[0], values[-1]
    return ValueRange(start=start, end=end).split(spec)


def accepted_ranges(sub_period: str) -> Dict[TemporalField, List[ValueRange]]:
    """
    Допустимые диапазоны для каждой шкалы каталога.

    Returns:
        Отображение field → непустой список диапазонов
        (весь домен, если шкала не упомянута)
    """
    ranges: Dict[TemporalField, List[ValueRange]] = {}
    for syntax in FIELD_SYNTAX:
        parsed: List[ValueRange] = []
        for token in extract_tokens(sub_period, syntax):
            parsed.extend(parse_range(token, syntax))
        ranges[syntax.field] = parsed or [ValueRange.full(syntax.field.spec)]
    return ranges
