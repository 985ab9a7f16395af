"""Конфигурация парсера спецификаций business hours."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ParserConfig:
    """Конфигурация разбора текста спецификации.

    - sub_period_separator: разделитель подвыражений (объединение, "или")
    - strict: запрет текста вне распознанных field-clause
      (по умолчанию такой текст игнорируется)
    """
    sub_period_separator: str = ","
    strict: bool = False

    def __post_init__(self) -> None:
        if not self.sub_period_separator:
            raise ValueError("sub_period_separator must not be empty")
