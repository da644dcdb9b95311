# clinparse/core/errors.py
from dataclasses import dataclass, field
from typing import Optional

from .data_structures import ParseNode, TreebankNode


class ClinParseError(Exception):
    pass


class AlignmentError(ClinParseError, LookupError):
    """Позиция строки парсера отсутствует в карте смещений."""

    def __init__(self, position: int, message: Optional[str] = None):
        self.position = position
        super().__init__(message or f"No offset recorded for parser position {position}")


class ModelInvocationError(ClinParseError):
    """Модель упала или вернула некорректный разбор. Не восстанавливается внутри ядра."""
    pass


@dataclass
class AlignmentFailure:
    """
    Запись о поддереве, которое не удалось построить.
    parent - узел, у которого пропал ребёнок; child_position - позиция ребёнка в плоском разборе.
    """
    parent: TreebankNode = field(repr=False)
    child_position: int
    parse: ParseNode = field(repr=False)
    position: int
    reason: str

    @property
    def label(self) -> str:
        return self.parse.label
