# clinparse/core/interfaces.py
from abc import ABC, abstractmethod
from typing import Iterator, Optional, Type, TypeVar

from .data_structures import ParseNode

A = TypeVar("A")


class BaseAnnotationIndex(ABC):
    """Общий индекс аннотаций документа (аналог CAS внешнего пайплайна)."""

    @abstractmethod
    def iterate(self, annotation_type: Type[A], container=None) -> Iterator[A]:
        """
        Аннотации типа annotation_type в порядке документа.
        Если задан container - только лежащие внутри его [begin, end).
        """
        pass

    @abstractmethod
    def register(self, annotation) -> None:
        pass

    @abstractmethod
    def document_id(self) -> str:
        pass


class BaseConstituencyModel(ABC):
    @abstractmethod
    def parse(self, text: str) -> Optional[ParseNode]:
        """
        Принимает строку токенов, разделённых одиночными пробелами.
        Возвращает корень плоского разбора в координатах этой строки.
        """
        pass
