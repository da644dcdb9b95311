# clinparse/annotation_store.py
import logging
from typing import Iterator, List, Type, TypeVar

from clinparse.core.interfaces import BaseAnnotationIndex

logger = logging.getLogger(__name__)

A = TypeVar("A")


class AnnotationDocument(BaseAnnotationIndex):
    """
    Простое хранилище аннотаций в памяти.
    Только добавление: аннотации не удаляются и не переупорядочиваются.
    Порядок выдачи - как в индексе UIMA: по begin, затем более длинные раньше.
    """

    def __init__(self, text: str, doc_id: str = "unknown"):
        self.text = text
        self._doc_id = doc_id
        self._annotations: List = []

    def register(self, annotation) -> None:
        self._annotations.append(annotation)

    def iterate(self, annotation_type: Type[A], container=None) -> Iterator[A]:
        selected = [a for a in self._annotations if isinstance(a, annotation_type)]
        if container is not None:
            selected = [
                a for a in selected
                if a.begin >= container.begin and a.end <= container.end
            ]
        # sorted() стабилен: при равных спанах сохраняется порядок регистрации
        return iter(sorted(selected, key=lambda a: (a.begin, -a.end)))

    def document_id(self) -> str:
        return self._doc_id

    def covered_text(self, annotation) -> str:
        return self.text[annotation.begin:annotation.end]

    def count(self, annotation_type: Type[A]) -> int:
        return sum(1 for a in self._annotations if isinstance(a, annotation_type))

    def __len__(self):
        return len(self._annotations)
