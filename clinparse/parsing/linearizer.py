# clinparse/parsing/linearizer.py
import logging
import re
from dataclasses import dataclass, field, replace
from typing import Dict, List, Sequence

from clinparse.core.data_structures import ParseNode, TerminalNode
from clinparse.core.errors import AlignmentError

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s")


class OffsetMap:
    """
    Позиция во входной строке парсера -> смещение относительно начала предложения.
    Живёт в пределах одного предложения и передаётся явно.
    """

    def __init__(self, entries: Dict[int, int] = None):
        self._entries: Dict[int, int] = dict(entries or {})

    def put(self, position: int, offset: int) -> None:
        self._entries[position] = offset

    def lookup(self, position: int) -> int:
        try:
            return self._entries[position]
        except KeyError:
            raise AlignmentError(position) from None

    def as_dict(self) -> Dict[int, int]:
        return dict(self._entries)

    def __contains__(self, position: int) -> bool:
        return position in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self):
        return f"OffsetMap({self.as_dict()})"


@dataclass
class LinearizedSentence:
    text: str
    offsets: OffsetMap = field(default_factory=OffsetMap)
    # Терминалы, попавшие в строку (пустые после очистки сюда не входят)
    emitted: List[TerminalNode] = field(default_factory=list, repr=False)

    @property
    def is_empty(self) -> bool:
        return not self.text


def linearize(terminals: Sequence[TerminalNode], sentence_begin: int) -> LinearizedSentence:
    """
    Склеивает словарные строки терминалов через одиночный пробел.

    Пробельные символы внутри терминала вырезаются; если после этого строка пустая,
    терминал пропускается целиком и не получает позиций в карте.
    Для каждого выведенного терминала записываются две позиции: начало и конец.
    """
    parts: List[str] = []
    offsets = OffsetMap()
    emitted = []
    length = 0

    for terminal in terminals:
        word = _WHITESPACE.sub("", terminal.node_type)
        if not word:
            logger.debug(f"Terminal {terminal.index} has no parser-visible text, skipping")
            continue

        if parts:
            length += 1
        start = length
        parts.append(word)
        length += len(word)

        offsets.put(start, terminal.begin - sentence_begin)
        offsets.put(length, terminal.end - sentence_begin)
        emitted.append(terminal)

    return LinearizedSentence(text=" ".join(parts), offsets=offsets, emitted=emitted)


def realign_heads(parse: ParseNode, linearized: LinearizedSentence) -> ParseNode:
    """
    Переводит head_index разбора из номера слова в строке парсера в индекс терминала.

    После пропуска пустых терминалов эти нумерации расходятся. Номер вне строки
    становится -1, и сборщик дерева сообщит о несоответствии для этого поддерева.
    Исходный разбор не меняется.
    """
    position = parse.head_index
    if 0 <= position < len(linearized.emitted):
        head = linearized.emitted[position].index
    else:
        logger.debug(f"Head position {position} outside of {len(linearized.emitted)} parser tokens")
        head = -1
    return replace(
        parse,
        head_index=head,
        children=[realign_heads(child, linearized) for child in parse.children],
    )
