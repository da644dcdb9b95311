# clinparse/parsing/terminals.py
import logging
from typing import Iterable, List

from clinparse.core.data_structures import TerminalNode, Token
from clinparse.core.interfaces import BaseAnnotationIndex

logger = logging.getLogger(__name__)

# Скобки в словаре парсера записываются символами трибанка
BRACKET_ESCAPES = {
    "(": "-LRB-",
    ")": "-RRB-",
    "[": "-LRB-",
    "]": "-RRB-",
    "{": "-LCB-",
    "}": "-RCB-",
}


def vocabulary_string(token: Token) -> str:
    if token.is_punctuation:
        return BRACKET_ESCAPES.get(token.text, token.text)
    return token.text


class TerminalNormalizer:
    """
    Превращает токены предложения в упорядоченные терминальные узлы.
    Каждый терминал сразу регистрируется в индексе аннотаций.
    """

    def __init__(self, index: BaseAnnotationIndex):
        self.index = index

    def normalize(self, tokens: Iterable[Token]) -> List[TerminalNode]:
        words = [t for t in tokens if not t.is_newline]

        terminals = []
        for i, token in enumerate(words):
            node_type = vocabulary_string(token)
            terminal = TerminalNode(
                begin=token.begin,
                end=token.end,
                node_type=node_type,
                node_value=node_type,
                node_tags=[],
                index=i,
                token_index=i,
                token=token,
            )
            self.index.register(terminal)
            terminals.append(terminal)

        return terminals
