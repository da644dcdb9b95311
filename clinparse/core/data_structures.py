# clinparse/core/data_structures.py
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, model_validator


class TokenKind(str, Enum):
    WORD = "word"
    NUMBER = "number"
    PUNCTUATION = "punctuation"
    SYMBOL = "symbol"
    NEWLINE = "newline"


class Token(BaseModel):
    """
    Токен от внешней токенизации.
    Координаты всегда документные: [begin, end).
    """
    model_config = ConfigDict(frozen=True)

    begin: int
    end: int
    text: str
    kind: TokenKind = TokenKind.WORD

    @model_validator(mode='after')
    def check_coordinates(self):
        if self.end <= self.begin:
            raise ValueError(f"Invalid span for token '{self.text}': {self.begin}-{self.end}")
        return self

    @property
    def span(self):
        return self.begin, self.end

    @property
    def is_punctuation(self) -> bool:
        return self.kind == TokenKind.PUNCTUATION

    @property
    def is_newline(self) -> bool:
        return self.kind == TokenKind.NEWLINE


class Sentence(BaseModel):
    model_config = ConfigDict(frozen=True)

    begin: int
    end: int
    text: str = ""

    @model_validator(mode='after')
    def check_coordinates(self):
        if self.end < self.begin:
            raise ValueError(f"Invalid sentence span: {self.begin}-{self.end}")
        return self

    @property
    def span(self):
        return self.begin, self.end


# ========== УЗЛЫ ДЕРЕВА СОСТАВЛЯЮЩИХ ==========
# Узлы сравниваются по идентичности (eq=False): один и тот же терминал
# должен оказаться и в root.terminals, и в children родителя.

@dataclass(eq=False, kw_only=True)
class TreebankNode:
    begin: int
    end: int
    node_type: str = ""
    node_value: str = ""
    node_tags: List[str] = field(default_factory=list)
    head_index: int = -1
    children: List["TreebankNode"] = field(default_factory=list, repr=False)

    @property
    def leaf(self) -> bool:
        return not self.children

    @property
    def is_root(self) -> bool:
        return False

    @property
    def span(self):
        return self.begin, self.end


@dataclass(eq=False, kw_only=True)
class TerminalNode(TreebankNode):
    """Лист дерева: обёртка над одним токеном предложения."""
    index: int
    token_index: int
    token: Token = field(repr=False)
    # Родитель появляется только при сборке дерева
    parent: Optional[TreebankNode] = field(default=None, repr=False)

    @property
    def leaf(self) -> bool:
        return True


@dataclass(eq=False, kw_only=True)
class InternalNode(TreebankNode):
    parent: TreebankNode = field(repr=False)


@dataclass(eq=False, kw_only=True)
class RootNode(TreebankNode):
    """
    Корень дерева предложения.
    Родителя нет по построению; хранит все терминалы и сырую скобочную запись разбора.
    """
    terminals: List[TerminalNode] = field(default_factory=list, repr=False)
    treebank_parse: str = ""

    @property
    def is_root(self) -> bool:
        return True


@dataclass
class ParseNode:
    """
    Узел плоского разбора, который возвращает модель.
    start/end - позиции во входной строке парсера, head_index - номер головного токена в этой строке.
    """
    label: str
    start: int
    end: int
    head_index: int
    children: List["ParseNode"] = field(default_factory=list)

    @property
    def is_terminal(self) -> bool:
        return not self.children


def iter_nodes(node: TreebankNode):
    """Обход дерева в прямом порядке (pre-order)."""
    yield node
    for child in node.children:
        yield from iter_nodes(child)
