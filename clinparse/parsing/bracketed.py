# clinparse/parsing/bracketed.py
import logging
from typing import List, Tuple

from nltk.tree import Tree

from clinparse.core.data_structures import ParseNode
from clinparse.core.errors import ModelInvocationError
from .head_rules import find_head_child

logger = logging.getLogger(__name__)

# Метка узла-токена, как у OpenNLP (AbstractBottomUpParser.TOK_NODE)
TOKEN_LABEL = "TK"


def _word_spans(sentence: str) -> List[Tuple[int, int]]:
    spans = []
    position = 0
    for word in sentence.split(" ") if sentence else []:
        spans.append((position, position + len(word)))
        position += len(word) + 1
    return spans


def read_bracketed(parse_string: str, sentence: str) -> ParseNode:
    """
    Скобочная запись трибанка -> плоский разбор с координатами в строке sentence.

    sentence - та самая строка, которую получил парсер (токены через один пробел).
    Листья становятся узлами TK с head_index = номер токена; вершины
    внутренних узлов вычисляются по правилам Коллинза.
    """
    try:
        tree = Tree.fromstring(parse_string)
    except ValueError as e:
        raise ModelInvocationError(f"Unreadable parse: {parse_string!r}") from e

    spans = _word_spans(sentence)
    leaves = tree.leaves()
    if len(leaves) != len(spans):
        raise ModelInvocationError(
            f"Parse has {len(leaves)} leaves but input has {len(spans)} tokens: {parse_string!r}"
        )

    words = sentence.split(" ") if sentence else []
    for i, (leaf, word) in enumerate(zip(leaves, words)):
        if leaf != word:
            logger.debug(f"Leaf {i} '{leaf}' differs from input token '{word}'")

    counter = iter(range(len(spans)))
    return _convert(tree, spans, counter)


def _convert(tree, spans, counter) -> ParseNode:
    if isinstance(tree, str):
        i = next(counter)
        start, end = spans[i]
        return ParseNode(label=TOKEN_LABEL, start=start, end=end, head_index=i)

    children = [_convert(child, spans, counter) for child in tree]
    if not children:
        raise ModelInvocationError(f"Empty constituent '{tree.label()}' in parse")

    head = find_head_child(tree.label(), [c.label for c in children])
    return ParseNode(
        label=tree.label(),
        start=children[0].start,
        end=children[-1].end,
        head_index=children[head].head_index,
        children=children,
    )


def show(parse: ParseNode, sentence: str) -> str:
    """Обратное преобразование: плоский разбор -> скобочная запись."""
    if parse.is_terminal:
        word = sentence[parse.start:parse.end]
        return word if parse.label == TOKEN_LABEL else f"({parse.label} {word})"
    inner = " ".join(show(child, sentence) for child in parse.children)
    return f"({parse.label} {inner})"
