# clinparse/parsing/tree_builder.py
import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from clinparse.core.data_structures import (
    InternalNode,
    ParseNode,
    RootNode,
    TerminalNode,
    TreebankNode,
)
from clinparse.core.errors import AlignmentError, AlignmentFailure
from clinparse.core.interfaces import BaseAnnotationIndex
from .labels import split_label
from .linearizer import OffsetMap

logger = logging.getLogger(__name__)


@dataclass
class TreeBuildResult:
    root: RootNode
    failures: List[AlignmentFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class ParseTreeBuilder:
    """
    Собирает дерево TreebankNode из плоского разбора модели.

    Карта смещений и терминалы передаются явно в каждый вызов: у билдера
    нет состояния, которое могло бы протечь в следующее предложение.
    Узел регистрируется в индексе после того, как заполнены все его поля.
    """

    def __init__(self, index: BaseAnnotationIndex):
        self.index = index

    def build(
        self,
        begin: int,
        end: int,
        terminals: Sequence[TerminalNode],
        offsets: OffsetMap,
        parse: ParseNode,
        treebank_parse: str = "",
    ) -> TreeBuildResult:
        # Спан корня - всегда спан предложения, что бы ни случилось с детьми
        root = RootNode(
            begin=begin,
            end=end,
            terminals=list(terminals),
            treebank_parse=treebank_parse,
        )
        failures: List[AlignmentFailure] = []
        self._populate(root, parse, root, offsets, failures)
        return TreeBuildResult(root=root, failures=failures)

    def _populate(
        self,
        node: TreebankNode,
        parse: ParseNode,
        root: RootNode,
        offsets: OffsetMap,
        failures: List[AlignmentFailure],
    ) -> None:
        node_type, tags = split_label(parse.label)
        node.node_type = node_type
        node.node_value = node_type
        node.node_tags = tags
        node.head_index = parse.head_index

        children: List[TreebankNode] = []
        for position, subtree in enumerate(parse.children):
            try:
                if subtree.children:
                    child = InternalNode(
                        begin=root.begin + offsets.lookup(subtree.start),
                        end=root.begin + offsets.lookup(subtree.end),
                        parent=node,
                    )
                    self._populate(child, subtree, root, offsets, failures)
                else:
                    child = self._terminal_at(root, subtree.head_index)
                    child.parent = node
            except AlignmentError as e:
                failure = AlignmentFailure(
                    parent=node,
                    child_position=position,
                    parse=subtree,
                    position=e.position,
                    reason=str(e),
                )
                logger.warning(
                    f"Skipping subtree '{subtree.label}' [{subtree.start}, {subtree.end}) "
                    f"under '{node.node_type}' at {node.begin}: {e}"
                )
                failures.append(failure)
                continue
            children.append(child)

        node.children = children
        self.index.register(node)

    @staticmethod
    def _terminal_at(root: RootNode, index: int) -> TerminalNode:
        if not 0 <= index < len(root.terminals):
            raise AlignmentError(
                index, f"Leaf head index {index} outside of {len(root.terminals)} terminals"
            )
        return root.terminals[index]
