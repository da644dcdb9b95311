from .bracketed import TOKEN_LABEL, read_bracketed, show
from .head_rules import find_head_child
from .labels import split_label
from .linearizer import LinearizedSentence, OffsetMap, linearize, realign_heads
from .terminals import BRACKET_ESCAPES, TerminalNormalizer, vocabulary_string
from .tree_builder import ParseTreeBuilder, TreeBuildResult
