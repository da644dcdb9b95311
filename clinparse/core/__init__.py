from .data_structures import (
    InternalNode,
    ParseNode,
    RootNode,
    Sentence,
    TerminalNode,
    Token,
    TokenKind,
    TreebankNode,
    iter_nodes,
)
from .errors import AlignmentError, AlignmentFailure, ClinParseError, ModelInvocationError
from .interfaces import BaseAnnotationIndex, BaseConstituencyModel
