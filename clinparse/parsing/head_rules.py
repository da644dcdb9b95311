# clinparse/parsing/head_rules.py
"""
Правила поиска вершины составляющей (таблица Коллинза, как в head_rules
английской модели OpenNLP).

"left"  - категории перебираются по приоритету, дети - слева направо;
"right" - то же, но дети справа налево.
Если ничего не подошло - крайний ребёнок со стороны поиска.
"""
from typing import Dict, List, Sequence, Tuple

from .labels import base_label

HEAD_RULES: Dict[str, Tuple[str, List[str]]] = {
    "ADJP": ("left", ["NNS", "QP", "NN", "$", "ADVP", "JJ", "VBN", "VBG", "ADJP", "JJR", "NP",
                      "JJS", "DT", "FW", "RBR", "RBS", "SBAR", "RB"]),
    "ADVP": ("right", ["RB", "RBR", "RBS", "FW", "ADVP", "TO", "CD", "JJR", "JJ", "IN", "NP",
                       "JJS", "NN"]),
    "CONJP": ("right", ["CC", "RB", "IN"]),
    "FRAG": ("right", []),
    "INTJ": ("left", []),
    "LST": ("right", ["LS", ":"]),
    "NAC": ("left", ["NN", "NNS", "NNP", "NNPS", "NP", "NAC", "EX", "$", "CD", "QP", "PRP",
                     "VBG", "JJ", "JJS", "JJR", "ADJP", "FW"]),
    "PP": ("right", ["IN", "TO", "VBG", "VBN", "RP", "FW"]),
    "PRN": ("left", []),
    "PRT": ("right", ["RP"]),
    "QP": ("left", ["$", "IN", "NNS", "NN", "JJ", "RB", "DT", "CD", "NCD", "QP", "JJR", "JJS"]),
    "RRC": ("right", ["VP", "NP", "ADVP", "ADJP", "PP"]),
    "S": ("left", ["TO", "IN", "VP", "S", "SBAR", "ADJP", "UCP", "NP"]),
    "SBAR": ("left", ["WHNP", "WHPP", "WHADVP", "WHADJP", "IN", "DT", "S", "SQ", "SINV", "SBAR",
                      "FRAG"]),
    "SBARQ": ("left", ["SQ", "S", "SINV", "SBARQ", "FRAG"]),
    "SINV": ("left", ["VBZ", "VBD", "VBP", "VB", "MD", "VP", "S", "SINV", "ADJP", "NP"]),
    "SQ": ("left", ["VBZ", "VBD", "VBP", "VB", "MD", "VP", "SQ"]),
    "UCP": ("right", []),
    "VP": ("left", ["TO", "VBD", "VBN", "MD", "VBZ", "VB", "VBG", "VBP", "VP", "ADJP", "NN",
                    "NNS", "NP"]),
    "WHADJP": ("left", ["CC", "WRB", "JJ", "ADJP"]),
    "WHADVP": ("right", ["CC", "WRB"]),
    "WHNP": ("left", ["WDT", "WP", "WP$", "WHADJP", "WHPP", "WHNP"]),
    "WHPP": ("right", ["IN", "TO", "FW"]),
    "X": ("right", []),
}

NP_NOMINALS = {"NN", "NNP", "NNPS", "NNS", "NX", "POS", "JJR"}


def _first_of(labels: Sequence[str], categories, reverse: bool):
    order = range(len(labels) - 1, -1, -1) if reverse else range(len(labels))
    for i in order:
        if labels[i] in categories:
            return i
    return None


def _np_head(labels: Sequence[str]) -> int:
    if labels[-1] == "POS":
        return len(labels) - 1
    for categories, reverse in (
        (NP_NOMINALS, True),
        ({"NP"}, False),
        ({"$", "ADJP", "PRN"}, True),
        ({"CD"}, True),
        ({"JJ", "JJS", "RB", "QP"}, True),
    ):
        found = _first_of(labels, categories, reverse)
        if found is not None:
            return found
    return len(labels) - 1


def find_head_child(label: str, child_labels: Sequence[str]) -> int:
    """Позиция головного ребёнка среди child_labels."""
    if not child_labels:
        raise ValueError(f"Constituent '{label}' has no children")

    labels = [base_label(c) for c in child_labels]
    category = base_label(label)

    if category in ("NP", "NX", "NML"):
        return _np_head(labels)

    direction, priorities = HEAD_RULES.get(category, ("left", []))
    reverse = direction == "right"
    for wanted in priorities:
        found = _first_of(labels, {wanted}, reverse)
        if found is not None:
            return found
    return len(labels) - 1 if reverse else 0
