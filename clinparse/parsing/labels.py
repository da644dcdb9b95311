# clinparse/parsing/labels.py
from typing import List, Tuple


def split_label(label: str) -> Tuple[str, List[str]]:
    """
    "NP-SBJ-1" -> ("NP", ["SBJ", "1"]).

    Метки, которые сами являются символами трибанка (-LRB-, -NONE-),
    не разбиваются: иначе тип узла получился бы пустым.
    """
    if len(label) > 2 and label.startswith("-") and label.endswith("-"):
        return label, []
    parts = label.split("-")
    return parts[0], parts[1:]


def base_label(label: str) -> str:
    return split_label(label)[0]
