from clinparse.core.interfaces import BaseConstituencyModel


def load_model(name: str = "stanza", config: dict = None) -> BaseConstituencyModel:
    """
    Ленивая загрузка модели: тяжёлые зависимости импортируются только здесь.
    """
    if name == "stanza":
        from .stanza_parser import StanzaConstituencyParser
        return StanzaConstituencyParser(config)
    raise ValueError(f"Unknown model: {name}")
