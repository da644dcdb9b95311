#!/usr/bin/env python3
"""
Обёртка над парсером составляющих Stanza.
Модель получает уже токенизированную строку (токены через пробел) и возвращает
плоский разбор в координатах этой строки.
"""
import logging
from typing import Optional

import stanza
from stanza.pipeline.core import DownloadMethod

from clinparse.config import load_config
from clinparse.core.data_structures import ParseNode
from clinparse.core.errors import ModelInvocationError
from clinparse.core.interfaces import BaseConstituencyModel
from clinparse.parsing.bracketed import read_bracketed

logger = logging.getLogger(__name__)


class StanzaConstituencyParser(BaseConstituencyModel):
    """
    Не потокобезопасен: на каждый поток/документный воркер нужен свой экземпляр.
    """

    def __init__(self, config: Optional[dict] = None):
        self.config = dict(load_config()["stanza"], **(config or {}))
        self._load_model()

    def _load_model(self):
        cfg = self.config
        logger.info(f"Loading Stanza constituency pipeline ({cfg['lang']}/{cfg['package']})...")
        try:
            self.nlp = stanza.Pipeline(
                cfg["lang"],
                dir=cfg["model_dir"],
                package=cfg["package"],
                processors=cfg["processors"],
                tokenize_pretokenized=True,
                use_gpu=cfg["use_gpu"],
                download_method=DownloadMethod[cfg["download_method"].upper()],
                verbose=False,
            )
        except Exception as e:
            logger.error(f"Failed to load Stanza: {e}")
            raise ModelInvocationError(f"Stanza pipeline could not be loaded: {e}") from e
        logger.info("Stanza loaded successfully.")

    def parse(self, text: str) -> Optional[ParseNode]:
        if not text:
            return None

        tokens = text.split(" ")
        try:
            doc = self.nlp([tokens])
        except Exception as e:
            logger.error(f"Error during Stanza parsing: {e}")
            raise ModelInvocationError(f"Stanza failed on {text!r}") from e

        if len(doc.sentences) != 1 or doc.sentences[0].constituency is None:
            raise ModelInvocationError(
                f"Expected one constituency tree, got {len(doc.sentences)} sentences for {text!r}"
            )

        return read_bracketed(str(doc.sentences[0].constituency), text)
