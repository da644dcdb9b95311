import logging
from typing import Iterable, List, Optional

from tqdm import tqdm

from clinparse.core.data_structures import Sentence, Token
from clinparse.core.errors import ClinParseError, ModelInvocationError
from clinparse.core.interfaces import BaseAnnotationIndex, BaseConstituencyModel
from clinparse.parsing.bracketed import show
from clinparse.config import load_config
from clinparse.parsing.linearizer import linearize, realign_heads
from clinparse.parsing.terminals import TerminalNormalizer
from clinparse.parsing.tree_builder import ParseTreeBuilder, TreeBuildResult

logger = logging.getLogger(__name__)


class ConstituencyParserEngine:
    """
    Главный класс-оркестратор.
    Для каждого предложения документа: терминалы -> строка для парсера -> разбор модели -> дерево.

    Предложения обрабатываются строго по порядку, дерево одного предложения
    полностью регистрируется до перехода к следующему.
    """

    def __init__(self, model: BaseConstituencyModel, show_progress: Optional[bool] = None):
        self.model = model
        if show_progress is None:
            show_progress = load_config()["pipeline"]["progress"]
        self.show_progress = show_progress

    def process(self, document: BaseAnnotationIndex) -> List[TreeBuildResult]:
        doc_id = document.document_id()
        logger.info(f"Started processing: {doc_id}")

        normalizer = TerminalNormalizer(document)
        builder = ParseTreeBuilder(document)

        results = []
        # Список фиксируется заранее: во время обхода в документ добавляются узлы
        for sentence in list(document.iterate(Sentence)):
            if sentence.end == sentence.begin:
                continue
            result = self.parse_sentence(document, sentence, normalizer, builder)
            if result is not None:
                results.append(result)

        logger.info(f"Done parsing: {doc_id}")
        return results

    def parse_sentence(
        self,
        document: BaseAnnotationIndex,
        sentence: Sentence,
        normalizer: Optional[TerminalNormalizer] = None,
        builder: Optional[ParseTreeBuilder] = None,
    ) -> Optional[TreeBuildResult]:
        normalizer = normalizer or TerminalNormalizer(document)
        builder = builder or ParseTreeBuilder(document)

        tokens = list(document.iterate(Token, sentence))
        terminals = normalizer.normalize(tokens)
        linearized = linearize(terminals, sentence.begin)

        if linearized.is_empty:
            logger.debug(f"No parseable content in sentence at {sentence.begin}, skipping")
            return None

        parse = self._invoke_model(linearized.text)
        if parse is None:
            return None

        result = builder.build(
            sentence.begin,
            sentence.end,
            terminals,
            linearized.offsets,
            realign_heads(parse, linearized),
            treebank_parse=show(parse, linearized.text),
        )
        if result.failures:
            logger.warning(
                f"{document.document_id()}: sentence at {sentence.begin} built with "
                f"{len(result.failures)} skipped subtree(s)"
            )
        return result

    def _invoke_model(self, text: str):
        try:
            return self.model.parse(text)
        except ClinParseError:
            raise
        except Exception as e:
            logger.error(f"Model failed on {text!r}: {e}")
            raise ModelInvocationError(f"Parser model failed: {e}") from e

    def process_batch(self, documents: Iterable[BaseAnnotationIndex]) -> List[List[TreeBuildResult]]:
        return [
            self.process(document)
            for document in tqdm(documents, desc="Parsing", disable=not self.show_progress)
        ]
