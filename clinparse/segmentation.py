import logging
import re
import unicodedata
from typing import List

from razdel import sentenize as razdel_sentenize
from razdel import tokenize as razdel_tokenize

from clinparse.annotation_store import AnnotationDocument
from clinparse.core.data_structures import Sentence, Token, TokenKind

logger = logging.getLogger(__name__)

_NUMBER = re.compile(r"^\d+(?:[.,/:]\d+)*$")
_NEWLINE = re.compile(r"\r\n|\n|\r")


def classify(text: str) -> TokenKind:
    if _NUMBER.match(text):
        return TokenKind.NUMBER
    categories = {unicodedata.category(ch)[0] for ch in text}
    if categories == {"P"}:
        return TokenKind.PUNCTUATION
    if categories <= {"P", "S"}:
        return TokenKind.SYMBOL
    return TokenKind.WORD


class RazdelSegmenter:
    """
    Обертка над библиотекой Razdel для сегментации текста.
    Все оффсеты глобальные (относительно начала документа).
    Переводы строк между токенами становятся отдельными токенами NEWLINE.
    """

    def tokenize(self, text: str, offset: int = 0) -> List[Token]:
        tokens = []
        previous_end = 0

        for item in razdel_tokenize(text):
            # Переводы строк в промежутке перед токеном
            gap = text[previous_end:item.start]
            for match in _NEWLINE.finditer(gap):
                tokens.append(Token(
                    begin=offset + previous_end + match.start(),
                    end=offset + previous_end + match.end(),
                    text=match.group(),
                    kind=TokenKind.NEWLINE,
                ))

            tokens.append(Token(
                begin=offset + item.start,
                end=offset + item.stop,
                text=item.text,
                kind=classify(item.text),
            ))
            previous_end = item.stop

        return tokens

    def split_sentences(self, text: str) -> List[Sentence]:
        return [
            Sentence(begin=span.start, end=span.stop, text=span.text)
            for span in razdel_sentenize(text)
        ]

    def annotate(self, document: AnnotationDocument) -> List[Sentence]:
        """
        Разбиение на предложения с токенизацией внутри; всё регистрируется в документе.
        """
        text = document.text
        sentences = self.split_sentences(text)

        for sentence in sentences:
            document.register(sentence)
            for token in self.tokenize(sentence.text, sentence.begin):
                # Санити-чек: проверяем, что оффсеты указывают на тот же текст
                original_slice = text[token.begin:token.end]
                if original_slice != token.text:
                    logger.warning(
                        f"Offset mismatch! Token: {token.text}, Slice: {original_slice}, "
                        f"Global: {token.begin}-{token.end}"
                    )
                document.register(token)

        logger.info(f"Segmented {document.document_id()}: {len(sentences)} sentences")
        return sentences
