"""Corpus tokenization utilities."""

import re
import string
from typing import Iterable, Iterator, List


# Priority order matters: joined word pairs before plain words, and the
# ellipsis before its single-dot fallback.
LEXEME_PATTERN = re.compile(
    r"\w+[-']\w+"
    r"|\w+"
    r"|\.{3}"
    r"|[" + re.escape(string.punctuation) + r"]"
)

PUNCTUATION_PATTERN = re.compile(
    r"(?:\.{3}|[" + re.escape(string.punctuation) + r"])"
)


def iter_chunks(lines: Iterable[str]) -> Iterator[str]:
    """Yield the whitespace-delimited chunks of each line, in order."""
    for line in lines:
        yield from line.split()


class LexemeTokenizer:
    """Regex tokenizer splitting chunks into words, ellipses and punctuation."""

    def __init__(self, pattern: re.Pattern = LEXEME_PATTERN):
        """
        Args:
            pattern: Compiled pattern whose matches are the lexemes of a chunk
        """
        self.pattern = pattern

    def encode(self, chunk: str) -> List[str]:
        """Split a chunk into lexemes. Unmatched characters are dropped."""
        return self.pattern.findall(chunk)

    @staticmethod
    def is_punctuation(lexeme: str) -> bool:
        """Whether the lexeme is an ellipsis or a single punctuation mark."""
        return PUNCTUATION_PATTERN.fullmatch(lexeme) is not None

    def decode(self, lexemes: Iterable[str]) -> str:
        """Join lexemes back into text.

        Lexemes are separated by a single space, except that punctuation
        attaches to whatever precedes it.
        """
        parts: List[str] = []
        for lexeme in lexemes:
            if parts and not self.is_punctuation(lexeme):
                parts.append(' ')
            parts.append(lexeme)
        return ''.join(parts)
