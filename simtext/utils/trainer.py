"""Utilities for building the lexicon model and generating text from it."""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

from simtext.models.lexicon import LexiconModel, NoContinuationError
from simtext.data.dataset import LexemeTokenizer


logger = logging.getLogger(__name__)

DEFAULT_SENTINEL = '.'
DEFAULT_SOFT_LIMIT = 500
DEAD_END_POLICIES = ('raise', 'restart')


class EmptyModelError(RuntimeError):
    """Raised when generation is requested from a model with no lexemes."""


@dataclass
class GenerationResult:
    """Output of a generation run."""
    lexemes: List[str]
    text: str
    truncated: bool = False

    @property
    def count(self) -> int:
        return len(self.lexemes)


class Trainer:
    """Feeds tokenized corpus chunks into a LexiconModel."""

    def __init__(
        self,
        model: LexiconModel,
        tokenizer: LexemeTokenizer,
        sentinel: str = DEFAULT_SENTINEL,
        log_every: int = 10000,
    ):
        """
        Args:
            model: Model receiving the adjacency pairs
            tokenizer: Tokenizer used to split chunks into lexemes
            sentinel: Synthetic predecessor of the first corpus lexeme
            log_every: Number of chunks between progress messages
        """
        self.model = model
        self.tokenizer = tokenizer
        self.sentinel = sentinel
        self.log_every = log_every
        # Last lexeme seen, carried across chunk boundaries and train() calls.
        self._previous = sentinel

    def train(self, chunks: Iterable[str]) -> int:
        """Ingest whitespace-delimited chunks. Returns the lexeme count."""
        total = 0
        for i, chunk in enumerate(chunks, 1):
            lexemes = self.tokenizer.encode(chunk)
            logger.debug(f"{chunk} @< {' / '.join(lexemes)} >@")

            for lexeme in lexemes:
                self._previous = self.model.lexeme(
                    self.model.add(self._previous, lexeme)
                )
            total += len(lexemes)

            if i % self.log_every == 0:
                logger.info(
                    f"Chunk {i}: {total} lexemes, "
                    f"{self.model.unique_lexeme_count()} unique"
                )
        return total


class Generator:
    """Random walk over a LexiconModel from sentinel to sentinel."""

    def __init__(
        self,
        model: LexiconModel,
        tokenizer: LexemeTokenizer,
        sentinel: str = DEFAULT_SENTINEL,
        soft_limit: int = DEFAULT_SOFT_LIMIT,
        max_lexemes: Optional[int] = None,
        on_dead_end: str = 'raise',
    ):
        """
        Args:
            model: Model built by a Trainer
            tokenizer: Tokenizer used to render the output
            sentinel: Lexeme that starts the walk and may end it
            soft_limit: Walk steps required before the sentinel may end it
            max_lexemes: Optional hard cap on emitted lexemes
            on_dead_end: 'raise' to propagate NoContinuationError,
                'restart' to continue as if the sentinel was sampled
        """
        if soft_limit < 0:
            raise ValueError(f"soft_limit must be >= 0, got {soft_limit}")
        if max_lexemes is not None and max_lexemes < 1:
            raise ValueError(f"max_lexemes must be >= 1, got {max_lexemes}")
        if on_dead_end not in DEAD_END_POLICIES:
            raise ValueError(
                f"on_dead_end must be one of {DEAD_END_POLICIES}, "
                f"got {on_dead_end!r}"
            )
        self.model = model
        self.tokenizer = tokenizer
        self.sentinel = sentinel
        self.soft_limit = soft_limit
        self.max_lexemes = max_lexemes
        self.on_dead_end = on_dead_end

    def _next(self, current: str) -> str:
        try:
            return self.model.next_lex(current)
        except NoContinuationError as e:
            if self.on_dead_end == 'raise':
                raise
            logger.warning(f"{e}, restarting from {self.sentinel!r}")
            return self.sentinel

    def iter_lexemes(self) -> Iterator[str]:
        """Yield generated lexemes, ending with the sentinel.

        The walk only stops once more than ``soft_limit`` steps were taken
        and the sentinel comes up again, so the output may run well past
        the limit. ``max_lexemes`` is the only upper bound. The iterator's
        return value is True when the walk was cut short by that bound.
        """
        if not len(self.model):
            raise EmptyModelError("Lexicon model is empty")

        current = self._next(self.sentinel)
        steps = 0
        while True:
            yield current
            steps += 1
            if self.max_lexemes is not None and steps >= self.max_lexemes:
                logger.warning(
                    f"Stopped at hard cap of {self.max_lexemes} lexemes "
                    f"before reaching {self.sentinel!r}"
                )
                return True

            current = self._next(current)
            if steps > self.soft_limit and current == self.sentinel:
                yield current
                return False

    def generate(self) -> GenerationResult:
        """Run one full walk and render it as text."""
        lexemes: List[str] = []
        walk = self.iter_lexemes()
        while True:
            try:
                lexemes.append(next(walk))
            except StopIteration as stop:
                truncated = stop.value
                break
        return GenerationResult(
            lexemes=lexemes,
            text=self.tokenizer.decode(lexemes),
            truncated=truncated,
        )
