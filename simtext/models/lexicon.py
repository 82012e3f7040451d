"""First-order lexeme adjacency model."""

import logging
from typing import Dict, List, Optional

import torch


logger = logging.getLogger(__name__)


class NoContinuationError(LookupError):
    """Raised when a lexeme has no recorded successor."""

    def __init__(self, lexeme: str):
        super().__init__(f"Can't find next lexeme for {lexeme!r}")
        self.lexeme = lexeme


class LexiconModel:
    """Maps each lexeme to the successors observed right after it.

    Every distinct lexeme is stored once in an interning table and is
    referred to by its integer id everywhere else. Successor lists keep
    repeats, so a uniform draw over a list is a frequency-weighted draw
    over the distinct successors.
    """

    def __init__(self, generator: Optional[torch.Generator] = None):
        """
        Args:
            generator: Random source used for sampling. A freshly seeded
                one is created when omitted.
        """
        if generator is None:
            generator = torch.Generator()
            generator.seed()
        self.generator = generator
        self.stoi: Dict[str, int] = {}
        self.itos: List[str] = []
        self._successors: List[List[int]] = []

    def __len__(self) -> int:
        return len(self.itos)

    def __contains__(self, lexeme: str) -> bool:
        return lexeme in self.stoi

    def unique_lexeme_count(self) -> int:
        """Number of distinct lexemes stored."""
        return len(self.itos)

    def intern(self, lexeme: str) -> int:
        """Return the id of a lexeme, registering it if it is new."""
        idx = self.stoi.get(lexeme)
        if idx is None:
            idx = len(self.itos)
            self.itos.append(lexeme)
            self.stoi[lexeme] = idx
            self._successors.append([])
        return idx

    def lexeme(self, idx: int) -> str:
        """Return the stored string for an id."""
        return self.itos[idx]

    def add(self, current: str, following: str) -> int:
        """Record that ``following`` was seen right after ``current``.

        Both lexemes become keys. Returns the id of ``following`` so the
        caller can carry the stored copy forward as the next ``current``.
        """
        following_id = self.intern(following)
        self._successors[self.intern(current)].append(following_id)
        return following_id

    def successors(self, lexeme: str) -> List[str]:
        """Successors of a lexeme in observation order, repeats included."""
        idx = self.stoi.get(lexeme)
        if idx is None:
            return []
        return [self.itos[i] for i in self._successors[idx]]

    def next_id(self, idx: int) -> int:
        """Sample a successor id of the lexeme with the given id."""
        choices = self._successors[idx]
        if not choices:
            raise NoContinuationError(self.itos[idx])
        pick = torch.randint(len(choices), (1,), generator=self.generator)
        return choices[int(pick.item())]

    def next_lex(self, current: str) -> str:
        """Sample the lexeme following ``current``."""
        idx = self.stoi.get(current)
        if idx is None:
            raise NoContinuationError(current)
        return self.itos[self.next_id(idx)]

    def dump(self) -> None:
        """Log the whole adjacency model at debug level."""
        if not logger.isEnabledFor(logging.DEBUG):
            return
        logger.debug("---- Sequential pairs distribution model dump ----")
        for lexeme, choices in zip(self.itos, self._successors):
            following = ' '.join(self.itos[i] for i in choices)
            logger.debug(f"{lexeme}:( {following} )")
