"""Dictionary membership checks for round words."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Protocol

WORD_LENGTH = 5
MAX_WORD_OPTIONS = 10
DEFAULT_WORDS_FILE = Path(__file__).with_name("words.txt")

logger = logging.getLogger(__name__)


class WordDictionary(Protocol):
    def contains(self, word: str) -> bool:
        """Return True when ``word`` is an accepted round word."""


def is_well_formed(word: str) -> bool:
    return len(word) == WORD_LENGTH and word.isascii() and word.isalpha()


def is_valid_word(word: str, dictionary: WordDictionary) -> bool:
    return is_well_formed(word) and dictionary.contains(word.upper())


@dataclass(frozen=True)
class WordList:
    words: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_words(cls, words: Iterable[str]) -> WordList:
        cleaned = (word.strip().upper() for word in words)
        return cls(words=frozenset(word for word in cleaned if is_well_formed(word)))

    @classmethod
    def from_file(cls, path: Path) -> WordList:
        word_list = cls.from_words(path.read_text(encoding="utf-8").splitlines())
        logger.info("Loaded %d words from %s", len(word_list.words), path)
        return word_list

    @classmethod
    def load_default(cls) -> WordList:
        return cls.from_file(DEFAULT_WORDS_FILE)

    def contains(self, word: str) -> bool:
        return word.strip().upper() in self.words

    def sample(self, count: int, rng: random.Random | None = None) -> list[str]:
        """Pick distinct words to offer a word-setter."""
        if not self.words:
            return []
        count = max(1, min(count, MAX_WORD_OPTIONS, len(self.words)))
        chooser = rng if rng is not None else random.Random()
        return chooser.sample(sorted(self.words), count)
