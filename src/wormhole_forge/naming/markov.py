"""Character-level Markov chains trained on a word list.

Each prefix of ``prefix_length`` characters maps to a probability
distribution over the next character, or to ``END_OF_WORD``. Chains are
built and normalised once, then only read.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import BinaryIO

from wormhole_forge.errors import CorpusEncodingError, NameGenerationError

END_OF_WORD = ""

logger = logging.getLogger("wormhole_forge.naming.markov")


def _decode_line(line: bytes | str, line_number: int) -> str:
    if isinstance(line, bytes):
        try:
            return line.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise CorpusEncodingError(line_number, line) from exc
    try:
        line.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise CorpusEncodingError(line_number, line) from exc
    return line


class MarkovChains:
    """Letter-based Markov chains used to synthesise place names."""

    def __init__(self, prefix_length: int) -> None:
        if prefix_length < 1:
            raise ValueError(f"prefix_length must be at least 1, got {prefix_length}")
        self._prefix_length = prefix_length
        self._starts: list[str] = []
        self._table: dict[str, dict[str, float]] = {}

    @property
    def prefix_length(self) -> int:
        return self._prefix_length

    @property
    def starts(self) -> tuple[str, ...]:
        """Start prefixes, one per analysed word, in corpus order."""
        return tuple(self._starts)

    @property
    def table(self) -> Mapping[str, Mapping[str, float]]:
        return MappingProxyType({prefix: MappingProxyType(d) for prefix, d in self._table.items()})

    @classmethod
    def from_words(cls, words: Iterable[bytes | str], prefix_length: int) -> MarkovChains:
        """Analyse ``words`` and return normalised chains.

        Raises ``CorpusEncodingError`` on the first line that is not valid UTF-8.
        """
        chains = cls(prefix_length)
        count = 0
        for line_number, raw in enumerate(words, start=1):
            word = _decode_line(raw, line_number).strip()
            count += 1
            chains._analyze(word)
        chains._normalize()
        logger.debug(
            "corpus_loaded",
            extra={"words": count, "starts": len(chains._starts), "prefixes": len(chains._table)},
        )
        return chains

    @classmethod
    def load(cls, stream: BinaryIO | Iterable[bytes | str], prefix_length: int) -> MarkovChains:
        """Load one word per line from a binary stream or an iterable of lines."""
        return cls.from_words(stream, prefix_length)

    def _add(self, prefix: str, suffix: str) -> None:
        transitions = self._table.setdefault(prefix, {})
        transitions[suffix] = transitions.get(suffix, 0) + 1

    def _analyze(self, word: str) -> None:
        k = self._prefix_length
        if len(word) <= k:
            return
        self._starts.append(word[:k])
        for i in range(k, len(word)):
            self._add(word[i - k : i], word[i])
        self._add(word[-k:], END_OF_WORD)

    def _normalize(self) -> None:
        for transitions in self._table.values():
            total = sum(transitions.values())
            for suffix in transitions:
                transitions[suffix] /= total

    def _pick(self, prefix: str, rng: random.Random) -> str:
        transitions = self._table[prefix]
        p = rng.random()
        cumulative = 0.0
        suffix = END_OF_WORD
        for suffix, probability in transitions.items():
            cumulative += probability
            if p <= cumulative:
                return suffix
        # Rounding left the total just under p; the last suffix covers the gap.
        return suffix

    def generate(self, rng: random.Random | None = None) -> str:
        """Return one random word following the learned transitions."""
        if not self._starts:
            raise NameGenerationError("markov chains hold no start prefix; corpus words are too short")
        rng = rng or random.Random()

        prefix = rng.choice(self._starts)
        letters: list[str] = []
        while True:
            suffix = self._pick(prefix, rng)
            if suffix == END_OF_WORD:
                letters.append(prefix)
                break
            letters.append(prefix[0])
            prefix = prefix[1:] + suffix
        return "".join(letters)
