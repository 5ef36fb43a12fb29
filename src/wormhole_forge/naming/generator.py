"""Collision-free name drawing on top of Markov chains."""

from __future__ import annotations

import logging
import random

from wormhole_forge.errors import NameGenerationError
from wormhole_forge.naming.markov import MarkovChains


class NameGenerator:
    """Draws names from ``chains`` and never hands out the same name twice."""

    def __init__(
        self,
        chains: MarkovChains,
        rng: random.Random | None = None,
        *,
        max_attempts: int = 1_000,
        logger: logging.Logger | None = None,
    ) -> None:
        self._chains = chains
        self._rng = rng or random.Random()
        self._max_attempts = max_attempts
        self._logger = logger or logging.getLogger("wormhole_forge.naming.generator")
        self._used: set[str] = set()

    @property
    def used(self) -> frozenset[str]:
        return frozenset(self._used)

    def reserve(self, name: str) -> None:
        """Mark ``name`` as taken without generating it."""
        self._used.add(name)

    def next_name(self) -> str:
        for attempt in range(1, self._max_attempts + 1):
            name = self._chains.generate(self._rng)
            if not name:
                raise NameGenerationError("markov random name is empty")
            if name in self._used:
                self._logger.debug("name_collision", extra={"candidate_name": name, "attempt": attempt})
                continue
            self._used.add(name)
            return name

        raise NameGenerationError(
            f"no unused name after {self._max_attempts} attempts ({len(self._used)} names in use); "
            "use a larger name corpus or a shorter markov_prefix_length"
        )
