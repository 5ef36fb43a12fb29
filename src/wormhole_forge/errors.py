"""Domain errors raised while generating or storing a universe."""

from __future__ import annotations


class WormholeForgeError(Exception):
    """Base class for every error raised by wormhole-forge."""


class CorpusEncodingError(WormholeForgeError):
    """Raised when a name corpus line is not valid UTF-8."""

    def __init__(self, line_number: int, raw: object) -> None:
        super().__init__(f"invalid UTF-8 string {raw!r} at line {line_number}")
        self.line_number = line_number


class NameGenerationError(WormholeForgeError):
    """Raised when the name generator cannot produce a usable name."""


class InfeasibleRegionLayoutError(WormholeForgeError):
    """Raised when sub-region centers cannot be placed without overlap."""

    def __init__(self, count: int, placed: int, attempts: int) -> None:
        super().__init__(
            f"cannot place {count} non-overlapping regions "
            f"(placed {placed}, gave up after {attempts} attempts)"
        )
        self.count = count
        self.placed = placed
        self.attempts = attempts


class GenerationError(WormholeForgeError):
    """Raised when generated geometry cannot be turned into places and wormholes."""


class DuplicateModelError(WormholeForgeError):
    """Raised by stores when a place or wormhole violates a uniqueness constraint."""

    def __init__(self, kind: str, message: str) -> None:
        super().__init__(message)
        self.kind = kind
