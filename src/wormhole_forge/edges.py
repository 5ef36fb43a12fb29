"""Candidate link computation and greedy selection of a non-crossing subset."""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from collections.abc import Iterable, Sequence

from .geometry import Point, Segment, bounding_box, distance, segments_intersect

logger = logging.getLogger("wormhole_forge.edges")


def _candidate_order(segment: Segment) -> tuple[float, float, float, float]:
    return segment.a.x, segment.a.y, segment.b.x, segment.b.y


class SegmentIndex:
    """Buckets segments by the grid cells their bounding boxes cover.

    Two segments can only intersect when their boxes overlap, so a query
    only needs the segments sharing at least one cell with the candidate.
    """

    def __init__(self, cell_size: float, segments: Iterable[Segment] = ()) -> None:
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        self._cell_size = cell_size
        self._cells: defaultdict[tuple[int, int], list[Segment]] = defaultdict(list)
        self._count = 0
        for segment in segments:
            self.add(segment)

    def __len__(self) -> int:
        return self._count

    def _cells_for(self, segment: Segment) -> Iterable[tuple[int, int]]:
        box = bounding_box(segment)
        x0 = math.floor(box.a.x / self._cell_size)
        x1 = math.floor(box.b.x / self._cell_size)
        y0 = math.floor(box.a.y / self._cell_size)
        y1 = math.floor(box.b.y / self._cell_size)
        for cx in range(x0, x1 + 1):
            for cy in range(y0, y1 + 1):
                yield cx, cy

    def add(self, segment: Segment) -> None:
        for cell in self._cells_for(segment):
            self._cells[cell].append(segment)
        self._count += 1

    def crosses(self, segment: Segment) -> bool:
        """True when ``segment`` intersects any indexed segment."""
        seen: set[Segment] = set()
        for cell in self._cells_for(segment):
            for other in self._cells.get(cell, ()):
                if other in seen:
                    continue
                seen.add(other)
                if segments_intersect(segment, other):
                    return True
        return False


def compute_candidates(
    sources: Sequence[Point],
    destinations: Sequence[Point],
    max_length: float,
) -> list[Segment]:
    """Return every link from a source to another source or a destination no
    longer than ``max_length``, sorted by endpoint coordinates.

    Only source-to-target pairs are produced: a destination that is not also a
    source never gets a link back to a source.
    """
    targets = list(dict.fromkeys([*sources, *destinations]))
    candidates: set[Segment] = set()
    for a in sources:
        for b in targets:
            if a == b:
                continue
            if distance(a, b) <= max_length:
                candidates.add(Segment(a, b))

    ordered = sorted(candidates, key=_candidate_order)
    logger.info("candidates_computed", extra={"count": len(ordered), "max_length": max_length})
    return ordered


def select_non_crossing(
    candidates: Iterable[Segment],
    existing: Iterable[Segment] = (),
    *,
    cell_size: float | None = None,
) -> list[Segment]:
    """Greedily keep candidates that cross neither ``existing`` segments nor a
    previously kept candidate. Candidates are considered in the given order."""
    candidates = list(candidates)
    existing = list(existing)
    if cell_size is None:
        longest = max((s.length for s in [*candidates, *existing]), default=0.0)
        cell_size = longest if longest > 0 else 1.0

    index = SegmentIndex(cell_size, existing)
    accepted: list[Segment] = []
    for candidate in candidates:
        if index.crosses(candidate):
            continue
        accepted.append(candidate)
        index.add(candidate)

    logger.info(
        "segments_selected",
        extra={"accepted": len(accepted), "candidates": len(candidates), "existing": len(existing)},
    )
    return accepted
