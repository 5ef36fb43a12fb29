"""Rejection sampling of well-spaced points inside a circular region.

The number of points produced is not a function of the region radius and
spacing alone: sampling stops after ``int(radius) * REJECTIONS_PER_RADIUS_UNIT``
consecutive rejected draws, so two runs with different random sources yield
different counts. Running out of draws is the normal way sampling ends.
"""

from __future__ import annotations

import logging
import math
import random
from collections import defaultdict
from collections.abc import Iterable

from .geometry import Point, far_enough, integer_coordinates
from .models import Region

REJECTIONS_PER_RADIUS_UNIT = 100

logger = logging.getLogger("wormhole_forge.sampling")


class _PointGrid:
    """Uniform bucket grid answering "is anything within ``min_dist``?" queries."""

    def __init__(self, cell_size: float) -> None:
        self._cell_size = cell_size
        self._cells: defaultdict[tuple[int, int], list[Point]] = defaultdict(list)

    def _cell(self, point: Point) -> tuple[int, int]:
        return math.floor(point.x / self._cell_size), math.floor(point.y / self._cell_size)

    def add(self, point: Point) -> None:
        self._cells[self._cell(point)].append(point)

    def extend(self, points: Iterable[Point]) -> None:
        for point in points:
            self.add(point)

    def neighbours(self, point: Point) -> Iterable[Point]:
        cx, cy = self._cell(point)
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                yield from self._cells.get((cx + dx, cy + dy), ())


def random_point_in_region(region: Region, rng: random.Random) -> Point:
    """Draw a point uniformly inside the region's disc."""
    while True:
        point = Point(
            region.center.x - region.radius + rng.random() * region.radius * 2,
            region.center.y - region.radius + rng.random() * region.radius * 2,
        )
        if region.contains(point):
            return point


def generate_points(
    region: Region,
    min_dist: float,
    foreign_points: Iterable[Point],
    rng: random.Random,
) -> list[Point]:
    """Fill ``region.points`` with points farther than ``min_dist`` from each other
    and from every foreign point. Returns the region's point list.

    A candidate is also rejected when its integer coordinates match those of
    an accepted or foreign point, since places are stored at integer positions.
    """
    if min_dist <= 0:
        raise ValueError(f"min_dist must be positive, got {min_dist}")

    known = [*foreign_points, *region.points]
    grid = _PointGrid(min_dist)
    grid.extend(known)
    taken = {integer_coordinates(p) for p in known}

    budget = int(region.radius) * REJECTIONS_PER_RADIUS_UNIT
    failures = 0
    while True:
        failures += 1
        if failures > budget:
            break
        candidate = random_point_in_region(region, rng)
        key = integer_coordinates(candidate)
        if key not in taken and far_enough(candidate, min_dist, grid.neighbours(candidate)):
            failures = 0
            region.points.append(candidate)
            grid.add(candidate)
            taken.add(key)

    logger.info(
        "points_generated",
        extra={"count": len(region.points), "radius": region.radius, "min_dist": min_dist},
    )
    return region.points
