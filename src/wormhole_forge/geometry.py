"""Plane geometry primitives used by universe generation.

Points and segments are compared with exact float equality. Only the
on-segment test tolerates rounding, through ``EPSILON``.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

EPSILON = 1e-6


@dataclass(frozen=True, slots=True)
class Point:
    x: float
    y: float

    def translate(self, origin: Point) -> Point:
        """Return this point expressed relative to ``origin``."""
        return Point(self.x - origin.x, self.y - origin.y)


@dataclass(frozen=True, slots=True)
class Segment:
    """Directed pair of points; crossing tests ignore the direction."""

    a: Point
    b: Point

    def translate(self, origin: Point) -> Segment:
        return Segment(self.a.translate(origin), self.b.translate(origin))

    def shares_endpoint(self, other: Segment) -> bool:
        return self.a in (other.a, other.b) or self.b in (other.a, other.b)

    @property
    def length(self) -> float:
        return distance(self.a, self.b)


def distance(p1: Point, p2: Point) -> float:
    return math.hypot(p1.x - p2.x, p1.y - p2.y)


def cross_product(a: Point, b: Point) -> float:
    # Axes extend south-east, so y is negated. Only the sign is ever used.
    return a.x * -b.y - b.x * -a.y


def bounding_box(segment: Segment) -> Segment:
    """Normalise a segment so ``a`` is the north-west and ``b`` the south-east corner."""
    return Segment(
        Point(min(segment.a.x, segment.b.x), min(segment.a.y, segment.b.y)),
        Point(max(segment.a.x, segment.b.x), max(segment.a.y, segment.b.y)),
    )


def bboxes_overlap(b1: Segment, b2: Segment) -> bool:
    """Strict overlap of two normalised boxes; touching edges do not count."""
    return b1.a.x < b2.b.x and b1.b.x > b2.a.x and b1.a.y < b2.b.y and b1.b.y > b2.a.y


def is_point_on_segment(segment: Segment, point: Point) -> bool:
    if point == segment.a or point == segment.b:
        return False
    moved = segment.translate(segment.a)
    return abs(cross_product(moved.b, point.translate(segment.a))) < EPSILON


def is_point_right_of_line(segment: Segment, point: Point) -> bool:
    moved = segment.translate(segment.a)
    return cross_product(moved.b, point.translate(segment.a)) > 0


def segments_cross(s1: Segment, s2: Segment) -> bool:
    """One-sided test: does ``s2`` touch or straddle the line through ``s1``?"""
    if is_point_on_segment(s1, s2.a) or is_point_on_segment(s1, s2.b):
        return True
    return is_point_right_of_line(s1, s2.a) != is_point_right_of_line(s1, s2.b)


def segments_intersect(s1: Segment, s2: Segment) -> bool:
    """Return True when two segments cross. Shared endpoints never count."""
    if s1.shares_endpoint(s2):
        return False
    if not bboxes_overlap(bounding_box(s1), bounding_box(s2)):
        return False
    return segments_cross(s1, s2) and segments_cross(s2, s1)


def intersects_any(segment: Segment, others: Iterable[Segment]) -> bool:
    return any(segments_intersect(segment, other) for other in others)


def far_enough(point: Point, min_dist: float, others: Iterable[Point]) -> bool:
    """True when ``point`` is strictly farther than ``min_dist`` from every other point."""
    for other in others:
        if point == other or distance(point, other) <= min_dist:
            return False
    return True


def integer_coordinates(point: Point) -> tuple[int, int]:
    """Coordinates of the place stored for ``point``, truncated toward zero."""
    return int(point.x), int(point.y)
