from __future__ import annotations

from dataclasses import dataclass, field

from .geometry import Point, Segment, distance


@dataclass(slots=True)
class Region:
    """Circular area of the universe with its transient working geometry."""

    center: Point
    radius: float
    points: list[Point] = field(default_factory=list)
    segments: list[Segment] = field(default_factory=list)

    def contains(self, point: Point) -> bool:
        return distance(self.center, point) <= self.radius

    def clear(self) -> None:
        self.points = []
        self.segments = []


@dataclass(slots=True)
class Place:
    name: str
    x: int
    y: int
    energy_production: int = 0
    id: int | None = None


@dataclass(slots=True)
class Wormhole:
    source: Place
    destination: Place
    distance: int
    id: int | None = None
