from __future__ import annotations

import itertools
import random

import pytest

from wormhole_forge.geometry import Point, distance
from wormhole_forge.models import Region
from wormhole_forge.sampling import generate_points, random_point_in_region


def test_random_points_stay_inside_the_disc() -> None:
    region = Region(center=Point(50, 50), radius=20)
    rng = random.Random(1)

    for _ in range(500):
        assert distance(region.center, random_point_in_region(region, rng)) <= 20


def test_points_are_spaced_and_avoid_foreign_points() -> None:
    region = Region(center=Point(100, 100), radius=60)
    foreign = [Point(100, 100), Point(130, 90)]

    points = generate_points(region, 12, foreign, random.Random(5))

    assert points is region.points
    assert len(points) > 1
    for p, q in itertools.combinations(points, 2):
        assert distance(p, q) > 12
    for p in points:
        assert region.contains(p)
        assert all(distance(p, f) > 12 for f in foreign)


def test_sampling_is_reproducible_with_a_seed() -> None:
    first = generate_points(Region(center=Point(0, 0), radius=40), 8, [], random.Random(9))
    second = generate_points(Region(center=Point(0, 0), radius=40), 8, [], random.Random(9))

    assert first == second


def test_exhausted_budget_stops_silently() -> None:
    crowded = Region(center=Point(0, 0), radius=10)

    points = generate_points(crowded, 100, [], random.Random(3))

    assert len(points) == 1


def test_fully_excluded_region_yields_no_points() -> None:
    region = Region(center=Point(0, 0), radius=5)

    assert generate_points(region, 50, [Point(0, 0)], random.Random(0)) == []


def test_tiny_region_has_no_budget() -> None:
    assert generate_points(Region(center=Point(0, 0), radius=0.5), 1, [], random.Random(0)) == []


def test_existing_region_points_are_respected() -> None:
    region = Region(center=Point(0, 0), radius=30, points=[Point(0, 0)])

    points = generate_points(region, 10, [], random.Random(2))

    assert points[0] == Point(0, 0)
    assert all(distance(Point(0, 0), p) > 10 for p in points[1:])


def test_min_dist_must_be_positive() -> None:
    with pytest.raises(ValueError):
        generate_points(Region(center=Point(0, 0), radius=10), 0, [], random.Random(0))


@pytest.mark.parametrize("center", [Point(15, 15), Point(0, 0)])
def test_points_never_share_integer_coordinates(center: Point) -> None:
    # Spacings below 2*sqrt(2) allow two distant points to truncate to one cell.
    region = Region(center=center, radius=15)
    foreign = [Point(center.x + 0.5, center.y + 0.5)]

    points = generate_points(region, 1.05, foreign, random.Random(1))

    keys = [(int(p.x), int(p.y)) for p in points]
    assert len(points) > 10
    assert len(set(keys)) == len(keys)
    assert (int(foreign[0].x), int(foreign[0].y)) not in keys
