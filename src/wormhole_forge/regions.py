"""Two-level region layout: one sparse outer region and dense sub-regions.

Sub-regions are processed strictly in creation order. Each one avoids the
points and links of those processed before it, and the outer region is
populated last, around all of them.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field

from .config import UniverseSettings
from .edges import compute_candidates, select_non_crossing
from .errors import InfeasibleRegionLayoutError
from .geometry import Point, Segment, distance
from .models import Region
from .sampling import generate_points, random_point_in_region

PLACEMENT_ATTEMPTS_PER_AREA_RATIO = 100
MIN_PLACEMENT_ATTEMPTS = 1_000

logger = logging.getLogger("wormhole_forge.regions")


@dataclass(slots=True)
class RegionHierarchy:
    outer: Region
    regions: list[Region] = field(default_factory=list)

    def all_regions(self) -> list[Region]:
        """Outer region first, then sub-regions in creation order."""
        return [self.outer, *self.regions]


def placement_attempts(outer_radius: float, region_radius: float) -> int:
    """Number of draws allowed to place one sub-region center."""
    ratio = (outer_radius / region_radius) ** 2
    return max(MIN_PLACEMENT_ATTEMPTS, math.ceil(PLACEMENT_ATTEMPTS_PER_AREA_RATIO * ratio))


def place_region_centers(outer: Region, config: UniverseSettings, rng: random.Random) -> list[Region]:
    """Create ``config.region.count`` sub-regions whose centers are more than
    two sub-region radii apart."""
    region_cfg = config.region
    attempts = region_cfg.max_placement_attempts or placement_attempts(outer.radius, region_cfg.radius)
    regions: list[Region] = []

    for _ in range(region_cfg.count):
        for _ in range(attempts):
            center = random_point_in_region(outer, rng)
            if all(distance(r.center, center) > r.radius * 2 for r in regions):
                break
        else:
            raise InfeasibleRegionLayoutError(region_cfg.count, len(regions), attempts)

        regions.append(Region(center=center, radius=region_cfg.radius))
        logger.info(
            "region_placed",
            extra={"x": center.x, "y": center.y, "radius": region_cfg.radius, "index": len(regions) - 1},
        )
    return regions


def densify_regions(regions: list[Region], config: UniverseSettings, rng: random.Random) -> None:
    region_cfg = config.region
    points: list[Point] = []
    segments: list[Segment] = []
    for region in regions:
        generate_points(region, region_cfg.min_place_dist, points, rng)
        candidates = compute_candidates(region.points, points, region_cfg.max_way_length)
        region.segments = select_non_crossing(candidates, segments)
        points.extend(region.points)
        segments.extend(region.segments)


def populate_outer_region(
    outer: Region,
    regions: list[Region],
    config: UniverseSettings,
    rng: random.Random,
) -> None:
    foreign = [p for r in regions for p in r.points]
    existing = [s for r in regions for s in r.segments]
    generate_points(outer, config.min_place_dist, foreign, rng)
    candidates = compute_candidates(outer.points, foreign, config.max_way_length)
    outer.segments = select_non_crossing(candidates, existing)


def build_hierarchy(config: UniverseSettings, rng: random.Random) -> RegionHierarchy:
    """Lay out sub-regions, then the outer region, and link each of them."""
    # Centered on (radius, radius) so every coordinate is non-negative.
    outer = Region(center=Point(config.radius, config.radius), radius=config.radius)

    logger.info("computing_regions", extra={"count": config.region.count})
    regions = place_region_centers(outer, config, rng)
    densify_regions(regions, config, rng)

    logger.info("generating_places", extra={"min_place_dist": config.min_place_dist})
    populate_outer_region(outer, regions, config, rng)
    return RegionHierarchy(outer=outer, regions=regions)
