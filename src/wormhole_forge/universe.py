"""Random universe generation: places linked by non-crossing wormholes."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from .config import UniverseSettings
from .errors import GenerationError
from .geometry import Point, Segment, integer_coordinates
from .models import Place, Wormhole
from .naming import MarkovChains, NameGenerator
from .regions import RegionHierarchy, build_hierarchy
from .storage import UniverseStore


@dataclass(slots=True)
class Universe:
    config: UniverseSettings
    hierarchy: RegionHierarchy
    places: list[Place] = field(default_factory=list)
    wormholes: list[Wormhole] = field(default_factory=list)


def place_from_point(point: Point, names: NameGenerator) -> Place:
    x, y = integer_coordinates(point)
    return Place(name=names.next_name(), x=x, y=y)


def wormhole_from_segment(segment: Segment, places_by_coords: dict[tuple[int, int], Place]) -> Wormhole:
    try:
        source = places_by_coords[integer_coordinates(segment.a)]
        destination = places_by_coords[integer_coordinates(segment.b)]
    except KeyError as exc:
        raise GenerationError(f"no place at {exc.args[0]} for segment {segment}") from exc
    return Wormhole(source=source, destination=destination, distance=round(segment.length))


class UniverseGenerator:
    """Builds one universe and hands its places and wormholes to ``store``.

    Store errors propagate unchanged; callers run ``generate()`` inside a
    single store transaction so a failure leaves nothing behind.
    """

    def __init__(
        self,
        config: UniverseSettings,
        chains: MarkovChains,
        store: UniverseStore,
        *,
        rng: random.Random | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._config = config
        self._store = store
        self._rng = rng or random.Random()
        self._names = NameGenerator(chains, self._rng)
        self._logger = logger or logging.getLogger("wormhole_forge.universe")

    def generate(self) -> Universe:
        universe = Universe(config=self._config, hierarchy=build_hierarchy(self._config, self._rng))
        try:
            self._make_places(universe)
            self._make_wormholes(universe)
        finally:
            self._cleanup(universe)
        return universe

    def _make_places(self, universe: Universe) -> None:
        universe.places = [
            place_from_point(point, self._names)
            for region in universe.hierarchy.all_regions()
            for point in region.points
        ]
        for place in universe.places:
            self._store.save_place(place)
        self._logger.info("places_saved", extra={"count": len(universe.places)})

    def _make_wormholes(self, universe: Universe) -> None:
        places_by_coords = {(place.x, place.y): place for place in universe.places}
        universe.wormholes = [
            wormhole_from_segment(segment, places_by_coords)
            for region in universe.hierarchy.all_regions()
            for segment in region.segments
        ]
        for wormhole in universe.wormholes:
            self._store.save_wormhole(wormhole)
        self._logger.info("wormholes_saved", extra={"count": len(universe.wormholes)})

    @staticmethod
    def _cleanup(universe: Universe) -> None:
        for region in universe.hierarchy.all_regions():
            region.clear()


def generate_universe(
    config: UniverseSettings,
    chains: MarkovChains,
    store: UniverseStore,
    *,
    rng: random.Random | None = None,
) -> Universe:
    return UniverseGenerator(config, chains, store, rng=rng).generate()
