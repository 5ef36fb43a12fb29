"""Persistence contract for generated places and wormholes."""

from __future__ import annotations

import itertools
from typing import Protocol

from wormhole_forge.errors import DuplicateModelError
from wormhole_forge.models import Place, Wormhole


class UniverseStore(Protocol):
    """Stores places and wormholes, assigning ids on first save."""

    def save_place(self, place: Place) -> None:
        """Insert or update a place; sets ``place.id`` on insert."""

    def save_wormhole(self, wormhole: Wormhole) -> None:
        """Insert or update a wormhole; sets ``wormhole.id`` on insert."""

    def list_places(self) -> list[Place]:
        """Return stored places ordered by id."""

    def list_wormholes(self) -> list[Wormhole]:
        """Return stored wormholes ordered by id."""


def duplicate_place(place: Place) -> DuplicateModelError:
    return DuplicateModelError("place", f"Duplicate place {place.name} at ({place.x}, {place.y})")


def duplicate_wormhole(wormhole: Wormhole) -> DuplicateModelError:
    return DuplicateModelError(
        "wormhole",
        "Duplicate wormhole from ({}, {}) to ({}, {})".format(
            wormhole.source.x, wormhole.source.y, wormhole.destination.x, wormhole.destination.y
        ),
    )


def require_saved_endpoints(wormhole: Wormhole) -> None:
    if wormhole.source.id is None or wormhole.destination.id is None:
        raise ValueError("wormhole endpoints must be saved before the wormhole")


def _forget(index: dict, owner: int) -> None:
    for key in [key for key, value in index.items() if value == owner]:
        del index[key]


class InMemoryUniverseStore:
    """Dictionary-backed store enforcing the same uniqueness rules as SQL storage."""

    def __init__(self) -> None:
        self._places: dict[int, Place] = {}
        self._wormholes: dict[int, Wormhole] = {}
        self._place_names: dict[str, int] = {}
        self._place_coords: dict[tuple[int, int], int] = {}
        self._wormhole_links: dict[tuple[int, int], int] = {}
        self._place_ids = itertools.count(1)
        self._wormhole_ids = itertools.count(1)

    def save_place(self, place: Place) -> None:
        new = place.id is None or place.id <= 0
        name_owner = self._place_names.get(place.name)
        coords_owner = self._place_coords.get((place.x, place.y))
        if (name_owner is not None and name_owner != place.id) or (
            coords_owner is not None and coords_owner != place.id
        ):
            raise duplicate_place(place)

        if new:
            place.id = next(self._place_ids)
        else:
            # The stored object may be the one being saved, already mutated.
            _forget(self._place_names, place.id)
            _forget(self._place_coords, place.id)
        self._places[place.id] = place
        self._place_names[place.name] = place.id
        self._place_coords[(place.x, place.y)] = place.id

    def save_wormhole(self, wormhole: Wormhole) -> None:
        require_saved_endpoints(wormhole)
        key = (wormhole.source.id, wormhole.destination.id)
        owner = self._wormhole_links.get(key)
        if owner is not None and owner != wormhole.id:
            raise duplicate_wormhole(wormhole)

        if wormhole.id is None or wormhole.id <= 0:
            wormhole.id = next(self._wormhole_ids)
        else:
            _forget(self._wormhole_links, wormhole.id)
        self._wormholes[wormhole.id] = wormhole
        self._wormhole_links[key] = wormhole.id

    def list_places(self) -> list[Place]:
        return [self._places[key] for key in sorted(self._places)]

    def list_wormholes(self) -> list[Wormhole]:
        return [self._wormholes[key] for key in sorted(self._wormholes)]
