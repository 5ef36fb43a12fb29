"""Graphviz export of a generated universe.

Each place becomes a pinned node (``pos="x,y!"``, coordinates multiplied by
``scale``) and each wormhole a directed edge; render with ``neato -n``.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from .models import Place, Wormhole

DEFAULT_SCALE = 20


def render_dot(places: Iterable[Place], wormholes: Iterable[Wormhole], scale: int = DEFAULT_SCALE) -> str:
    lines = ["digraph G {"]
    for place in places:
        lines.append(f'    p{place.id} [pos="{place.x * scale},{place.y * scale}!"];')
    for wormhole in wormholes:
        lines.append(f"    p{wormhole.source.id} -> p{wormhole.destination.id};")
    lines.append("}")
    return "\n".join(lines) + "\n"


def write_dot_file(
    path: str | Path,
    places: Iterable[Place],
    wormholes: Iterable[Wormhole],
    scale: int = DEFAULT_SCALE,
) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(render_dot(places, wormholes, scale=scale), encoding="utf-8")
    return target
