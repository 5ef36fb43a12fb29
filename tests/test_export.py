from __future__ import annotations

from wormhole_forge.export import render_dot
from wormhole_forge.models import Place, Wormhole


def test_render_dot_layout() -> None:
    vega = Place(name="vega", x=1, y=2, id=1)
    rigel = Place(name="rigel", x=10, y=0, id=2)

    text = render_dot([vega, rigel], [Wormhole(source=vega, destination=rigel, distance=9, id=1)])

    assert text == (
        "digraph G {\n"
        '    p1 [pos="20,40!"];\n'
        '    p2 [pos="200,0!"];\n'
        "    p1 -> p2;\n"
        "}\n"
    )


def test_render_dot_custom_scale_and_empty_universe() -> None:
    assert render_dot([Place(name="a", x=3, y=4, id=7)], [], scale=1) == 'digraph G {\n    p7 [pos="3,4!"];\n}\n'
    assert render_dot([], []) == "digraph G {\n}\n"
