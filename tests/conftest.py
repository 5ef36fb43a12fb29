from __future__ import annotations

import pytest

CORPUS = [
    "aldebaran", "altair", "andromeda", "antares", "arcturus",
    "bellatrix", "betelgeuse", "canopus", "capella", "castor",
    "deneb", "denebola", "diphda", "elnath", "eltanin",
    "enif", "fomalhaut", "gacrux", "hadar", "hamal",
    "izar", "kochab", "markab", "menkar", "merak",
    "mintaka", "mirach", "mirfak", "naos", "nunki",
    "polaris", "pollux", "procyon", "rasalhague", "regulus",
    "rigel", "sabik", "sadr", "saiph", "scheat",
    "schedar", "shaula", "sirius", "spica", "suhail",
    "tarazed", "thuban", "vega", "wezen", "zubenelgenubi",
]


@pytest.fixture
def corpus_words() -> list[str]:
    return list(CORPUS)


@pytest.fixture
def corpus_file(tmp_path):
    path = tmp_path / "names.txt"
    path.write_text("\n".join(CORPUS) + "\n", encoding="utf-8")
    return path
