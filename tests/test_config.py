from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from wormhole_forge.config import RegionSettings, Settings, UniverseSettings, load_settings


def test_defaults() -> None:
    universe = UniverseSettings()

    assert (universe.radius, universe.min_place_dist, universe.max_way_length) == (1000, 80, 150)
    assert universe.markov_prefix_length == 3
    assert universe.region == RegionSettings(count=5, radius=120, min_place_dist=20, max_way_length=40)


def test_toml_file_overrides_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "forge.toml"
    config_path.write_text(
        """
log_level = "DEBUG"
seed = 12

[universe]
radius = 300
markov_prefix_length = 2

[universe.region]
count = 1
radius = 40
""",
        encoding="utf-8",
    )

    settings = load_settings(config_path)

    assert settings.log_level == "DEBUG"
    assert settings.seed == 12
    assert settings.universe.radius == 300
    assert settings.universe.min_place_dist == 80
    assert settings.universe.region.count == 1
    assert settings.universe.region.radius == 40


def test_missing_config_file_falls_back_to_defaults(tmp_path: Path) -> None:
    settings = load_settings(tmp_path / "absent.toml")

    assert settings.universe == UniverseSettings()


def test_environment_overrides_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "forge.toml"
    config_path.write_text("[universe]\nradius = 300\n", encoding="utf-8")
    monkeypatch.setenv("WORMHOLE_FORGE_UNIVERSE__RADIUS", "450")

    assert load_settings(config_path).universe.radius == 450


def test_invalid_values_are_rejected() -> None:
    with pytest.raises(ValidationError):
        UniverseSettings(radius=0)
    with pytest.raises(ValidationError):
        RegionSettings(count=-1)


def test_settings_are_plain_objects(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)

    assert Settings().app_name == "wormhole-forge"
