"""Runtime configuration for wormhole-forge."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

DEFAULT_CONFIG_FILE = "wormhole_forge.toml"


class RegionSettings(BaseModel):
    """Dense hot-spots nested inside the outer region."""

    count: int = Field(default=5, ge=0, description="Number of sub-regions.")
    radius: float = Field(default=120, gt=0)
    min_place_dist: float = Field(default=20, gt=0)
    max_way_length: float = Field(default=40, gt=0)
    max_placement_attempts: int | None = Field(
        default=None,
        gt=0,
        description="Draws allowed per sub-region center; derived from the area ratio when unset.",
    )


class UniverseSettings(BaseModel):
    """Shape of the generated universe."""

    radius: float = Field(default=1000, gt=0)
    min_place_dist: float = Field(default=80, gt=0)
    max_way_length: float = Field(default=150, gt=0)
    markov_prefix_length: int = Field(default=3, ge=1)
    region: RegionSettings = Field(default_factory=RegionSettings)


class Settings(BaseSettings):
    """Environment, .env and TOML driven runtime settings."""

    model_config = SettingsConfigDict(
        env_prefix="WORMHOLE_FORGE_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
        toml_file=DEFAULT_CONFIG_FILE,
    )

    app_name: str = "wormhole-forge"
    log_level: str = "INFO"
    db_path: str = "./data/db/wormhole_forge.sqlite"
    dot_path: str = "universe.gv"
    seed: int | None = Field(default=None, description="Random seed; system entropy when unset.")
    universe: UniverseSettings = Field(default_factory=UniverseSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Build settings, reading TOML from ``config_path`` instead of the default file.

    A missing file is not an error: defaults and environment still apply.
    """
    if config_path is None:
        return Settings()

    class _FileSettings(Settings):
        model_config = SettingsConfigDict(toml_file=str(config_path))

    return _FileSettings()
