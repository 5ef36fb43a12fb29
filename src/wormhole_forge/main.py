"""CLI entrypoint for wormhole-forge."""

from __future__ import annotations

import random
import sys
from importlib.metadata import PackageNotFoundError, version as package_version
from pathlib import Path

import typer
from rich import print

from wormhole_forge.config import Settings, load_settings
from wormhole_forge.errors import WormholeForgeError
from wormhole_forge.export import write_dot_file
from wormhole_forge.naming import MarkovChains, NameGenerator
from wormhole_forge.storage import SqliteUniverseStore
from wormhole_forge.telemetry import configure_logging
from wormhole_forge.universe import generate_universe

app = typer.Typer(help="Random universe generator: named places linked by non-crossing wormholes")


def _settings(config: Path | None) -> Settings:
    settings = load_settings(config)
    configure_logging(settings.log_level)
    return settings


def _load_chains(corpus: str, prefix_length: int) -> MarkovChains:
    try:
        if corpus == "-":
            return MarkovChains.load(sys.stdin.buffer, prefix_length)
        with Path(corpus).expanduser().open("rb") as handle:
            return MarkovChains.load(handle, prefix_length)
    except (OSError, WormholeForgeError) as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=1)


def _rng(seed: int | None, settings: Settings) -> random.Random:
    return random.Random(seed if seed is not None else settings.seed)


@app.command("show-config")
def show_config(config: Path = typer.Option(None, help="Path to TOML config file")) -> None:
    """Show the effective configuration."""
    print(_settings(config).model_dump())


@app.command()
def generate(
    config: Path = typer.Option(None, help="Path to TOML config file"),
    corpus: str = typer.Option("-", help="Name corpus, one word per line ('-' reads stdin)"),
    db: str = typer.Option(None, help="SQLite database path (defaults to db_path setting)"),
    dot: str = typer.Option(None, help="Graphviz output path (defaults to dot_path setting)"),
    seed: int = typer.Option(None, help="Random seed for a reproducible universe"),
) -> None:
    """Generate a universe in one database transaction and export it as a dot file.

    Every place needs a distinct name, so a small corpus can run out of names
    on a large universe; generation then fails and nothing is saved.
    """
    settings = _settings(config)
    chains = _load_chains(corpus, settings.universe.markov_prefix_length)
    db_path = db or settings.db_path

    try:
        with SqliteUniverseStore(db_path) as store, store.transaction():
            universe = generate_universe(settings.universe, chains, store, rng=_rng(seed, settings))
    except WormholeForgeError as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=1)

    dot_path = write_dot_file(dot or settings.dot_path, universe.places, universe.wormholes)
    print(
        {
            "places": len(universe.places),
            "wormholes": len(universe.wormholes),
            "regions": len(universe.hierarchy.regions),
            "db_path": db_path,
            "dot_path": str(dot_path),
        }
    )


@app.command()
def names(
    corpus: str = typer.Option("-", help="Name corpus, one word per line ('-' reads stdin)"),
    count: int = typer.Option(10, min=1, help="How many names to draw"),
    prefix_length: int = typer.Option(None, min=1, help="Markov prefix length (defaults to config)"),
    seed: int = typer.Option(None, help="Random seed"),
    config: Path = typer.Option(None, help="Path to TOML config file"),
) -> None:
    """Print unique names drawn from a corpus."""
    settings = _settings(config)
    chains = _load_chains(corpus, prefix_length or settings.universe.markov_prefix_length)
    generator = NameGenerator(chains, _rng(seed, settings))
    try:
        drawn = [generator.next_name() for _ in range(count)]
    except WormholeForgeError as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=1)
    print({"names": drawn})


@app.command("export-dot")
def export_dot(
    db: str = typer.Option(None, help="SQLite database path (defaults to db_path setting)"),
    dot: str = typer.Option(None, help="Graphviz output path (defaults to dot_path setting)"),
    config: Path = typer.Option(None, help="Path to TOML config file"),
) -> None:
    """Rebuild the dot file from a stored universe."""
    settings = _settings(config)
    db_path = db or settings.db_path
    if db_path != ":memory:" and not Path(db_path).exists():
        raise typer.BadParameter(f"Database does not exist: {db_path}")

    with SqliteUniverseStore(db_path) as store:
        places = store.list_places()
        wormholes = store.list_wormholes()
    dot_path = write_dot_file(dot or settings.dot_path, places, wormholes)
    print({"places": len(places), "wormholes": len(wormholes), "dot_path": str(dot_path)})


@app.command()
def version() -> None:
    try:
        current = package_version("wormhole-forge")
    except PackageNotFoundError:
        current = "dev"
    print(f"wormhole-forge {current}")


if __name__ == "__main__":
    app()
