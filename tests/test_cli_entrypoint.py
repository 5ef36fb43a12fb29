from __future__ import annotations

import importlib
from pathlib import Path

import pytest

CONFIG = """
log_level = "WARNING"

[universe]
radius = 80
min_place_dist = 10
max_way_length = 25
markov_prefix_length = 2

[universe.region]
count = 1
radius = 20
min_place_dist = 5
max_way_length = 9
"""


def test_console_entrypoint_exposes_app() -> None:
    pytest.importorskip("typer")

    module = importlib.import_module("wormhole_forge.main")

    assert hasattr(module, "app")
    assert module.app is not None


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "forge.toml"
    path.write_text(CONFIG, encoding="utf-8")
    return path


def test_generate_then_export(tmp_path: Path, config_file: Path, corpus_file: Path) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from wormhole_forge.main import app

    runner = typer_testing.CliRunner()
    db_path = tmp_path / "db" / "universe.sqlite"
    dot_path = tmp_path / "universe.gv"

    result = runner.invoke(
        app,
        [
            "generate",
            "--config", str(config_file),
            "--corpus", str(corpus_file),
            "--db", str(db_path),
            "--dot", str(dot_path),
            "--seed", "4",
        ],
        catch_exceptions=False,
    )

    assert result.exit_code == 0
    assert db_path.exists()
    generated = dot_path.read_text(encoding="utf-8")
    assert generated.startswith("digraph G {")

    exported_path = tmp_path / "again.gv"
    result = runner.invoke(
        app,
        ["export-dot", "--config", str(config_file), "--db", str(db_path), "--dot", str(exported_path)],
        catch_exceptions=False,
    )

    assert result.exit_code == 0
    assert exported_path.read_text(encoding="utf-8") == generated


def test_generate_reads_corpus_from_stdin(tmp_path: Path, config_file: Path, corpus_words: list[str]) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from wormhole_forge.main import app

    result = typer_testing.CliRunner().invoke(
        app,
        ["generate", "--config", str(config_file), "--db", str(tmp_path / "u.sqlite"), "--dot", str(tmp_path / "u.gv")],
        input="\n".join(corpus_words) + "\n",
        catch_exceptions=False,
    )

    assert result.exit_code == 0
    assert "places" in result.stdout


def test_invalid_corpus_encoding_exits_with_error(tmp_path: Path, config_file: Path) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from wormhole_forge.main import app

    corpus = tmp_path / "broken.txt"
    corpus.write_bytes(b"vega\nsir\xffius\n")

    result = typer_testing.CliRunner().invoke(
        app,
        ["generate", "--config", str(config_file), "--corpus", str(corpus), "--db", str(tmp_path / "u.sqlite")],
        catch_exceptions=False,
    )

    assert result.exit_code == 1
    assert "line 2" in result.stdout
    assert not (tmp_path / "u.sqlite").exists()


def test_names_command_prints_unique_names(config_file: Path, corpus_file: Path) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from wormhole_forge.main import app

    result = typer_testing.CliRunner().invoke(
        app,
        ["names", "--config", str(config_file), "--corpus", str(corpus_file), "--count", "5", "--seed", "1"],
        catch_exceptions=False,
    )

    assert result.exit_code == 0
    assert "names" in result.stdout


def test_infeasible_layout_exits_with_error(tmp_path: Path, corpus_file: Path) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from wormhole_forge.main import app

    config = tmp_path / "crowded.toml"
    config.write_text(
        "[universe]\nradius = 10\n\n[universe.region]\ncount = 3\nradius = 50\nmax_placement_attempts = 20\n",
        encoding="utf-8",
    )

    result = typer_testing.CliRunner().invoke(
        app,
        ["generate", "--config", str(config), "--corpus", str(corpus_file), "--db", str(tmp_path / "u.sqlite")],
        catch_exceptions=False,
    )

    assert result.exit_code == 1
    assert "cannot place 3 non-overlapping regions" in result.stdout
