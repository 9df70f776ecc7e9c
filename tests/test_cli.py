"""Tests for the cssforge command line host."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from cssforge.cli import cli
from cssforge.engine.registry import EngineRegistry
from tests.fixtures import FakeEngine, FakeOptimizer, FakeScanner, rule


@pytest.fixture(autouse=True)
def _engines():
    EngineRegistry.register_factory("compiler", "fake", FakeEngine)
    EngineRegistry.register_factory(
        "scanner", "fake", lambda: FakeScanner(files=["/app/index.html"], candidates=["flex"])
    )
    EngineRegistry.register_factory("optimizer", "fake", FakeOptimizer)


def _args(project: Path, *extra: str) -> list[str]:
    return [
        "build",
        str(project / "src" / "main.css"),
        "--compiler", "fake",
        "--scanner", "fake",
        "--base", str(project),
        *extra,
    ]


def test_build_to_stdout(project: Path):
    result = CliRunner().invoke(cli, _args(project))
    assert result.exit_code == 0, result.output
    assert result.output == rule("flex")


def test_build_to_file(project: Path):
    out = project / "dist" / "main.css"
    result = CliRunner().invoke(cli, _args(project, "-o", str(out)))
    assert result.exit_code == 0, result.output
    assert out.read_text() == rule("flex")


def test_build_optimized_and_minified(project: Path):
    result = CliRunner().invoke(cli, _args(project, "--optimizer", "fake", "--optimize", "--minify"))
    assert result.exit_code == 0, result.output
    assert result.output == ".FLEX{DISPLAY:FLEX}"


def test_optimize_without_optimizer_fails(project: Path):
    result = CliRunner().invoke(cli, _args(project, "--optimize"))
    assert result.exit_code != 0
    assert "no optimizer" in result.output


def test_unknown_engine_fails(project: Path):
    result = CliRunner().invoke(
        cli, ["build", str(project / "src" / "main.css"), "--compiler", "nope", "--scanner", "fake"]
    )
    assert result.exit_code != 0
    assert "Unknown compiler engine" in result.output
