"""Shared pytest fixtures for cssforge unit tests."""
from __future__ import annotations

from pathlib import Path

import pytest

from cssforge.config import StageOptions
from cssforge.engine.registry import EngineRegistry
from cssforge.stage import UtilityStage
from tests.fixtures import FakeEngine, FakeOptimizer, FakeScanner, TAILWIND_CSS


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CSSFORGE_ENV", raising=False)
    monkeypatch.delenv("CSSFORGE_LOG_LEVEL", raising=False)


@pytest.fixture(autouse=True)
def _isolated_engine_registry():
    """Keep registrations made by a test from leaking into the next."""
    saved = {kind: dict(names) for kind, names in EngineRegistry._factories.items()}
    yield
    EngineRegistry._factories.clear()
    EngineRegistry._factories.update(saved)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A project with ``src/main.css`` (generation directive) and an import."""
    src = tmp_path / "src"
    src.mkdir()
    (src / "main.css").write_text(TAILWIND_CSS)
    (src / "theme.css").write_text(":root { --brand: red; }\n")
    return tmp_path


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def scanner() -> FakeScanner:
    return FakeScanner(candidates=["flex", "p-4"])


@pytest.fixture
def optimizer() -> FakeOptimizer:
    return FakeOptimizer()


@pytest.fixture
def stage(project: Path, engine: FakeEngine, scanner: FakeScanner) -> UtilityStage:
    """Stage with optimization disabled."""
    return UtilityStage(engine, scanner, options=StageOptions(base=str(project), optimize=False))
