"""Test fixtures: in-memory compiler engine, content scanner and optimizer."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from cssforge.engine.base import (
    CompilerEngine,
    CompilerHandle,
    ContentScanner,
    Optimizer,
    PluginHook,
    ScanResult,
    SourceEntry,
)
from cssforge.engine.optimizer import OptimizeOptions

TAILWIND_CSS = "@tailwind utilities;\n"
APPLY_CSS = ".btn { @apply p-4 flex; }\n"
PLAIN_CSS = "body { color: black; }\n/* nothing to see */\n"

#: Rules the fake engine knows how to generate.
UTILITIES: dict[str, str] = {
    "flex": "display:flex",
    "block": "display:block",
    "p-4": "padding:1rem",
    "m-2": "margin:.5rem",
    "text-red": "color:red",
}


def rule(token: str) -> str:
    return f".{token}{{{UTILITIES[token]}}}\n"


class FakeHandle(CompilerHandle):
    """Emits one rule per known candidate, remembering what it emitted."""

    def __init__(self, source: str, globs: list[str], incremental: bool = True) -> None:
        self.source = source
        self._globs = globs
        self._incremental = incremental
        self.emitted: list[str] = []
        self.calls: list[tuple[str, list[str]]] = []

    @property
    def globs(self) -> list[str]:
        return list(self._globs)

    @property
    def supports_incremental(self) -> bool:
        return self._incremental

    def build(self, candidates: Sequence[str]) -> str:
        self.calls.append(("full", list(candidates)))
        self.emitted = []
        self._append(candidates)
        return self._render()

    def build_incremental(self, candidates: Sequence[str]) -> str:
        self.calls.append(("incremental", list(candidates)))
        self._append(candidates)
        return self._render()

    def _append(self, candidates: Sequence[str]) -> None:
        for token in candidates:
            if token in UTILITIES and token not in self.emitted:
                self.emitted.append(token)

    def _render(self) -> str:
        return "".join(rule(token) for token in self.emitted)


class FakeEngine(CompilerEngine):
    """Records every compile call; can be told to fail."""

    def __init__(self, globs: list[str] | None = None, incremental: bool = True) -> None:
        self.globs = globs if globs is not None else ["./src/**/*.html"]
        self.incremental = incremental
        self.handles: list[FakeHandle] = []
        self.plugin_hooks: list[PluginHook] = []
        self.fail_with: Exception | None = None

    def compile(self, css: str, load_plugin: PluginHook) -> FakeHandle:
        if self.fail_with is not None:
            raise self.fail_with
        self.plugin_hooks.append(load_plugin)
        handle = FakeHandle(css, self.globs, self.incremental)
        self.handles.append(handle)
        return handle


@dataclass
class FakeScanner(ContentScanner):
    """Returns a configurable scan result and records its inputs."""

    files: list[str] = field(default_factory=list)
    candidates: list[str] = field(default_factory=list)
    calls: list[tuple[str, list[SourceEntry]]] = field(default_factory=list)
    fail_with: Exception | None = None

    def scan(self, base: str, sources: Sequence[SourceEntry]) -> ScanResult:
        if self.fail_with is not None:
            raise self.fail_with
        self.calls.append((base, list(sources)))
        return ScanResult(
            files=list(self.files),
            globs=list(sources),
            candidates=list(self.candidates),
        )


@dataclass
class FakeOptimizer(Optimizer):
    """Upper-cases CSS and strips newlines when minifying."""

    calls: list[tuple[str, OptimizeOptions]] = field(default_factory=list)
    fail_with: Exception | None = None

    def optimize(self, css: str, options: OptimizeOptions) -> str:
        if self.fail_with is not None:
            raise self.fail_with
        self.calls.append((css, options))
        out = css.upper()
        return out.replace("\n", "") if options.minify else out
