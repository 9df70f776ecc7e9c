"""Engine abstractions: the boundary with the three delegated engines.

cssforge generates no CSS itself.  A :class:`CompilerEngine` turns stylesheet
source into a stateful :class:`CompilerHandle`, a :class:`ContentScanner`
finds candidate class names in project files, and an :class:`Optimizer`
lowers and minifies the result.  Concrete engines subclass these ABCs and
are usually made available through
:class:`~cssforge.engine.registry.EngineRegistry`.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from cssforge.engine.optimizer import OptimizeOptions

#: Hook handed to :meth:`CompilerEngine.compile` for loading engine plugins.
PluginHook = Callable[[str], Any]


@dataclass(frozen=True)
class SourceEntry:
    """A glob pattern together with the directory it is relative to.

    Attributes:
        base: Absolute directory the pattern is interpreted against.
        pattern: Glob pattern (e.g. ``'./src/**/*.html'``).
    """

    base: str
    pattern: str


@dataclass
class ScanResult:
    """The output of one content scan.

    Attributes:
        files: Concrete files that were read while scanning.
        globs: Normalised glob entries the host should watch.
        candidates: Candidate class-name tokens extracted from the files.
    """

    files: list[str] = field(default_factory=list)
    globs: list[SourceEntry] = field(default_factory=list)
    candidates: list[str] = field(default_factory=list)


class CompilerHandle(ABC):
    """A compiled stylesheet able to generate CSS for candidate tokens.

    A handle is stateful: it remembers every candidate it has emitted rules
    for.  It is owned by exactly one build context and replaced, never
    patched, on a full rebuild.
    """

    @property
    @abstractmethod
    def globs(self) -> list[str]:
        """Glob patterns, relative to the stylesheet, that should be scanned."""

    @abstractmethod
    def build(self, candidates: Sequence[str]) -> str:
        """Generate the complete CSS for ``candidates``.

        Args:
            candidates: Candidate class-name tokens.

        Returns:
            Complete CSS text.
        """

    @property
    def supports_incremental(self) -> bool:
        """Whether :meth:`build_incremental` is implemented."""
        return False

    def build_incremental(self, candidates: Sequence[str]) -> str:
        """Append rules for candidates this handle has not seen yet.

        Rules emitted earlier in the handle's lifetime stay untouched and in
        their original order.

        Args:
            candidates: Candidate tokens found by the latest scan.

        Returns:
            Updated complete CSS text.
        """
        raise NotImplementedError(f"{type(self).__name__} does not support incremental builds")


class CompilerEngine(ABC):
    """Creates :class:`CompilerHandle` instances from stylesheet source."""

    @abstractmethod
    def compile(self, css: str, load_plugin: PluginHook) -> CompilerHandle:
        """Compile ``css`` into a fresh handle.

        Args:
            css: Serialized stylesheet source.
            load_plugin: Resolves plugin specifiers referenced by the source.

        Returns:
            A new :class:`CompilerHandle`.
        """


class ContentScanner(ABC):
    """Finds candidate class names in project files."""

    @abstractmethod
    def scan(self, base: str, sources: Sequence[SourceEntry]) -> ScanResult:
        """Scan ``base`` (auto-detection) and every source entry.

        Args:
            base: Root directory used for automatic content detection.
            sources: Explicit glob entries declared by the stylesheet.

        Returns:
            A :class:`ScanResult`.
        """


class Optimizer(ABC):
    """Transforms generated CSS (nesting, vendor targets, minification)."""

    @abstractmethod
    def optimize(self, css: str, options: OptimizeOptions) -> str:
        """Return the transformed ``css``.

        Implementations must honour ``options.error_recovery`` by skipping
        malformed fragments instead of failing the whole pass.
        """
