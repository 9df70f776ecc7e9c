"""cssforge - incremental utility-CSS build stage.

Compile once, append forever.

Public API
----------
``UtilityStage``
    The stage a host build tool keeps for its whole session.  Each
    ``process(root, result)`` call decides between a full and an incremental
    rebuild, runs the delegated engines, and reports watch edges.

``create_stage``
    Build a ``UtilityStage`` from registered engine names and plain options.

Re-exported types
-----------------
Engine ABCs (``CompilerEngine``, ``CompilerHandle``, ``ContentScanner``,
``Optimizer``), host types (``Root``, ``Result``, ``ParseOptions`` and the
dependency messages), options, cache types, and all error classes.

Extensibility
-------------
Engines are registered via::

    from cssforge.engine.registry import EngineRegistry

    @EngineRegistry.register("compiler", "acme")
    class AcmeEngine(CompilerEngine):
        ...

After registration, ``create_stage(compiler="acme", ...)`` and the
``cssforge build --compiler acme`` command pick it up.
"""

from __future__ import annotations

from typing import Any

from cssforge.cache.context import BuildContext
from cssforge.cache.ledger import TimestampLedger
from cssforge.cache.registry import ContextRegistry, get_or_insert
from cssforge.config import ForgeSettings, OptimizeSettings, StageOptions
from cssforge.engine.base import (
    CompilerEngine,
    CompilerHandle,
    ContentScanner,
    Optimizer,
    ScanResult,
    SourceEntry,
)
from cssforge.engine.optimizer import OptimizeOptions, optimize_css
from cssforge.engine.plugins import PluginLoader
from cssforge.engine.registry import EngineRegistry
from cssforge.errors import (
    BuildError,
    CompilerConstructionError,
    ConfigError,
    CSSForgeError,
    EngineNotFoundError,
    MissingInputError,
    OptimizerError,
    PluginLoadError,
    ScannerError,
)
from cssforge.rebuild.directives import DirectiveDetector, DirectiveFlags
from cssforge.rebuild.orchestrator import PLUGIN_NAME, RebuildOrchestrator
from cssforge.rebuild.strategy import RebuildStrategist, RebuildStrategy
from cssforge.stage import UtilityStage
from cssforge.stylesheet import (
    DependencyMessage,
    DirDependencyMessage,
    ParseOptions,
    Result,
    Root,
    parse_css,
)

__all__ = [
    # Core pipeline
    "UtilityStage",
    "create_stage",
    "PLUGIN_NAME",
    # Host surface
    "Root",
    "Result",
    "ParseOptions",
    "DependencyMessage",
    "DirDependencyMessage",
    "parse_css",
    # Options
    "StageOptions",
    "OptimizeSettings",
    "ForgeSettings",
    # Cache
    "BuildContext",
    "ContextRegistry",
    "TimestampLedger",
    "get_or_insert",
    # Rebuild
    "DirectiveDetector",
    "DirectiveFlags",
    "RebuildStrategist",
    "RebuildStrategy",
    "RebuildOrchestrator",
    # Engines
    "CompilerEngine",
    "CompilerHandle",
    "ContentScanner",
    "Optimizer",
    "ScanResult",
    "SourceEntry",
    "OptimizeOptions",
    "optimize_css",
    "PluginLoader",
    "EngineRegistry",
    # Errors
    "CSSForgeError",
    "ConfigError",
    "MissingInputError",
    "CompilerConstructionError",
    "PluginLoadError",
    "BuildError",
    "ScannerError",
    "OptimizerError",
    "EngineNotFoundError",
]


def create_stage(
    compiler: str,
    scanner: str,
    optimizer: str | None = None,
    options: dict[str, Any] | None = None,
    registry: ContextRegistry | None = None,
) -> UtilityStage:
    """Create a :class:`UtilityStage` from engine names and plain options.

    Example::

        stage = cssforge.create_stage(
            compiler="acme",
            scanner="acme",
            optimizer="acme",
            options={"base": "/app", "optimize": {"minify": True}},
        )
        css, result = stage.process_css(source, from_path="/app/src/main.css")

    Args:
        compiler: Registered compiler engine name or ``module:attr`` spec.
        scanner: Registered content scanner name or ``module:attr`` spec.
        optimizer: Registered optimizer name or spec; required when
            optimization ends up enabled.
        options: Raw stage options (``base``, ``optimize``).
        registry: Shared context cache; a private one is created if omitted.

    Returns:
        A ready-to-use ``UtilityStage``.

    Raises:
        ConfigError: If ``options`` are invalid or optimization lacks an optimizer.
        EngineNotFoundError: If an engine name cannot be resolved.
    """
    stage_options = StageOptions.from_mapping(options)
    return UtilityStage(
        engine=EngineRegistry.create("compiler", compiler),
        scanner=EngineRegistry.create("scanner", scanner),
        optimizer=EngineRegistry.create("optimizer", optimizer) if optimizer else None,
        options=stage_options,
        registry=registry,
    )
