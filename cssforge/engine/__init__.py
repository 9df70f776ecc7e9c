"""cssforge engine boundary: compiler, scanner and optimizer abstractions."""
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

__all__ = [
    "CompilerEngine",
    "CompilerHandle",
    "ContentScanner",
    "EngineRegistry",
    "OptimizeOptions",
    "Optimizer",
    "PluginLoader",
    "ScanResult",
    "SourceEntry",
    "optimize_css",
]
