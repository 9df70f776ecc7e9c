"""cssforge rebuild layer: directive detection, rebuild decision, orchestration."""
from cssforge.rebuild.directives import DirectiveDetector, DirectiveFlags
from cssforge.rebuild.orchestrator import PLUGIN_NAME, RebuildOrchestrator
from cssforge.rebuild.strategy import RebuildStrategist, RebuildStrategy

__all__ = [
    "PLUGIN_NAME",
    "DirectiveDetector",
    "DirectiveFlags",
    "RebuildOrchestrator",
    "RebuildStrategist",
    "RebuildStrategy",
]
