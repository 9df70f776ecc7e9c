"""Build context value object.

Packages everything one input stylesheet needs across invocations: the
timestamp ledger, the engine's compiler handle and the last produced CSS.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from cssforge.cache.ledger import TimestampLedger
from cssforge.engine.base import CompilerHandle


@dataclass
class BuildContext:
    """Mutable per-input state that survives between invocations.

    Attributes:
        identity: Absolute path of the input stylesheet (``""`` when unknown).
        ledger: Last seen modification time of every contributing file.
        compiler: Engine handle owned by this context; ``None`` until first
            created.  Replaced wholesale on a full rebuild.
        raw_css: Last CSS produced by the compiler handle.
        optimized_css: Optimizer output for ``raw_css``; only meaningful while
            optimization is enabled.
    """

    identity: str = ""
    ledger: TimestampLedger = field(default_factory=TimestampLedger)
    compiler: CompilerHandle | None = None
    raw_css: str = ""
    optimized_css: str = ""
