"""cssforge cache layer: per-input build contexts and timestamp ledgers."""
from cssforge.cache.context import BuildContext
from cssforge.cache.ledger import TimestampLedger
from cssforge.cache.registry import ContextRegistry, get_or_insert

__all__ = [
    "BuildContext",
    "ContextRegistry",
    "TimestampLedger",
    "get_or_insert",
]
