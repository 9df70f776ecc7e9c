"""Rebuild strategist: full vs incremental, decided from file timestamps.

Any detectable change to a contributing file (the input itself or anything
it imports) invalidates the compiler handle, because the engine may have
baked that content into its state.  Timestamp equality counts as
"unchanged".
"""
from __future__ import annotations

import enum
import logging
import os
from collections.abc import Callable, Iterable

from cssforge.cache.ledger import TimestampLedger

logger = logging.getLogger(__name__)

#: Returns the modification time of a path in nanoseconds.
StatFn = Callable[[str], int]


def _mtime_ns(path: str) -> int:
    return os.stat(path).st_mtime_ns


class RebuildStrategy(str, enum.Enum):
    FULL = "full"
    INCREMENTAL = "incremental"


class RebuildStrategist:
    """Compares current timestamps against a ledger and updates it.

    Args:
        stat: Callable returning a path's modification time; raises
            ``FileNotFoundError`` for missing files.  Defaults to
            ``os.stat(path).st_mtime_ns``.
    """

    def __init__(self, stat: StatFn | None = None) -> None:
        self._stat = stat or _mtime_ns
        self.last_input_missing = False

    def decide(
        self,
        files: Iterable[str],
        ledger: TimestampLedger,
        input_file: str,
    ) -> RebuildStrategy:
        """Classify the current invocation.

        Args:
            files: Dependency files reported by upstream parsing.  The input
                file is appended automatically.
            ledger: The build context's ledger; updated in place.
            input_file: Absolute path of the stylesheet (``""`` if unknown).

        Returns:
            ``RebuildStrategy.FULL`` if any file is new, changed, or the input
            is missing; otherwise ``RebuildStrategy.INCREMENTAL``.
        """
        strategy = RebuildStrategy.INCREMENTAL
        self.last_input_missing = False

        for path in [*(os.path.abspath(f) for f in files if f), input_file]:
            try:
                mtime = self._stat(path) if path else None
            except (FileNotFoundError, NotADirectoryError):
                mtime = None

            if mtime is None:
                if path == input_file:
                    logger.debug("Input %r not found, forcing full rebuild", path)
                    self.last_input_missing = True
                    strategy = RebuildStrategy.FULL
                continue

            if ledger.record(path, mtime):
                logger.debug("%s changed (mtime=%d)", path, mtime)
                strategy = RebuildStrategy.FULL

        return strategy
