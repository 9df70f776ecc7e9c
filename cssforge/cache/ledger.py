"""Per-file modification-time ledger.

Entries are only ever added or overwritten, never removed, even when the file
later disappears.  Timestamps are ``st_mtime_ns`` integers; two writes inside
one timestamp tick cannot be told apart, which is accepted.
"""
from __future__ import annotations

from collections.abc import Iterator


class TimestampLedger:
    """Maps absolute file paths to their last observed modification time."""

    def __init__(self) -> None:
        self._mtimes: dict[str, int] = {}

    def get(self, path: str) -> int | None:
        """Return the stored timestamp for ``path``, or ``None`` if never seen."""
        return self._mtimes.get(path)

    def record(self, path: str, mtime: int) -> bool:
        """Store ``mtime`` for ``path``.

        Args:
            path: Absolute file path.
            mtime: Current modification time in nanoseconds.

        Returns:
            ``True`` if the entry was new or differed from the stored value.
        """
        if self._mtimes.get(path) == mtime:
            return False
        self._mtimes[path] = mtime
        return True

    def __contains__(self, path: object) -> bool:
        return path in self._mtimes

    def __len__(self) -> int:
        return len(self._mtimes)

    def __iter__(self) -> Iterator[str]:
        return iter(self._mtimes)

    def as_dict(self) -> dict[str, int]:
        """Return a copy of the ledger contents."""
        return dict(self._mtimes)
