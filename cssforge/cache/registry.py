"""Context registry: one :class:`BuildContext` per input identity.

The registry is an owned object, normally held by a
:class:`~cssforge.stage.UtilityStage`, and lives as long as that stage does.
Contexts are created lazily on first sight and never evicted; a build-tool
session only ever sees a handful of stylesheets.

Usage::

    registry = ContextRegistry()
    ctx = registry.get("/app/src/main.css")
    assert registry.get("/app/src/main.css") is ctx
"""

from __future__ import annotations

import logging
from collections.abc import Callable, MutableMapping
from typing import TypeVar

from cssforge.cache.context import BuildContext

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")


def get_or_insert(mapping: MutableMapping[K, V], key: K, factory: Callable[[K], V]) -> V:
    """Return ``mapping[key]``, inserting ``factory(key)`` first if it is absent.

    Args:
        mapping: The mapping to read from and insert into.
        key: Lookup key.
        factory: Called with ``key`` to build the missing value.

    Returns:
        The existing or freshly inserted value.
    """
    try:
        return mapping[key]
    except KeyError:
        value = factory(key)
        mapping[key] = value
        return value


class ContextRegistry:
    """Maps input identities to their :class:`BuildContext`."""

    def __init__(self) -> None:
        self._contexts: dict[str, BuildContext] = {}

    def get(self, identity: str) -> BuildContext:
        """Return the context for ``identity``, creating an empty one if needed."""
        return get_or_insert(self._contexts, identity, self._create)

    def identities(self) -> list[str]:
        """Return the identities seen so far, in first-seen order."""
        return list(self._contexts)

    def __contains__(self, identity: object) -> bool:
        return identity in self._contexts

    def __len__(self) -> int:
        return len(self._contexts)

    @staticmethod
    def _create(identity: str) -> BuildContext:
        logger.debug("Creating build context for %r", identity)
        return BuildContext(identity=identity)
