"""Engine registry (Open/Closed Principle).

Concrete compiler engines, content scanners and optimizers live outside
cssforge.  This registry lets them be registered once under a short name and
looked up by the CLI or by application code without editing cssforge.

Usage::

    from cssforge.engine.registry import EngineRegistry

    @EngineRegistry.register("compiler", "acme")
    class AcmeEngine(CompilerEngine):
        ...

    engine = EngineRegistry.create("compiler", "acme")

Names that are not registered but look like ``module:attr`` are imported
and called, so ``EngineRegistry.create("scanner", "acme.scan:Scanner")``
works without prior registration.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import Any, ClassVar, Literal

from cssforge.engine.base import CompilerEngine, ContentScanner, Optimizer
from cssforge.engine.plugins import PluginLoader
from cssforge.errors import EngineNotFoundError, PluginLoadError

EngineKind = Literal["compiler", "scanner", "optimizer"]

_EXPECTED: dict[str, type] = {
    "compiler": CompilerEngine,
    "scanner": ContentScanner,
    "optimizer": Optimizer,
}


class EngineRegistry:
    """Registry mapping ``(kind, name)`` to zero-argument engine factories."""

    _factories: ClassVar[dict[str, dict[str, Callable[[], Any]]]] = {
        kind: {} for kind in _EXPECTED
    }

    @classmethod
    def register(cls, kind: EngineKind, name: str) -> Callable[[type], type]:
        """Decorator that registers an engine class under ``name``.

        Args:
            kind: ``'compiler'``, ``'scanner'`` or ``'optimizer'``.
            name: Short lookup name.

        Returns:
            A decorator that registers and returns the class.
        """

        def decorator(engine_cls: type) -> type:
            cls.register_factory(kind, name, engine_cls)
            return engine_cls

        return decorator

    @classmethod
    def register_factory(cls, kind: EngineKind, name: str, factory: Callable[[], Any]) -> None:
        """Register a class or zero-argument callable without the decorator form."""
        cls._kind(kind)[name] = factory

    @classmethod
    def unregister(cls, kind: EngineKind, name: str) -> None:
        """Remove ``name``; unknown names are ignored."""
        cls._kind(kind).pop(name, None)

    @classmethod
    def create(cls, kind: EngineKind, name: str) -> Any:
        """Instantiate the engine registered (or importable) as ``name``.

        Args:
            kind: Engine kind.
            name: Registered name, or a ``module:attr`` import spec.

        Returns:
            An engine instance of the expected base class.

        Raises:
            EngineNotFoundError: If ``name`` is neither registered nor importable.
            TypeError: If the factory produced an object of the wrong kind.
        """
        factory = cls._kind(kind).get(name)
        if factory is None:
            if ":" not in name:
                raise EngineNotFoundError(kind, name, cls.registered(kind))
            try:
                factory = PluginLoader(os.getcwd())(name)
            except PluginLoadError as exc:
                raise EngineNotFoundError(kind, name, cls.registered(kind)) from exc

        engine = factory() if callable(factory) and not isinstance(factory, _EXPECTED[kind]) else factory
        if not isinstance(engine, _EXPECTED[kind]):
            raise TypeError(
                f"{kind} engine '{name}' produced {type(engine).__name__}, "
                f"expected a {_EXPECTED[kind].__name__}"
            )
        return engine

    @classmethod
    def registered(cls, kind: EngineKind) -> list[str]:
        """Return the sorted list of names registered for ``kind``."""
        return sorted(cls._kind(kind))

    @classmethod
    def _kind(cls, kind: str) -> dict[str, Callable[[], Any]]:
        try:
            return cls._factories[kind]
        except KeyError:
            raise ValueError(f"Unknown engine kind: '{kind}'") from None
