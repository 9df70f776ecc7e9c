"""Custom exception hierarchy for cssforge.

All public errors inherit from CSSForgeError so callers can catch the base
class for any cssforge-specific failure.
"""
from __future__ import annotations


class CSSForgeError(Exception):
    """Base exception for all cssforge errors."""


class ConfigError(CSSForgeError):
    """Raised when stage options are invalid.

    Args:
        message: Human-readable description.
        field: Name of the offending option, when known.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class MissingInputError(CSSForgeError):
    """Raised when the primary stylesheet vanished before a compiler could be created.

    Args:
        path: Absolute path of the missing stylesheet.
    """

    def __init__(self, path: str) -> None:
        super().__init__(f"Input stylesheet '{path}' does not exist.")
        self.path = path


class CompilerConstructionError(CSSForgeError):
    """Raised when the CSS engine cannot compile the stylesheet source.

    Args:
        message: Human-readable description.
        input_file: The stylesheet being compiled (``""`` for piped input).
    """

    def __init__(self, message: str, input_file: str | None = None) -> None:
        super().__init__(message)
        self.input_file = input_file


class PluginLoadError(CompilerConstructionError):
    """Raised when an engine plugin specifier cannot be resolved.

    Args:
        specifier: The specifier exactly as the engine requested it.
        base_dir: Directory that relative specifiers resolve against.
        reason: Why resolution failed.
    """

    def __init__(self, specifier: str, base_dir: str, reason: str) -> None:
        super().__init__(f"Cannot load plugin '{specifier}' from '{base_dir}': {reason}")
        self.specifier = specifier
        self.base_dir = base_dir
        self.reason = reason


class BuildError(CSSForgeError):
    """Raised when a compiler handle fails to build CSS.

    Args:
        message: Human-readable description.
        strategy: ``'full'`` or ``'incremental'``.
    """

    def __init__(self, message: str, strategy: str | None = None) -> None:
        super().__init__(message)
        self.strategy = strategy


class ScannerError(CSSForgeError):
    """Raised when the content scanner fails; there is no partial fallback."""


class OptimizerError(CSSForgeError):
    """Raised when the optimizer fails despite running in error-recovery mode."""


class EngineNotFoundError(CSSForgeError):
    """Raised when no engine is registered under the requested name.

    Args:
        kind: Engine kind (``'compiler'``, ``'scanner'`` or ``'optimizer'``).
        name: The requested name.
        registered: Names currently registered for ``kind``.
    """

    def __init__(self, kind: str, name: str, registered: list[str]) -> None:
        super().__init__(
            f"Unknown {kind} engine: '{name}'. Registered {kind} engines: {registered}."
        )
        self.kind = kind
        self.name = name
        self.registered = registered
