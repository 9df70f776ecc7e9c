"""Plugin resolution hook handed to compiler engines.

Stylesheets may reference engine plugins.  Specifiers beginning with ``.``
are paths relative to the stylesheet's directory; anything else is a module
name resolved through the normal import system.  A ``module:attr`` suffix
selects an attribute of the imported module::

    load = PluginLoader("/app/src/styles")
    load("./plugins/forms")          # /app/src/styles/plugins/forms.py
    load("acme_plugins.typography")  # importlib.import_module(...)
    load("acme_plugins:typography")  # getattr(acme_plugins, "typography")
"""

from __future__ import annotations

import hashlib
import importlib
import importlib.util
import logging
import os
from types import ModuleType
from typing import Any, ClassVar

from cssforge.errors import PluginLoadError

logger = logging.getLogger(__name__)


class PluginLoader:
    """Callable resolving plugin specifiers against ``base_dir``.

    Args:
        base_dir: Directory that relative specifiers resolve against.
    """

    # Modules loaded from files, keyed by absolute path, shared by all loaders.
    _file_modules: ClassVar[dict[str, ModuleType]] = {}

    def __init__(self, base_dir: str) -> None:
        self.base_dir = base_dir

    def __call__(self, specifier: str) -> Any:
        if not specifier:
            raise PluginLoadError(specifier, self.base_dir, "empty specifier")
        if specifier.startswith("."):
            return self._load_file(specifier)
        return self._load_module(specifier)

    # ------------------------------------------------------------------
    # Relative specifiers
    # ------------------------------------------------------------------

    def _load_file(self, specifier: str) -> ModuleType:
        path = self._resolve_path(specifier)
        cached = self._file_modules.get(path)
        if cached is not None:
            return cached

        digest = hashlib.sha1(path.encode("utf-8")).hexdigest()[:12]
        spec = importlib.util.spec_from_file_location(f"cssforge_plugin_{digest}", path)
        if spec is None or spec.loader is None:
            raise PluginLoadError(specifier, self.base_dir, f"'{path}' is not importable")

        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception as exc:
            raise PluginLoadError(specifier, self.base_dir, str(exc)) from exc

        logger.debug("Loaded plugin %s from %s", specifier, path)
        self._file_modules[path] = module
        return module

    def _resolve_path(self, specifier: str) -> str:
        target = os.path.normpath(os.path.join(self.base_dir, specifier))
        for candidate in (target, f"{target}.py", os.path.join(target, "__init__.py")):
            if os.path.isfile(candidate):
                return candidate
        raise PluginLoadError(specifier, self.base_dir, f"no such file '{target}'")

    # ------------------------------------------------------------------
    # Module specifiers
    # ------------------------------------------------------------------

    def _load_module(self, specifier: str) -> Any:
        module_name, _, attr = specifier.partition(":")
        try:
            module = importlib.import_module(module_name)
        except ImportError as exc:
            raise PluginLoadError(specifier, self.base_dir, str(exc)) from exc

        if not attr:
            return module
        try:
            return getattr(module, attr)
        except AttributeError as exc:
            raise PluginLoadError(
                specifier, self.base_dir, f"module '{module_name}' has no attribute '{attr}'"
            ) from exc
