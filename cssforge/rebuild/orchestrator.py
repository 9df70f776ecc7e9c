"""Rebuild orchestration: scan, compile, optimize, and replace the tree.

``RebuildOrchestrator`` is the only component that talks to the engines and
the only one that reports watch edges to the host.  It runs once per
invocation, after directive detection and the rebuild decision.

Steps
-----
1. No directives: return the input tree untouched.
2. Resolve the compiler handle (fresh on a full rebuild or first use).
3. Scan content using the handle's globs, relative to the stylesheet.
4. Report every scanned file as a ``dependency``.
5. Report every normalised glob as a ``dir-dependency``.
6. Build: full build, or incremental append on the reused handle.
7. Re-optimize when the raw CSS changed and optimization is on.
8. Return a replacement tree parsed from the final CSS.
"""

from __future__ import annotations

import logging
import os

from cssforge.cache.context import BuildContext
from cssforge.config import StageOptions
from cssforge.engine.base import (
    CompilerEngine,
    CompilerHandle,
    ContentScanner,
    Optimizer,
    ScanResult,
    SourceEntry,
)
from cssforge.engine.optimizer import optimize_css
from cssforge.engine.plugins import PluginLoader
from cssforge.errors import (
    BuildError,
    CompilerConstructionError,
    CSSForgeError,
    MissingInputError,
    ScannerError,
)
from cssforge.rebuild.directives import DirectiveFlags
from cssforge.rebuild.strategy import RebuildStrategy
from cssforge.stylesheet import (
    DependencyMessage,
    DirDependencyMessage,
    Result,
    Root,
    parse_css,
)

logger = logging.getLogger(__name__)

#: Identifier attached to every message this stage emits.
PLUGIN_NAME = "cssforge"


class RebuildOrchestrator:
    """Coordinates scanner, compiler engine and optimizer for one stylesheet.

    Args:
        engine: Creates compiler handles from stylesheet source.
        scanner: Finds candidate tokens in project files.
        optimizer: Used when ``options.optimize_enabled``; may be ``None``
            otherwise.
        options: Stage options (``base`` and ``optimize``).
    """

    def __init__(
        self,
        engine: CompilerEngine,
        scanner: ContentScanner,
        optimizer: Optimizer | None,
        options: StageOptions,
    ) -> None:
        self._engine = engine
        self._scanner = scanner
        self._optimizer = optimizer
        self._options = options

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(
        self,
        root: Root,
        result: Result,
        context: BuildContext,
        flags: DirectiveFlags,
        strategy: RebuildStrategy,
        input_missing: bool = False,
    ) -> Root:
        """Produce the output tree for one invocation.

        Args:
            root: The parsed input stylesheet.
            result: Host result; watch edges are appended to its messages.
            context: The input's build context; mutated in place.
            flags: Directives found in ``root``.
            strategy: The rebuild decision for this invocation.
            input_missing: Whether the strategist could not find the input.

        Returns:
            ``root`` itself when no directive is present, otherwise a new
            :class:`Root` with the generated CSS and ``root``'s options.

        Raises:
            MissingInputError: A handle must be created for an input path
                that no longer exists.
            CompilerConstructionError: The engine rejected the source.
            ScannerError: The content scanner failed.
            BuildError: The handle failed to build.
            OptimizerError: The optimizer failed.
        """
        if not flags.any:
            return root

        input_dir = os.path.dirname(context.identity) if context.identity else os.getcwd()

        handle = self._resolve_handle(root, context, strategy, input_dir, input_missing)
        scan = self._scan(handle, input_dir)
        self._report_dependencies(scan, result)
        css = self._build(handle, strategy, flags, scan.candidates)

        output = self._finalize(css, context, root)
        return parse_css(output, root.opts)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _resolve_handle(
        self,
        root: Root,
        context: BuildContext,
        strategy: RebuildStrategy,
        input_dir: str,
        input_missing: bool,
    ) -> CompilerHandle:
        """Return the handle to build with, replacing it on a full rebuild.

        A context without a handle always gets a fresh one; the decision only
        selects which build operation runs on it afterwards.
        """
        if strategy is RebuildStrategy.FULL or context.compiler is None:
            if input_missing and context.identity:
                raise MissingInputError(context.identity)
            context.compiler = self._create_compiler(root, context.identity, input_dir)
        return context.compiler

    def _create_compiler(self, root: Root, identity: str, input_dir: str) -> CompilerHandle:
        logger.info("Creating compiler for %s", identity or "<stdin>")
        try:
            return self._engine.compile(root.to_css(), PluginLoader(input_dir))
        except CSSForgeError:
            raise
        except Exception as exc:
            raise CompilerConstructionError(
                f"Cannot compile '{identity or '<stdin>'}': {exc}", input_file=identity
            ) from exc

    def _scan(self, handle: CompilerHandle, input_dir: str) -> ScanResult:
        # Globs are relative to the stylesheet, not the process root.
        sources = [SourceEntry(base=input_dir, pattern=pattern) for pattern in handle.globs]
        try:
            scan = self._scanner.scan(self._options.base, sources)
        except CSSForgeError:
            raise
        except Exception as exc:
            raise ScannerError(f"Content scan of '{self._options.base}' failed: {exc}") from exc
        logger.debug(
            "Scanned %d files, %d globs, %d candidates",
            len(scan.files), len(scan.globs), len(scan.candidates),
        )
        return scan

    def _report_dependencies(self, scan: ScanResult, result: Result) -> None:
        parent = result.opts.from_path
        for file in scan.files:
            result.messages.append(DependencyMessage(plugin=PLUGIN_NAME, file=file, parent=parent))
        for entry in scan.globs:
            result.messages.append(
                DirDependencyMessage(
                    plugin=PLUGIN_NAME, dir=entry.base, glob=entry.pattern, parent=parent
                )
            )

    def _build(
        self,
        handle: CompilerHandle,
        strategy: RebuildStrategy,
        flags: DirectiveFlags,
        candidates: list[str],
    ) -> str:
        try:
            if strategy is RebuildStrategy.FULL:
                # An apply-only stylesheet still needs a pass to resolve the
                # applies, but contributes no utilities of its own.
                return handle.build(candidates if flags.has_tailwind else [])
            if handle.supports_incremental:
                return handle.build_incremental(candidates)
            return handle.build(candidates)
        except CSSForgeError:
            raise
        except Exception as exc:
            raise BuildError(f"{strategy.value} build failed: {exc}", strategy=strategy.value) from exc

    def _finalize(self, css: str, context: BuildContext, root: Root) -> str:
        if not self._options.optimize_enabled:
            if css != context.raw_css:
                context.optimized_css = ""
            context.raw_css = css
            return css

        if css != context.raw_css or not context.optimized_css:
            filename = os.path.basename(root.opts.from_path) if root.opts.from_path else "input.css"
            context.optimized_css = optimize_css(
                self._optimizer, css, filename=filename, minify=self._options.minify
            )
        context.raw_css = css
        return context.optimized_css
