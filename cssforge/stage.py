"""The utility-CSS build stage.

``UtilityStage`` is what a host build tool holds on to for the whole session.
Each call to :meth:`UtilityStage.process` is one invocation: detect
directives, decide full vs incremental, then let the orchestrator produce
the replacement tree.
"""
from __future__ import annotations

import logging
import os
from typing import Any

from cssforge.cache.registry import ContextRegistry
from cssforge.config import StageOptions
from cssforge.engine.base import CompilerEngine, ContentScanner, Optimizer
from cssforge.errors import ConfigError
from cssforge.rebuild.directives import DirectiveDetector
from cssforge.rebuild.orchestrator import RebuildOrchestrator
from cssforge.rebuild.strategy import RebuildStrategist, RebuildStrategy, StatFn
from cssforge.stylesheet import ParseOptions, Result, Root, parse_css

logger = logging.getLogger(__name__)


class UtilityStage:
    """Turns stylesheets with utility directives into final CSS, incrementally.

    Args:
        engine: Compiler engine used to create handles.
        scanner: Content scanner producing candidate tokens.
        optimizer: Optimizer; required when optimization is enabled.
        options: Stage options; defaults to ``StageOptions()``.
        registry: Context cache; a private one is created when omitted.
        stat: Timestamp function forwarded to the strategist.

    Raises:
        ConfigError: If optimization is enabled but no optimizer is given.
    """

    def __init__(
        self,
        engine: CompilerEngine,
        scanner: ContentScanner,
        optimizer: Optimizer | None = None,
        options: StageOptions | None = None,
        registry: ContextRegistry | None = None,
        stat: StatFn | None = None,
    ) -> None:
        self.options = options or StageOptions()
        if self.options.optimize_enabled and optimizer is None:
            raise ConfigError("Optimization is enabled but no optimizer was given.", field="optimize")

        self.registry = registry if registry is not None else ContextRegistry()
        self.last_strategy: RebuildStrategy | None = None
        self._detector = DirectiveDetector()
        self._strategist = RebuildStrategist(stat)
        self._orchestrator = RebuildOrchestrator(engine, scanner, optimizer, self.options)

    def process(self, root: Root, result: Result) -> Root:
        """Run one invocation for ``root``.

        Args:
            root: Parsed stylesheet, with upstream plugins already applied.
            result: Host result carrying upstream ``dependency`` messages.
                This stage appends its own watch edges to it.

        Returns:
            The output tree: ``root`` itself if it contains no directive,
            otherwise a replacement tree.
        """
        from_path = result.opts.from_path
        identity = os.path.abspath(from_path) if from_path else ""
        context = self.registry.get(identity)

        flags = self._detector.detect(root)
        strategy = self._strategist.decide(result.dependency_files(), context.ledger, identity)
        self.last_strategy = strategy
        logger.debug(
            "%s: apply=%s tailwind=%s strategy=%s",
            identity or "<stdin>", flags.has_apply, flags.has_tailwind, strategy.value,
        )

        return self._orchestrator.run(
            root,
            result,
            context,
            flags,
            strategy,
            input_missing=self._strategist.last_input_missing,
        )

    def process_css(
        self,
        css: str,
        from_path: str | None = None,
        messages: list[Any] | None = None,
    ) -> tuple[str, Result]:
        """Parse ``css``, run one invocation and serialize the output.

        Args:
            css: Stylesheet source.
            from_path: Path of the stylesheet, if any.
            messages: Upstream messages (e.g. import ``dependency`` entries).

        Returns:
            ``(output_css, result)``; ``result.messages`` holds the watch edges.
        """
        opts = ParseOptions(from_path=from_path)
        result = Result(opts=opts, messages=list(messages or []))
        root = self.process(parse_css(css, opts), result)
        return root.to_css(), result
