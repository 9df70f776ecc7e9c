"""Optimizer glue: the fixed transformation profile applied to generated CSS."""
from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field

from cssforge.engine.base import Optimizer
from cssforge.errors import CSSForgeError, OptimizerError

logger = logging.getLogger(__name__)

#: Safari 16.4 encoded as ``major << 16 | minor << 8 | patch``.
SAFARI_16_4: int = (16 << 16) | (4 << 8)


class OptimizeOptions(BaseModel):
    """Options forwarded to an :class:`~cssforge.engine.base.Optimizer`.

    Only ``filename`` and ``minify`` vary between calls; everything else is
    the fixed profile for generated utility CSS.

    Attributes:
        filename: Name reported in optimizer diagnostics.
        minify: Minify the output.
        source_map: Emit a source map (always off).
        include: Features always lowered (nesting is flattened).
        exclude: Features never lowered (logical properties are kept).
        targets: Minimum browser baseline.
        drafts: Draft syntax to accept.
        non_standard: Non-standard syntax to accept.
        error_recovery: Skip malformed fragments instead of aborting.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    filename: str = "input.css"
    minify: bool = False
    source_map: bool = False
    include: frozenset[str] = Field(default_factory=lambda: frozenset({"nesting"}))
    exclude: frozenset[str] = Field(default_factory=lambda: frozenset({"logical-properties"}))
    targets: dict[str, int] = Field(default_factory=lambda: {"safari": SAFARI_16_4})
    drafts: frozenset[str] = Field(default_factory=lambda: frozenset({"custom-media"}))
    non_standard: frozenset[str] = Field(
        default_factory=lambda: frozenset({"deep-selector-combinator"})
    )
    error_recovery: bool = True


def optimize_css(
    optimizer: Optimizer,
    css: str,
    *,
    filename: str = "input.css",
    minify: bool = False,
) -> str:
    """Run ``optimizer`` over ``css`` with the fixed profile.

    Raises:
        OptimizerError: If the optimizer fails for any reason.
    """
    options = OptimizeOptions(filename=filename, minify=minify)
    logger.debug("Optimizing %d bytes of CSS (minify=%s)", len(css), minify)
    try:
        return optimizer.optimize(css, options)
    except CSSForgeError:
        raise
    except Exception as exc:
        raise OptimizerError(f"Optimizer failed on '{filename}': {exc}") from exc
