"""Directive detection over a tinycss2 parse tree.

``@tailwind`` asks for utility generation, ``@apply`` inlines generated
rules.  Stylesheets with neither never reach the scanner or the compiler.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from cssforge.stylesheet import Root

APPLY_DIRECTIVE = "apply"
GENERATE_DIRECTIVE = "tailwind"


@dataclass(frozen=True)
class DirectiveFlags:
    """Directives found in one stylesheet.

    Attributes:
        has_apply: At least one ``@apply`` (or ``@tailwind``) is present.
        has_tailwind: At least one ``@tailwind`` is present.
    """

    has_apply: bool = False
    has_tailwind: bool = False

    @property
    def any(self) -> bool:
        return self.has_apply or self.has_tailwind


class DirectiveDetector:
    """Walks a stylesheet once, top to bottom, looking for directives."""

    def detect(self, root: Root) -> DirectiveFlags:
        has_apply = has_tailwind = False
        for keyword in self._at_keywords(root.nodes):
            if keyword == APPLY_DIRECTIVE:
                has_apply = True
            elif keyword == GENERATE_DIRECTIVE:
                has_apply = has_tailwind = True
                # Nothing left to discover.
                break
        return DirectiveFlags(has_apply=has_apply, has_tailwind=has_tailwind)

    def _at_keywords(self, nodes: Iterable[Any]) -> Iterable[str]:
        """Yield the name of every at-rule, nested ones included.

        Nested declarations blocks are not parsed by tinycss2, so a nested
        ``@apply`` shows up as an ``at-keyword`` token inside a block.
        """
        for node in nodes:
            node_type = getattr(node, "type", None)
            if node_type == "at-rule":
                yield node.at_keyword
                yield from self._at_keywords(node.prelude)
                if node.content is not None:
                    yield from self._at_keywords(node.content)
            elif node_type == "at-keyword":
                yield node.value
            elif node_type == "qualified-rule":
                yield from self._at_keywords(node.prelude)
                yield from self._at_keywords(node.content)
            elif node_type in ("{} block", "[] block", "() block"):
                yield from self._at_keywords(node.content)
            elif node_type == "function":
                yield from self._at_keywords(node.arguments)
