"""Host-facing stylesheet surface: parse tree, parse options and result messages.

The stage receives a :class:`Root` (a tinycss2 node list plus the options it
was parsed with) and a :class:`Result` carrying upstream messages.  It
reports watch edges back to the host by appending
:class:`DependencyMessage` and :class:`DirDependencyMessage` entries to
``Result.messages``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

import tinycss2
from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True)
class ParseOptions:
    """Options a stylesheet was parsed with.

    Attributes:
        from_path: Path of the stylesheet, or ``None`` for piped input.
        source_map: Whether the host wants source maps.
    """

    from_path: str | None = None
    source_map: bool = False


@dataclass
class Root:
    """A parsed stylesheet: the top-level tinycss2 nodes and their options."""

    nodes: list[Any] = field(default_factory=list)
    opts: ParseOptions = field(default_factory=ParseOptions)

    def to_css(self) -> str:
        """Serialize the tree back to CSS text."""
        return tinycss2.serialize(self.nodes)


def parse_css(css: str, opts: ParseOptions | None = None) -> Root:
    """Parse ``css`` into a :class:`Root`, keeping comments and whitespace."""
    nodes = tinycss2.parse_stylesheet(css, skip_comments=False, skip_whitespace=False)
    return Root(nodes=nodes, opts=opts or ParseOptions())


class DependencyMessage(BaseModel):
    """Tells the host that ``file`` must be watched.

    Attributes:
        type: Always ``'dependency'``.
        plugin: Identifier of the stage that emitted the message.
        file: Absolute path of the watched file.
        parent: The stylesheet the dependency belongs to.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["dependency"] = "dependency"
    plugin: str
    file: str
    parent: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()


class DirDependencyMessage(BaseModel):
    """Tells the host to watch files matching ``glob`` below ``dir``.

    Attributes:
        type: Always ``'dir-dependency'``.
        plugin: Identifier of the stage that emitted the message.
        dir: Base directory of the glob.
        glob: Glob pattern relative to ``dir``.
        parent: The stylesheet the dependency belongs to.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["dir-dependency"] = "dir-dependency"
    plugin: str
    dir: str
    glob: str
    parent: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()


@dataclass
class Result:
    """Per-invocation result metadata shared with the host.

    Attributes:
        opts: Options the stylesheet was parsed with.
        messages: Upstream messages (e.g. ``dependency`` entries from import
            resolution) plus whatever this stage appends.  Entries may be
            message models or plain dicts.
    """

    opts: ParseOptions = field(default_factory=ParseOptions)
    messages: list[Any] = field(default_factory=list)

    def dependency_files(self) -> list[str]:
        """Return the ``file`` of every ``dependency`` message, in order."""
        files: list[str] = []
        for message in self.messages:
            data = message if isinstance(message, dict) else message.to_dict()
            if data.get("type") == "dependency" and data.get("file"):
                files.append(data["file"])
        return files
