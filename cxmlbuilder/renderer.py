"""
renderer - turn a finished CXML tree into document text

The pipeline is fixed when the Renderer is created: declaration line,
root tag, depth first walk of the root's children, then each TagPatch
stage in order.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

import structlog

from .element import Element
from .settings import get_settings

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TagPatch:
    """
    TagPatch - rename one tag in rendered text

    Only tag forms are touched (<source ...>, <source/>, </source>); text
    and attribute values are escaped by the time a patch runs so they can
    never contain a literal tag. Applying a patch twice gives the same
    text as applying it once, provided target does not collide with
    source.
    """

    source: str
    target: str
    _pattern: "re.Pattern[str]" = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        pattern = re.compile(r"<(/?)" + re.escape(self.source) + r"(?=[\s/>])")
        object.__setattr__(self, "_pattern", pattern)

    def apply(self, text: str) -> str:
        return self._pattern.sub(lambda m: f"<{m.group(1)}{self.target}", text)


class Renderer:
    """
    Renderer - renders a document root and its children to CXML text
    """

    def __init__(
        self,
        declaration: Optional[str] = None,
        indent: Optional[str] = None,
        patches: Iterable[TagPatch] = (),
    ):
        """
        declaration: line emitted before the root tag. Defaults to the
            configured declaration
        indent: text emitted per nesting level. Defaults to the configured
            indent
        patches: post-render tag renames, applied in order
        """
        settings = get_settings()
        self.declaration = settings.declaration if declaration is None else declaration
        self.indent = settings.indent if indent is None else indent
        self.patches: Tuple[TagPatch, ...] = tuple(patches)

    def renderlist(self, root: Element) -> list[str]:
        """
        renderlist - the root container always has an open and a close tag,
            even when empty. No newline follows the closing root tag
        """
        dest: list[str] = [self.declaration, "\n", f"<{root.tagName}>\n"]
        for child in root.children:
            dest.extend(child.renderlist(1, self.indent))
        dest.append(f"</{root.tagName}>")
        return dest

    def render(self, root: Element) -> str:
        text = "".join(self.renderlist(root))
        for patch in self.patches:
            text = patch.apply(text)
        logger.debug(
            "cxml_rendered",
            root=root.tagName,
            elements=len(root.children),
            length=len(text),
        )
        return text
