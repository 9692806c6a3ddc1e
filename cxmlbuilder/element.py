"""
element - the node model of a CXML document

An Element is one markup tag: a tag name, ordered attributes, optional
text content and an ordered list of child Elements. Elements do not know
the verb table; the builder decides what may be nested where and the
Element only refuses children when it is void.

Does not prevent self referential structures (be careful with creation,
circular structures will loop forever during rendering)
"""
from __future__ import annotations
from typing import Any, Iterable, Optional, Tuple
from xml.sax.saxutils import escape

from .errors import InvalidNesting

# extra entities for attribute values (ampersand and angle brackets are
# always escaped, ampersand first)
ATTRIBUTE_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def totext(value: Any) -> str:
    """
    totext - coerce a scalar attribute or content value to its markup text.
        Booleans are lowercase, integral floats drop the fraction
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def escape_text(value: Any) -> str:
    """
    escape_text - escape a value for element text position (quotes are
        left as they are)
    """
    return escape(totext(value))


def escape_attribute(value: Any) -> str:
    """
    escape_attribute - escape a value for a double quoted attribute
    """
    return escape(totext(value), ATTRIBUTE_ENTITIES)


class Element:
    """
    A CXML element. Has a tag, optionally attributes, optionally text
    content, optionally children
    """

    def __init__(
        self,
        tagName: str,
        attributes: Optional[Iterable[Tuple[str, Any]]] = None,
        content: Optional[Any] = None,
        isvoid: bool = False,
        group: Optional[str] = None,
    ):
        """
        tagName: type of this tag, emitted exactly as given (CXML tags are
            case sensitive)
        attributes: an iterable of (name, value) pairs to be created as
            attributes, in render order. If source is a dict, pass d.items()
        content: text emitted inside the tag, before any children
        isvoid: set this as a void element when true. Void elements cannot
            have children
        group: exclusivity group this element belongs to within its
            parent, if any
        """
        self.tagName = tagName
        self.content = content
        self.parent: Optional[Element] = None
        self.isvoid = isvoid
        self.group = group

        self.attributes: dict[str, Any] = {}
        self.children: list[Element] = []

        if attributes:
            for name, value in attributes:
                self.setAttribute(name, value)

    def __repr__(self) -> str:
        return f"Element({self.tagName!r}, attributes={self.attributes!r})"

    def setAttribute(self, name: str, value: Any) -> None:
        """
        setAttribute - set (create or overwrite) an attribute of this Element.
            Overwriting keeps the attribute's original position
        """
        self.attributes[name] = value

    def _adopt(self, child: Element) -> None:
        if self.isvoid:
            raise InvalidNesting(child.tagName, self.tagName)
        if child.parent is not None and child.parent is not self:
            child.parent.removeChild(child)
        child.parent = self

    def appendChild(self, child: Element) -> Element:
        """
        child = childnode to add to the end of this node's children. Will
            take ownership of the child (removing it from any previous parent)

        returns child (for storing children that are created directly in the
            arguments)
        """
        self._adopt(child)
        self.children.append(child)
        return child

    def insertChild(self, index: int, child: Element) -> Element:
        """
        insertChild - add a child at position index of this node's children
        """
        self._adopt(child)
        self.children.insert(index, child)
        return child

    def removeChild(self, child: Element) -> Element:
        """
        removeChild - remove the supplied child element from this element's
        list of children.
        child: element to remove, must be a child of this element or
            ValueError will be thrown
        """
        for idx, c in enumerate(self.children):
            if c is child:
                self.children.pop(idx)
                child.parent = None
                return child

        raise ValueError("child does not exist in this parent Element")

    def renderlist(self, depth: int = 0, indent: str = "  ") -> list[str]:
        """
        renderlist - render this element and recursively, all child elements

        depth: nesting level of this element, indent is repeated this many
            times before each of its lines
        indent: text emitted per nesting level

        returns a list of strings that can be joined to create the rendered
        markup (or can be appended to parent's list). Every element line
        is newline terminated
        """
        pad = indent * depth
        dest: list[str] = [pad + "<" + self.tagName]

        for k, v in self.attributes.items():
            dest.append(f' {k}="{escape_attribute(v)}"')

        hascontent = self.content is not None and totext(self.content) != ""

        if not hascontent and not self.children:
            dest.append("/>\n")
            return dest

        dest.append(">")

        if hascontent:
            dest.append(escape_text(self.content))

        if not self.children:
            dest.append(f"</{self.tagName}>\n")
            return dest

        # mixed content keeps the text on the opening line
        dest.append("\n")
        for c in self.children:
            dest.extend(c.renderlist(depth + 1, indent))
        dest.append(f"{pad}</{self.tagName}>\n")

        return dest

    def render(self, indent: str = "  ") -> str:
        """
        render - render this element (and its children) as a fragment
        """
        return "".join(self.renderlist(0, indent))

    def __str__(self) -> str:
        return self.render()
