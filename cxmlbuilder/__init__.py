"""
cxmlbuilder - build voice application (CXML) documents

    from cxmlbuilder import makeresponse

    b = makeresponse()
    b.say("Hello").pause(1).hangup()
    print(b.render())
"""
from .builder import CXMLBuilder, Scope, makeelement, makeresponse
from .element import Element, escape_attribute, escape_text
from .errors import (
    CXMLError,
    InvalidNesting,
    MissingRequiredField,
    StaleScope,
    UnknownKind,
)
from .log import configure_logging
from .renderer import Renderer, TagPatch
from .settings import CXMLSettings, get_settings
from .verbs import VERBS, Verb, lookup, register

__all__ = [
    "CXMLBuilder",
    "CXMLError",
    "CXMLSettings",
    "Element",
    "InvalidNesting",
    "MissingRequiredField",
    "Renderer",
    "Scope",
    "StaleScope",
    "TagPatch",
    "UnknownKind",
    "VERBS",
    "Verb",
    "configure_logging",
    "escape_attribute",
    "escape_text",
    "get_settings",
    "lookup",
    "makeelement",
    "makeresponse",
    "register",
]
