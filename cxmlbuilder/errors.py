"""
errors - exceptions raised while building a CXML document

All construction errors are programmer errors: they are raised at the
offending call, before the document tree is modified.
"""
from __future__ import annotations


class CXMLError(ValueError):
    """
    CXMLError - base class for all cxmlbuilder errors
    """


class MissingRequiredField(CXMLError):
    """
    MissingRequiredField - a value the verb table marks as mandatory was
        not supplied (eg a Stream without a url)
    """

    def __init__(self, kind: str, field: str):
        self.kind = kind
        self.field = field
        super().__init__(f"{kind} requires a {field} parameter")


class InvalidNesting(CXMLError):
    """
    InvalidNesting - an element kind was added under a parent that does
        not accept it
    """

    def __init__(self, kind: str, parent: str):
        self.kind = kind
        self.parent = parent
        super().__init__(f"{kind} is not permitted inside {parent}")


class UnknownKind(CXMLError):
    """
    UnknownKind - the verb table was consulted with an unregistered kind
    """

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Unknown element kind: {kind}")


class StaleScope(CXMLError):
    """
    StaleScope - a scope handed out for a previous document was used
        after the builder started a new one
    """
