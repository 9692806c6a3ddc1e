"""
builder - fluent construction of CXML documents

A CXMLBuilder is the root scope of one document. Every scope has one
method per element kind; leaf kinds return the same scope for chaining,
nestable kinds open a child scope. Children can be added three ways,
all producing the same tree:

    # explicit scope
    b.gather(numDigits=1).say("Press a key").pause(1).done().hangup()

    # callback scope
    b.gather(lambda g: g.say("Press a key").pause(1), numDigits=1).hangup()

    # declarative options
    b.gather(numDigits=1, say=["Press a key"], pause=[{"length": 1}]).done().hangup()

Which kinds may be nested where, and how siblings interact, comes from
the verb table (see verbs.py).
"""
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

import structlog

from .element import Element
from .errors import InvalidNesting, MissingRequiredField, StaleScope
from .renderer import Renderer
from .verbs import ROOT, Verb, lookup

logger = structlog.get_logger(__name__)

Callback = Callable[["Scope"], Any]
Values = List[Tuple[str, Any]]


def _absent(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def makeelement(verb: Verb, values: Values, options: Mapping[str, Any]) -> Tuple[Element, Values]:
    """
    makeelement - create a detached Element for a kind from its positional
        values and options. Nothing is attached anywhere

    verb: table entry of the kind
    values: (name, value) pairs of the positional values, in parameter order
    options: keyword options, in the order the caller supplied them

    Returns the element and the declarative child specifications found in
    the options as (child kind, spec) pairs, in supplied order.
    Raises TypeError for options the kind does not recognise and
    MissingRequiredField for absent mandatory values.
    """
    supplied: Dict[str, Any] = {}
    nested: Values = []
    primaries: List[str] = []

    for key, value in values:
        supplied[key] = value
        primaries.append(key)

    for key, value in options.items():
        if key in verb.nested:
            if value is not None:
                nested.append((verb.nested[key], value))
            continue
        name = verb.optionname(key)
        if name is None:
            raise TypeError(f"{verb.tag} got an unexpected option '{key}'")
        supplied[name] = value

    for name in verb.required:
        if _absent(supplied.get(name)):
            raise MissingRequiredField(verb.tag, name)

    # positional values, then unsupplied defaults, then options as given
    order = list(primaries)
    for name, value in verb.defaults:
        if _absent(supplied.get(name)):
            supplied[name] = value
            if name not in order:
                order.append(name)
    order.extend(n for n in supplied if n not in order)

    content = None
    attributes: Values = []
    for name in order:
        value = supplied[name]
        if _absent(value):
            continue
        if name == verb.text:
            content = value
        else:
            attributes.append((name, value))

    if any(not _absent(supplied.get(n)) for n in verb.notext):
        content = None

    element = Element(verb.tag, attributes=attributes, content=content, isvoid=not verb.nestable)
    return element, nested


def _specs(verb: Verb, value: Any) -> Iterable[Tuple[Values, Dict[str, Any]]]:
    """
    _specs - expand a declarative child option into (values, options) for
        each child. Accepts a scalar (the first positional value), a mapping
        of options, True (one child with no options) or a list of those
    """
    if value is False:
        return
    if value is True:
        value = [{}]
    elif not isinstance(value, (list, tuple)):
        value = [value]

    for spec in value:
        if isinstance(spec, Mapping):
            options = dict(spec)
        elif verb.primary:
            options = {verb.primary[0]: spec}
        else:
            raise TypeError(f"{verb.tag} specifications must be mappings, got {spec!r}")
        values = [(p, options.pop(p)) for p in verb.primary if p in options]
        yield values, options


class Scope:
    """
    A position in the document tree that new elements are added to. The
    builder itself is the root scope, nestable elements open child scopes.
    Scopes belong to one document: once the builder starts a new document
    every older scope raises StaleScope
    """

    def __init__(self, builder: CXMLBuilder, element: Element, parent: Optional[Scope] = None):
        self._builder = builder
        self._document = builder._documents
        self.element = element
        self.parent = parent
        # current member of each exclusivity group and singular kind
        self._members: Dict[str, Element] = {}

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.element.tagName}>"

    @property
    def builder(self) -> CXMLBuilder:
        return self._builder

    def _check(self) -> None:
        if self._document != self._builder._documents:
            raise StaleScope(
                f"{self.element.tagName} scope belongs to a previous document"
            )

    def done(self) -> Scope:
        """
        done - close this scope (and any scope still open inside it) and
            return the parent scope
        """
        self._check()
        self._builder._close(self)
        return self.parent if self.parent is not None else self

    def render(self) -> str:
        """
        render - render the whole document this scope belongs to
        """
        self._check()
        return self._builder.render()

    def _add(
        self,
        tag: str,
        values: Values,
        options: Mapping[str, Any],
        callback: Optional[Callback] = None,
        keepopen: bool = True,
    ) -> Scope:
        """
        _add - create an element of kind tag and add it to this scope

        Everything is validated, and declarative children are built, before
        the element is attached. For nestable kinds the child scope is
        returned (or passed to callback, in which case this scope is
        returned). With keepopen false and no callback the child scope is
        never opened and this scope is returned.
        """
        self._check()
        parentverb = lookup(self.element.tagName)
        if tag not in parentverb.children:
            raise InvalidNesting(tag, parentverb.tag)
        verb = lookup(tag)

        element, nested = makeelement(verb, values, options)
        element.group = parentverb.groups.get(tag)

        child = Scope(self._builder, element, self) if verb.nestable else None
        for childtag, value in nested:
            childverb = lookup(childtag)
            for childvalues, childoptions in _specs(childverb, value):
                child._add(childtag, childvalues, childoptions, keepopen=False)

        self._attach(parentverb, element)
        logger.debug(
            "cxml_element_added",
            tag=tag,
            parent=parentverb.tag,
            attributes=list(element.attributes),
        )

        if child is None or (callback is None and not keepopen):
            return self

        self._builder._open(child)
        if callback is None:
            return child
        try:
            callback(child)
        finally:
            self._builder._close(child)
        return self

    def _attach(self, parentverb: Verb, element: Element) -> None:
        parent = self.element
        tag = element.tagName

        if tag in parentverb.singular:
            current = self._members.get(tag)
            self._members[tag] = element
            if current is not None:
                idx = parent.children.index(current)
                parent.removeChild(current)
                parent.insertChild(idx, element)
                return

        if element.group:
            current = self._members.get(element.group)
            self._members[element.group] = element
            if current is not None:
                parent.removeChild(current)
                logger.debug(
                    "cxml_group_replaced",
                    parent=parent.tagName,
                    group=element.group,
                    removed=current.tagName,
                    added=tag,
                )

        if tag in parentverb.leading:
            idx = 0
            while idx < len(parent.children) and parent.children[idx].tagName in parentverb.leading:
                idx += 1
            parent.insertChild(idx, element)
        else:
            parent.appendChild(element)

    # verbs

    def play(self, url: Optional[str] = None, **options: Any) -> Scope:
        """
        play - add a Play element to this scope.
            Plays an audio file, or sends DTMF when digits is given (the
            url is then ignored).
        """
        return self._add("Play", [("url", url)], options)

    def say(self, text: str, **options: Any) -> Scope:
        """
        say - add a Say element to this scope.
            Speaks text using text to speech.
        """
        return self._add("Say", [("text", text)], options)

    def gather(self, callback: Optional[Callback] = None, **options: Any) -> Scope:
        """
        gather - add a Gather element to this scope.
            Collects DTMF or speech input. Accepts Say, Play, Pause and
            Converse children.
        """
        return self._add("Gather", [], options, callback)

    def pause(self, length: Optional[int] = None, **options: Any) -> Scope:
        """
        pause - add a Pause element to this scope.
            Waits silently for length seconds (default 1).
        """
        return self._add("Pause", [("length", length)], options)

    def redirect(self, url: str, method: Optional[str] = None, **options: Any) -> Scope:
        """
        redirect - add a Redirect element to this scope.
            Continues the call with the document at url (method defaults to
            POST).
        """
        return self._add("Redirect", [("url", url)], dict(options, method=method))

    def hangup(self) -> Scope:
        """
        hangup - add a Hangup element to this scope.
        """
        return self._add("Hangup", [], {})

    def dial(
        self,
        destination: Optional[str] = None,
        callback: Optional[Callback] = None,
        **options: Any,
    ) -> Scope:
        """
        dial - add a Dial element to this scope.
            Connects the call to another party. destination is the dialed
            number as text; for Header, Number, Sip, Conference or Service
            children use the child scope, a callback or the matching
            options.

        A callable passed as the only positional argument is the callback.
        """
        if callback is None and callable(destination):
            destination, callback = None, destination
        return self._add("Dial", [("destination", destination)], options, callback)

    def reject(self, **options: Any) -> Scope:
        """
        reject - add a Reject element to this scope.
            Refuses the call without answering it.
        """
        return self._add("Reject", [], options)

    def record(self, **options: Any) -> Scope:
        """
        record - add a Record element to this scope.
        """
        return self._add("Record", [], options)

    def coach(self, number: str, **options: Any) -> Scope:
        """
        coach - add a Coach element to this scope.
            Connects a supervisor at number to listen, whisper or barge in.
        """
        return self._add("Coach", [("number", number)], options)

    def start(self, callback: Optional[Callback] = None, **options: Any) -> Scope:
        """
        start - add a Start element to this scope. Accepts Stream children.
        """
        return self._add("Start", [], options, callback)

    def converse(self, callback: Optional[Callback] = None, **options: Any) -> Scope:
        """
        converse - add a Converse element to this scope.
            Hands the call to an AI voice agent. Accepts Tool, System, User
            and Speech children.
        """
        return self._add("Converse", [], options, callback)

    # Dial nouns

    def number(self, number: str, **options: Any) -> Scope:
        """
        number - add a Number to this Dial. Replaces the dial target
            already present, if any.
        """
        return self._add("Number", [("number", number)], options)

    def sip(self, uri: str, **options: Any) -> Scope:
        """
        sip - add a Sip target to this Dial. Replaces the dial target
            already present, if any.
        """
        return self._add("Sip", [("uri", uri)], options)

    def conference(self, name: str, **options: Any) -> Scope:
        """
        conference - add a Conference room to this Dial. Replaces the dial
            target already present, if any.
        """
        return self._add("Conference", [("name", name)], options)

    def service(self, number: str, **options: Any) -> Scope:
        """
        service - add a Service target to this Dial. Replaces the dial
            target already present, if any.
        """
        return self._add("Service", [("number", number)], options)

    def header(self, name: str, value: str) -> Scope:
        """
        header - add a custom SIP Header to this Dial. Headers are always
            kept ahead of the dial target, in the order they were added.
        """
        return self._add("Header", [("name", name), ("value", value)], {})

    # Start nouns

    def stream(self, url: Optional[str] = None, **options: Any) -> Scope:
        """
        stream - add a media Stream to this Start. url is required.
        """
        return self._add("Stream", [("url", url)], options)

    # Converse nouns

    def tool(
        self,
        name: str,
        url: str,
        callback: Optional[Callback] = None,
        **options: Any,
    ) -> Scope:
        """
        tool - add a Tool to this Converse. Accepts one Description and any
            number of Parameter children.
        """
        return self._add("Tool", [("name", name), ("url", url)], options, callback)

    def parameter(self, name: str, **options: Any) -> Scope:
        """
        parameter - add a Parameter to this Tool.
        """
        return self._add("Parameter", [("name", name)], options)

    def description(self, text: str) -> Scope:
        """
        description - set the Description of this Tool, replacing any
            previous one.
        """
        return self._add("Description", [("text", text)], {})

    def system(self, text: str) -> Scope:
        """
        system - add a System prompt to this Converse.
        """
        return self._add("System", [("text", text)], {})

    def user(self, text: str) -> Scope:
        """
        user - add a User prompt to this Converse.
        """
        return self._add("User", [("text", text)], {})

    def speech(self) -> Scope:
        """
        speech - add a Speech element to this Converse, handing the turn
            to the caller.
        """
        return self._add("Speech", [], {})


class CXMLBuilder(Scope):
    """
    CXMLBuilder - builds one CXML document at a time. The builder is the
    root (Response) scope. Not safe for concurrent use from several threads
    """

    def __init__(self, renderer: Optional[Renderer] = None):
        """
        renderer: renderer used by render(). Defaults to a Renderer with the
            configured declaration and indent
        """
        self.renderer = renderer if renderer is not None else Renderer()
        self._documents = 0
        self.openScopes: List[Scope] = []
        self.createResponse()

    def createResponse(self) -> CXMLBuilder:
        """
        createResponse - start a new, empty document. Everything built so far
            is discarded and all scopes handed out earlier become stale
        """
        self._documents += 1
        Scope.__init__(self, self, Element(ROOT))
        self.openScopes = []
        logger.debug("cxml_document_started", document=self._documents)
        return self

    @property
    def document(self) -> Element:
        """
        document - the root Response element
        """
        return self.element

    @property
    def current(self) -> Scope:
        """
        current - innermost scope that is still open (the builder itself
            when none is)
        """
        return self.openScopes[-1] if self.openScopes else self

    def _open(self, scope: Scope) -> None:
        self.openScopes.append(scope)
        logger.debug("cxml_scope_opened", tag=scope.element.tagName, depth=len(self.openScopes))

    def _close(self, scope: Scope) -> None:
        for idx, s in enumerate(self.openScopes):
            if s is scope:
                del self.openScopes[idx:]
                logger.debug("cxml_scope_closed", tag=scope.element.tagName, depth=idx)
                return

    def render(self) -> str:
        """
        render - render the document to CXML text. Legal at any point;
            scopes still open are rendered with whatever they hold
        """
        self._check()
        if self.openScopes:
            logger.debug("cxml_render_open_scopes", open=len(self.openScopes))
        return self.renderer.render(self.element)

    def __str__(self) -> str:
        return self.render()


def makeresponse(renderer: Optional[Renderer] = None) -> CXMLBuilder:
    """
    makeresponse - create a builder holding a new, empty Response document
    """
    return CXMLBuilder(renderer=renderer)


if __name__ == "__main__":
    b = makeresponse()
    b.say("Hello").pause(1).hangup()

    print(b.render())
