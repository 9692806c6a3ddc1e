"""
verbs - the CXML verb table

One Verb record per element kind. A record says which options the kind
accepts and where each one goes (an attribute, or the element's text),
which values are mandatory, and for nestable kinds which children are
accepted and how siblings interact (exclusive groups, leading kinds,
singular kinds). The builder consults this table for every element it
creates; the renderer never does.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional, Tuple

from .errors import UnknownKind

ROOT = "Response"

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


def snakecase(name: str) -> str:
    """
    snakecase - python spelling of a camelCase attribute name
        (numDigits -> num_digits)
    """
    return _CAMEL.sub("_", name).lower()


@dataclass(frozen=True)
class Verb:
    """
    Verb - table entry for one element kind

    tag: public tag name, also the kind identifier
    attributes: attribute names accepted as options, in declared order
    primary: names of the positional values, in parameter order
    text: option whose value becomes the element text instead of an
        attribute
    notext: options whose presence suppresses the text (Play with digits)
    defaults: attribute values used when the option is not supplied
    required: options that must be supplied with a non empty value
    children: child kinds accepted, in the order the builder lists them
    groups: child kind -> exclusivity group. Adding a member of a group
        replaces the current member of the same group
    leading: child kinds always kept ahead of all other children
    singular: child kinds of which at most one may exist, a new one
        replaces the old one in place
    nested: declarative option -> child kind, for building children from
        an options structure
    """

    tag: str
    attributes: Tuple[str, ...] = ()
    primary: Tuple[str, ...] = ()
    text: Optional[str] = None
    notext: Tuple[str, ...] = ()
    defaults: Tuple[Tuple[str, Any], ...] = ()
    required: Tuple[str, ...] = ()
    children: Tuple[str, ...] = ()
    groups: Dict[str, str] = field(default_factory=dict)
    leading: FrozenSet[str] = frozenset()
    singular: FrozenSet[str] = frozenset()
    nested: Dict[str, str] = field(default_factory=dict)

    @property
    def nestable(self) -> bool:
        return bool(self.children)

    def optionname(self, key: str) -> Optional[str]:
        """
        optionname - canonical (attribute or text) name for an option key
            given in either camelCase or snake_case, None if not recognised
        """
        if key in self.attributes or key == self.text:
            return key
        for name in self.attributes:
            if snakecase(name) == key:
                return name
        if self.text and snakecase(self.text) == key:
            return self.text
        return None


STATUS_CALLBACK = ("statusCallback", "statusCallbackMethod")
STATUS_CALLBACK_EVENT = STATUS_CALLBACK + ("statusCallbackEvent",)
RECORDING_CALLBACK = (
    "recordingStatusCallback",
    "recordingStatusCallbackMethod",
    "recordingStatusCallbackEvent",
)

VERBS: Dict[str, Verb] = {}


def register(verb: Verb) -> Verb:
    """
    register - add (or replace) a kind in the verb table
    """
    VERBS[verb.tag] = verb
    return verb


def lookup(tag: str) -> Verb:
    """
    lookup - return the table entry for a kind. Raises UnknownKind
    """
    try:
        return VERBS[tag]
    except KeyError:
        raise UnknownKind(tag) from None


# root container

register(
    Verb(
        ROOT,
        children=(
            "Play",
            "Say",
            "Gather",
            "Pause",
            "Redirect",
            "Hangup",
            "Dial",
            "Reject",
            "Record",
            "Coach",
            "Start",
            "Converse",
        ),
    )
)

# verbs

register(
    Verb(
        "Play",
        attributes=("answer", "digits", "loop") + STATUS_CALLBACK,
        primary=("url",),
        text="url",
        notext=("digits",),
    )
)

register(
    Verb(
        "Say",
        attributes=("answer", "loop", "voice", "language") + STATUS_CALLBACK,
        primary=("text",),
        text="text",
    )
)

register(
    Verb(
        "Gather",
        attributes=(
            "action",
            "method",
            "input",
            "finishOnKey",
            "numDigits",
            "maxTimeout",
            "timeout",
            "speechTimeout",
            "speechEngine",
            "language",
            "actionOnEmptyResult",
            "maxDuration",
            "speechDetection",
            "interruptible",
        ),
        children=("Say", "Play", "Pause", "Converse"),
        nested={"say": "Say", "play": "Play", "pause": "Pause", "converse": "Converse"},
    )
)

register(
    Verb(
        "Pause",
        attributes=("length", "answer"),
        primary=("length",),
        defaults=(("length", 1),),
    )
)

register(
    Verb(
        "Redirect",
        attributes=("method",),
        primary=("url",),
        text="url",
        defaults=(("method", "POST"),),
    )
)

register(Verb("Hangup"))

register(
    Verb(
        "Dial",
        attributes=(
            "action",
            "callerId",
            "callerName",
            "forwardHeaders",
            "headers",
            "hangupOnStar",
            "hangupOn",
            "method",
            "record",
        )
        + RECORDING_CALLBACK
        + ("timeLimit", "timeout", "trim", "trunks"),
        primary=("destination",),
        text="destination",
        children=("Header", "Number", "Sip", "Conference", "Service"),
        groups={
            "Number": "destination",
            "Sip": "destination",
            "Conference": "destination",
            "Service": "destination",
        },
        leading=frozenset({"Header"}),
        nested={
            "header": "Header",
            "number": "Number",
            "sip": "Sip",
            "conference": "Conference",
            "service": "Service",
        },
    )
)

register(Verb("Reject", attributes=("reason",)))

register(
    Verb(
        "Record",
        attributes=(
            "answer",
            "action",
            "method",
            "timeout",
            "maxLength",
            "maxSilence",
            "finishOnKey",
            "playBeep",
            "transcribe",
            "transcribeCallback",
            "transcribeEngine",
        )
        + RECORDING_CALLBACK
        + ("trim", "fileFormat"),
    )
)

register(
    Verb(
        "Coach",
        attributes=(
            "callerId",
            "callerName",
            "listen",
            "speak",
            "whisper",
            "barge",
            "timeout",
        )
        + STATUS_CALLBACK_EVENT
        + ("record",)
        + RECORDING_CALLBACK,
        primary=("number",),
        text="number",
    )
)

register(Verb("Start", children=("Stream",), nested={"stream": "Stream"}))

register(
    Verb(
        "Converse",
        attributes=(
            "voice",
            "language",
            "model",
            "temperature",
            "context",
            "sessionTools",
        )
        + STATUS_CALLBACK_EVENT,
        children=("Tool", "System", "User", "Speech"),
        nested={"tool": "Tool", "system": "System", "user": "User", "speech": "Speech"},
    )
)

# Dial nouns

register(Verb("Number", primary=("number",), text="number"))

register(
    Verb(
        "Sip",
        attributes=("username", "password", "domain"),
        primary=("uri",),
        text="uri",
    )
)

register(
    Verb(
        "Conference",
        attributes=(
            "beep",
            "startConferenceOnEnter",
            "endConferenceOnExit",
            "maxParticipants",
            "record",
            "trim",
            "waitUrl",
            "waitMethod",
            "dtmf",
            "holdMusic",
            "muted",
            "prompts",
        )
        + STATUS_CALLBACK_EVENT
        + RECORDING_CALLBACK
        + ("talkDetection",),
        primary=("name",),
        text="name",
    )
)

register(
    Verb(
        "Service",
        attributes=("provider", "username", "password"),
        primary=("number",),
        text="number",
    )
)

register(Verb("Header", attributes=("name", "value"), primary=("name", "value")))

# Start nouns

register(
    Verb(
        "Stream",
        attributes=("url", "name", "track") + STATUS_CALLBACK,
        primary=("url",),
        required=("url",),
    )
)

# Converse nouns

register(
    Verb(
        "Tool",
        attributes=("name", "url"),
        primary=("name", "url"),
        required=("name", "url"),
        children=("Description", "Parameter"),
        singular=frozenset({"Description"}),
        nested={"description": "Description", "parameter": "Parameter"},
    )
)

register(
    Verb(
        "Parameter",
        attributes=("name", "description", "type", "required", "values"),
        primary=("name",),
        required=("name",),
    )
)

register(Verb("Description", primary=("text",), text="text"))

register(Verb("System", primary=("text",), text="text"))

register(Verb("User", primary=("text",), text="text"))

register(Verb("Speech"))
