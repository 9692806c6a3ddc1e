import pytest

from cxmlbuilder.builder import makeelement
from cxmlbuilder.errors import MissingRequiredField, UnknownKind
from cxmlbuilder.verbs import ROOT, VERBS, Verb, lookup, register, snakecase


def test_lookup_unknown_kind() -> None:
    with pytest.raises(UnknownKind) as exc:
        lookup("Bogus")
    assert exc.value.kind == "Bogus"


@pytest.mark.parametrize(
    "name, expected",
    [
        ("numDigits", "num_digits"),
        ("statusCallbackMethod", "status_callback_method"),
        ("url", "url"),
    ],
)
def test_snakecase(name, expected) -> None:
    assert snakecase(name) == expected


def test_option_names_accept_both_spellings() -> None:
    gather = lookup("Gather")
    assert gather.optionname("numDigits") == "numDigits"
    assert gather.optionname("num_digits") == "numDigits"
    assert gather.optionname("digits") is None
    assert lookup("Say").optionname("text") == "text"


def test_every_child_kind_is_registered() -> None:
    for verb in VERBS.values():
        for tag in verb.children:
            assert lookup(tag).tag == tag
        for tag in verb.nested.values():
            assert tag in verb.children
        for tag in verb.groups:
            assert tag in verb.children


def test_only_container_kinds_are_nestable() -> None:
    nestable = {tag for tag, verb in VERBS.items() if verb.nestable}
    assert nestable == {ROOT, "Gather", "Dial", "Start", "Converse", "Tool"}


@pytest.mark.parametrize("tag", sorted(VERBS))
def test_unsupplied_options_are_omitted(tag) -> None:
    verb = lookup(tag)
    if verb.required:
        with pytest.raises(MissingRequiredField):
            makeelement(verb, [], {})
        return

    element, nested = makeelement(verb, [], {})
    assert list(element.attributes) == [name for name, _ in verb.defaults]
    assert element.content is None
    assert nested == []


@pytest.mark.parametrize("tag", sorted(VERBS))
def test_every_option_maps_to_its_attribute(tag) -> None:
    verb = lookup(tag)
    options = {name: "x" for name in verb.attributes}
    element, _ = makeelement(verb, [], options)
    assert list(element.attributes) == list(verb.attributes)


def test_none_and_empty_string_are_absent() -> None:
    element, _ = makeelement(lookup("Record"), [], {"action": None, "method": "", "timeout": 5})
    assert element.attributes == {"timeout": 5}


def test_false_and_zero_are_present() -> None:
    element, _ = makeelement(lookup("Record"), [], {"playBeep": False, "timeout": 0})
    assert element.attributes == {"playBeep": False, "timeout": 0}
    assert element.render() == '<Record playBeep="false" timeout="0"/>\n'


def test_unknown_option_is_rejected() -> None:
    with pytest.raises(TypeError, match="unexpected option 'colour'"):
        makeelement(lookup("Say"), [("text", "Hi")], {"colour": "red"})


def test_text_option_becomes_content() -> None:
    element, _ = makeelement(lookup("Say"), [("text", "Hi")], {"voice": "woman"})
    assert element.content == "Hi"
    assert element.attributes == {"voice": "woman"}


def test_digits_suppress_play_url() -> None:
    element, _ = makeelement(lookup("Play"), [("url", "https://example.com/a.wav")], {"digits": "1234"})
    assert element.content is None
    assert element.render() == '<Play digits="1234"/>\n'


def test_default_precedes_supplied_options() -> None:
    element, _ = makeelement(lookup("Pause"), [("length", None)], {"answer": True})
    assert list(element.attributes.items()) == [("length", 1), ("answer", True)]


def test_positional_value_replaces_default() -> None:
    element, _ = makeelement(lookup("Pause"), [("length", 3)], {"answer": True})
    assert list(element.attributes.items()) == [("length", 3), ("answer", True)]


def test_required_value_must_not_be_empty() -> None:
    with pytest.raises(MissingRequiredField) as exc:
        makeelement(lookup("Stream"), [("url", "")], {"name": "s1"})
    assert exc.value.kind == "Stream"
    assert exc.value.field == "url"


def test_nested_options_are_returned_not_applied() -> None:
    element, nested = makeelement(lookup("Gather"), [], {"numDigits": 1, "say": ["Hi"], "play": None})
    assert element.children == []
    assert nested == [("Say", ["Hi"])]


def test_registered_kind_is_usable_without_renderer_changes() -> None:
    verb = register(Verb("Beep", attributes=("tone",), primary=("count",), text="count"))
    try:
        element, _ = makeelement(lookup("Beep"), [("count", 2)], {"tone": "high"})
        assert element.render() == '<Beep tone="high">2</Beep>\n'
        assert lookup("Beep") is verb
    finally:
        VERBS.pop("Beep")
