from cxmlbuilder import CXMLBuilder

from markup import document


def tags(scope) -> list:
    return [c.tagName for c in scope.element.children]


def test_target_kinds_replace_each_other(builder: CXMLBuilder) -> None:
    dial = builder.dial()
    dial.header("X-A", "1").number("+15551234567").conference("room")

    assert tags(dial) == ["Header", "Conference"]
    assert dial.element.children[1].content == "room"


def test_each_target_kind_replaces_the_others(builder: CXMLBuilder) -> None:
    dial = builder.dial()
    dial.number("+1").sip("sip:user@example.com")
    assert tags(dial) == ["Sip"]
    dial.service("+18005551234", provider="acme")
    assert tags(dial) == ["Service"]
    dial.conference("room")
    assert tags(dial) == ["Conference"]
    dial.number("+2")
    assert tags(dial) == ["Number"]


def test_same_target_kind_replaces_earlier_one(builder: CXMLBuilder) -> None:
    builder.dial(lambda d: d.number("111").number("222"))
    dial = builder.element.children[0]
    assert [c.content for c in dial.children] == ["222"]

    builder.createResponse()
    builder.dial(lambda d: d.header("X-A", "1").sip("sip:a@example.com").sip("sip:b@example.com"))
    assert builder.render() == document(
        "  <Dial>",
        '    <Header name="X-A" value="1"/>',
        "    <Sip>sip:b@example.com</Sip>",
        "  </Dial>",
    )


def test_declarative_target_list_keeps_last(builder: CXMLBuilder) -> None:
    builder.dial(number=["+1", "+2", "+3"]).done()
    assert builder.render() == document(
        "  <Dial>",
        "    <Number>+3</Number>",
        "  </Dial>",
    )


def test_headers_precede_target(builder: CXMLBuilder) -> None:
    builder.dial(
        lambda d: d.header("X-First-Header", "FirstValue")
        .header("X-Second-Header", "SecondValue")
        .number("+15559876543"),
        callerId="+15551234567",
        timeout=30,
        record=True,
    ).hangup()

    assert builder.render() == document(
        '  <Dial callerId="+15551234567" timeout="30" record="true">',
        '    <Header name="X-First-Header" value="FirstValue"/>',
        '    <Header name="X-Second-Header" value="SecondValue"/>',
        "    <Number>+15559876543</Number>",
        "  </Dial>",
        "  <Hangup/>",
    )


def test_headers_added_after_target_still_lead(builder: CXMLBuilder) -> None:
    first = builder.dial().header("X-A", "1").header("X-B", "2").number("+1").done().render()

    builder.createResponse()
    second = builder.dial().number("+1").header("X-A", "1").header("X-B", "2").done().render()

    assert first == second


def test_headers_survive_replacement_in_order(builder: CXMLBuilder) -> None:
    dial = builder.dial()
    dial.header("X-A", "1").sip("sip:a@example.com").header("X-B", "2").conference("room")

    assert tags(dial) == ["Header", "Header", "Conference"]
    assert [h.attributes["name"] for h in dial.element.children[:2]] == ["X-A", "X-B"]


def test_target_children_carry_group(builder: CXMLBuilder) -> None:
    dial = builder.dial().header("X-A", "1").number("+1")
    header, number = dial.element.children
    assert header.group is None
    assert number.group == "destination"


def test_dial_number_as_text_with_header(builder: CXMLBuilder) -> None:
    builder.dial("+15559876543", lambda d: d.header("X-Custom-Header", "CustomValue"))
    assert builder.render() == document(
        "  <Dial>+15559876543",
        '    <Header name="X-Custom-Header" value="CustomValue"/>',
        "  </Dial>",
    )


def test_dial_number_only(builder: CXMLBuilder) -> None:
    builder.dial("+15559876543", timeout=20).done()
    assert builder.render() == document('  <Dial timeout="20">+15559876543</Dial>')


def test_headers_attribute_is_not_a_header_child(builder: CXMLBuilder) -> None:
    dial = builder.dial(headers="X-Foo", forwardHeaders=True)
    assert dial.element.attributes == {"headers": "X-Foo", "forwardHeaders": True}
    assert dial.element.children == []


def test_declarative_dial_matches_callback(builder: CXMLBuilder) -> None:
    builder.dial(
        callerId="+15551234567",
        header=[
            {"name": "X-Custom-Header", "value": "CustomValue"},
        ],
        sip={"uri": "sip:user@example.com", "username": "sipuser", "password": "password123"},
    ).done()
    declarative = builder.render()

    builder.createResponse()
    builder.dial(
        lambda d: d.header("X-Custom-Header", "CustomValue").sip(
            "sip:user@example.com", username="sipuser", password="password123"
        ),
        callerId="+15551234567",
    )

    assert declarative == builder.render()
    assert declarative == document(
        '  <Dial callerId="+15551234567">',
        '    <Header name="X-Custom-Header" value="CustomValue"/>',
        '    <Sip username="sipuser" password="password123">sip:user@example.com</Sip>',
        "  </Dial>",
    )


def test_declarative_number(builder: CXMLBuilder) -> None:
    builder.dial(number="+15559876543").done()
    assert builder.render() == document(
        "  <Dial>",
        "    <Number>+15559876543</Number>",
        "  </Dial>",
    )


def test_conference_options(builder: CXMLBuilder) -> None:
    builder.dial(lambda d: d.conference("Room 1", beep=False, startConferenceOnEnter=True, maxParticipants=10))
    assert builder.render() == document(
        "  <Dial>",
        '    <Conference beep="false" startConferenceOnEnter="true" maxParticipants="10">Room 1</Conference>',
        "  </Dial>",
    )
