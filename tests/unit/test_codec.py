# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from dataclasses import dataclass, field

import pytest

from httpchain.codec import assign, decode_json, decode_xml, encode_json, encode_xml, validate_target
from httpchain.errors import DecodeError, EncodeError
from httpchain.form import Form


@dataclass
class User:
    login: str = ""
    id: int = 0
    tags: list = field(default_factory=list)


@dataclass(frozen=True)
class FrozenUser:
    login: str = ""


def test_dict_targets_are_updated_in_place():
    target = {"keep": True}
    assign(target, decode_json(b'{"login": "ann"}'))
    assert target == {"keep": True, "login": "ann"}


def test_list_targets_are_replaced():
    target = ["stale"]
    assign(target, decode_json(b"[1, 2]"))
    assert target == [1, 2]


def test_dataclass_targets_receive_matching_fields():
    user = User()
    assign(user, {"login": "ann", "id": 3, "unknown": "ignored"})
    assert user == User(login="ann", id=3)


def test_callable_targets_receive_the_value():
    received = []
    assign(received.append, "text")
    assert received == ["text"]


def test_mismatched_shapes_raise_decode_error():
    with pytest.raises(DecodeError):
        assign({}, [1])
    with pytest.raises(DecodeError):
        assign([], {"a": 1})
    with pytest.raises(DecodeError):
        assign(FrozenUser(), {"login": "x"})


def test_unsupported_targets_are_rejected_up_front():
    with pytest.raises(TypeError):
        validate_target(42)
    with pytest.raises(TypeError):
        validate_target("text")
    validate_target(User())
    validate_target(print)
    with pytest.raises(TypeError):
        validate_target(User)


def test_invalid_json_raises_decode_error():
    for payload in (b"", b"{", b"\xff\xfe"):
        with pytest.raises(DecodeError):
            decode_json(payload)


def test_json_encoding_handles_dataclasses_and_tuples():
    assert encode_json(User(login="ann", id=1, tags=("a",))) == b'{"login": "ann", "id": 1, "tags": ["a"]}'
    with pytest.raises(EncodeError):
        encode_json({"bad": object()})


def test_xml_decoding_strips_namespaces_and_groups_children():
    doc = (
        b'<ListBucketResult xmlns="http://s3.amazonaws.com/doc/2006-03-01/">'
        b"<Name>bucket</Name><Contents><Key>a</Key></Contents><Contents><Key>b</Key></Contents>"
        b"<Prefix/></ListBucketResult>"
    )
    assert decode_xml(doc) == {
        "Name": "bucket",
        "Contents": [{"Key": "a"}, {"Key": "b"}],
        "Prefix": None,
    }


def test_xml_decoding_keeps_mixed_text():
    assert decode_xml(b'<price currency="EUR">12</price>') == {"@currency": "EUR", "#text": "12"}
    assert decode_xml(b"<name>ann</name>") == "ann"


def test_invalid_xml_raises_decode_error():
    with pytest.raises(DecodeError):
        decode_xml(b"<open>")


def test_xml_encoding_from_mapping():
    encoded = encode_xml({"user": {"@id": 7, "name": "ann", "role": ["a", "b"], "active": True, "note": None}})
    assert encoded.startswith(b"<?xml")
    assert encoded.endswith(
        b'<user id="7"><name>ann</name><role>a</role><role>b</role><active>true</active><note /></user>'
    )


def test_xml_encoding_from_dataclass():
    assert encode_xml(User(login="ann", id=2)).endswith(b"<User><login>ann</login><id>2</id></User>")


def test_xml_encoding_requires_single_root():
    with pytest.raises(EncodeError):
        encode_xml({"a": 1, "b": 2})
    with pytest.raises(EncodeError):
        encode_xml("text")


def test_form_multimap_operations():
    form = Form.of({"a": "1", "b": ["2", "3"]}).add("a", "4")
    assert form.get_list("a") == ["1", "4"]
    assert form.get("b") == "2"
    assert form.get("missing") is None
    assert form.set("a", "9").get_list("a") == ["9"]
    assert form.get_list("a") == ["1", "4"]
    assert len(form) == 4
    assert not Form()
    assert Form.of([("x", "1"), ("x", "2")]).encode() == "x=1&x=2"
