# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import io

import pytest

from httpchain import (
    Form,
    GetBuilder,
    Method,
    PostBuilder,
    RequestContext,
    builder,
    delete,
    get,
    patch,
    post,
    put,
    with_after,
    with_before,
    with_client,
    with_context,
)
from httpchain.errors import EncodeError, UrlParseError


def test_entry_points_fix_method_and_url():
    assert get("http://api.test/a").method is Method.GET
    assert post("http://api.test/a").method is Method.POST
    assert put("http://api.test/a").method is Method.PUT
    assert patch("http://api.test/a").method is Method.PATCH
    assert delete("http://api.test/a").method is Method.DELETE
    assert isinstance(get("http://api.test/a"), GetBuilder)
    assert isinstance(post("http://api.test/a"), PostBuilder)
    assert get("http://api.test/a").url == "http://api.test/a"


def test_no_payload_builders_have_no_body_operations():
    for b in (get("http://api.test/"), delete("http://api.test/")):
        assert not hasattr(b, "json_body")
        assert not hasattr(b, "xml_body")
        assert not hasattr(b, "body")
        assert not hasattr(b, "form_body")
    for b in (post("http://api.test/"), put("http://api.test/"), patch("http://api.test/")):
        assert hasattr(b, "json_body")
        assert hasattr(b, "form_body")


def test_derived_builders_do_not_alias_parent_state():
    base = get("http://api.test/users").add_header("X-Tag", "one").add_param("page", "1")
    derived = base.add_header("X-Tag", "two").set_header("Authorization", "token").set_param("page", "9")

    assert base.headers.get_list("X-Tag") == ["one"]
    assert "authorization" not in base.headers
    assert base.params.get_list("page") == ["1"]
    assert derived.headers.get_list("X-Tag") == ["one", "two"]
    assert derived.params.get_list("page") == ["9"]


def test_mutating_a_returned_headers_view_does_not_touch_the_builder():
    b = get("http://api.test/").set_header("Accept", "text/plain")
    view = b.headers
    view["Accept"] = "application/json"
    assert b.headers["accept"] == "text/plain"


def test_branches_from_one_builder_are_independent():
    root = builder().set_header("Authorization", "Bearer abc")
    users = root.get("http://api.test/users").add_param("active", "true")
    orders = root.post("http://api.test/orders").json_body({"id": 1})

    assert users.headers["authorization"] == "Bearer abc"
    assert orders.headers["authorization"] == "Bearer abc"
    assert "content-type" not in users.headers
    assert users.body_source is None
    assert root.param_pairs == ()


def test_set_header_twice_keeps_one_value_add_keeps_both():
    setter = get("http://api.test/").set_header("X-Token", "a").set_header("x-token", "b")
    adder = get("http://api.test/").add_header("X-Token", "a").add_header("X-Token", "b")
    assert setter.headers.get_list("X-Token") == ["b"]
    assert adder.headers.get_list("X-Token") == ["a", "b"]


def test_set_param_replaces_and_add_param_appends():
    b = get("http://api.test/").add_param("tag", "a").add_param("tag", "b").set_param("page", "1").set_param("page", "2")
    assert b.param_pairs == (("tag", "a"), ("tag", "b"), ("page", "2"))


def test_explicit_content_type_wins_over_body_default():
    b = post("http://api.test/").set_header("Content-Type", "application/vnd.api+json").json_body({"a": 1})
    assert b.headers.get_list("Content-Type") == ["application/vnd.api+json"]


def test_explicit_content_type_after_body_replaces_default():
    b = post("http://api.test/").json_body({"a": 1}).set_header("Content-Type", "text/json")
    assert b.headers.get_list("Content-Type") == ["text/json"]


def test_body_helpers_set_default_content_types():
    assert post("http://api.test/").json_body([1]).headers["content-type"] == "application/json"
    assert put("http://api.test/").xml_body({"a": "1"}).headers["content-type"] == "application/xml"
    assert patch("http://api.test/").form_body(Form().add("a", "1")).headers["content-type"] == (
        "application/x-www-form-urlencoded"
    )
    assert "content-type" not in post("http://api.test/").body(b"raw").headers


def test_json_body_is_encoded_on_the_derived_builder_only():
    base = post("http://api.test/items")
    derived = base.json_body({"name": "widget", "tags": ["a"]})
    assert base.body_source is None
    assert derived.build().body == b'{"name": "widget", "tags": ["a"]}'


def test_body_accepts_text_bytes_and_streams():
    assert post("http://api.test/").body("héllo").build().body == "héllo".encode()
    assert post("http://api.test/").body(bytearray(b"abc")).build().body == b"abc"
    assert post("http://api.test/").body(io.BytesIO(b"stream")).build().body == b"stream"
    with pytest.raises(TypeError):
        post("http://api.test/").body(12)


def test_unencodable_bodies_raise_encode_error():
    with pytest.raises(EncodeError):
        post("http://api.test/").json_body(object())
    with pytest.raises(EncodeError):
        post("http://api.test/").xml_body(["no", "root"])


def test_form_body_encodes_pairs_in_order():
    form = Form().add("a", "1").add("a", "2").set("b", "x y")
    request = post("http://api.test/login").form_body(form).build()
    assert request.body == b"a=1&a=2&b=x+y"
    assert post("http://api.test/").form_body({"k": ["1", "2"]}).build().body == b"k=1&k=2"


def test_build_appends_params_to_existing_query():
    request = get("http://api.test/search?q=x").add_param("page", "2").add_param("tag", "a b").build()
    assert request.url == "http://api.test/search?q=x&page=2&tag=a+b"
    assert request.method == "GET"


def test_build_without_params_keeps_url():
    assert get("http://api.test/users?id=1").build().url == "http://api.test/users?id=1"


def test_build_copies_headers():
    b = get("http://api.test/").add_header("X-A", "1").add_header("X-A", "2")
    request = b.build()
    request.headers["X-A"] = "3"
    assert b.headers.get_list("X-A") == ["1", "2"]


@pytest.mark.parametrize("url", ["", "not a url", "ftp://files.test/x", "http://api.test:notaport/", "http:///path"])
def test_build_rejects_unusable_urls(url):
    with pytest.raises(UrlParseError):
        get(url).build()


def test_unparseable_url_performs_no_network_call(stub):
    with pytest.raises(UrlParseError):
        get("http://api.test:notaport/", with_client(stub)).do()
    assert stub.requests == []


def test_timeout_is_carried_into_the_built_request():
    assert get("http://api.test/").timeout(2.5).build().timeout == 2.5
    assert get("http://api.test/").build().timeout is None
    with pytest.raises(ValueError):
        get("http://api.test/").timeout(0)


def test_options_configure_the_root_builder(stub):
    hook_before = lambda request: None  # noqa: E731
    hook_after = lambda response: None  # noqa: E731
    ctx = RequestContext(timeout=3)
    b = get("http://api.test/", with_client(stub), with_before(hook_before), with_after(hook_after), with_context(ctx))
    assert b.client is stub
    assert b.before_hooks == (hook_before,)
    assert b.after_hooks == (hook_after,)
    assert b.request_context is ctx


def test_with_client_rejects_none():
    with pytest.raises(ValueError):
        with_client(None)


def test_stream_body_is_read_once_and_resent(stub):
    stub.add("http://api.test/upload", 201)
    b = post("http://api.test/upload", with_client(stub)).body(io.BytesIO(b"payload"))
    assert b.build().body == b"payload"
    b.do()
    b.do()
    assert [request.body for request in stub.requests] == [b"payload", b"payload"]


def test_header_and_param_values_are_stored_as_text():
    b = get("http://api.test/").add_header("X-Retry", 3).set_header("X-Page", 2).add_param("n", 1)
    assert b.header_pairs == (("X-Retry", "3"), ("X-Page", "2"))
    assert b.build().url == "http://api.test/?n=1"
