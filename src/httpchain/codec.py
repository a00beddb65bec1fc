# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
JSON and XML codecs for request and response bodies.

XML is mapped to plain Python values the same way in both directions:
- child elements become keys, repeated children become lists
- attributes become ``@name`` keys, mixed text becomes ``#text``
- text-only elements become strings, empty elements become None

Decoded values are written into a caller-supplied target: a dict (updated in
place), a list (contents replaced), a dataclass instance (matching fields set)
or any callable, which receives the decoded value.
"""

from __future__ import annotations

import dataclasses
import json
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from typing import Any

from .errors import DecodeError, EncodeError


def _json_default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_json(value: Any) -> bytes:
    try:
        return json.dumps(value, default=_json_default, ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise EncodeError(f"cannot encode JSON body: {exc}") from exc


def decode_json(data: bytes) -> Any:
    try:
        return json.loads(data)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DecodeError(f"invalid JSON body: {exc}") from exc


def encode_xml(value: Any) -> bytes:
    """
    Serialize `value` as an XML document.

    Accepts an Element, a mapping with exactly one top-level key (the root tag),
    or a dataclass instance (rooted at its class name).
    """
    if isinstance(value, ET.Element):
        root = value
    elif dataclasses.is_dataclass(value) and not isinstance(value, type):
        root = _to_element(type(value).__name__, dataclasses.asdict(value))
    elif isinstance(value, Mapping) and len(value) == 1:
        tag = next(iter(value))
        root = _to_element(str(tag), value[tag])
    else:
        raise EncodeError(
            "XML body must be an Element, a dataclass instance or a mapping with exactly one root key, "
            f"got {type(value).__name__}"
        )
    try:
        return ET.tostring(root, encoding="utf-8", xml_declaration=True)
    except (TypeError, ValueError) as exc:
        raise EncodeError(f"cannot encode XML body: {exc}") from exc


def _to_element(tag: str, value: Any) -> ET.Element:
    element = ET.Element(tag)
    if value is None:
        return element
    if isinstance(value, Mapping):
        for key, child in value.items():
            key = str(key)
            if key == "#text":
                element.text = _scalar_text(child)
            elif key.startswith("@"):
                element.set(key[1:], _scalar_text(child))
            elif isinstance(child, (list, tuple)):
                for item in child:
                    element.append(_to_element(key, item))
            else:
                element.append(_to_element(key, child))
    elif isinstance(value, (list, tuple)):
        for item in value:
            element.append(_to_element("item", item))
    else:
        element.text = _scalar_text(value)
    return element


def _scalar_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return "" if value is None else str(value)


def decode_xml(data: bytes) -> Any:
    """Decode an XML document into the root element's value (see module docstring)."""
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise DecodeError(f"invalid XML body: {exc}") from exc
    return _element_value(root)


def _strip_ns(tag: str) -> str:
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def _element_value(element: ET.Element) -> Any:
    result: dict[str, Any] = {}

    for name, attr in element.attrib.items():
        if name.startswith("xmlns") or name.startswith("{"):
            continue
        result[f"@{name}"] = attr

    grouped: dict[str, list[Any]] = {}
    for child in element:
        grouped.setdefault(_strip_ns(child.tag), []).append(_element_value(child))
    for tag, values in grouped.items():
        result[tag] = values if len(values) > 1 else values[0]

    text = (element.text or "").strip()
    if text:
        if not result:
            return text
        result["#text"] = text

    return result or None


def validate_target(target: Any) -> None:
    """Raise TypeError when `target` cannot receive decoded values."""
    if isinstance(target, type):
        raise TypeError(f"decode target must be an instance, not the class {target.__name__}")
    if isinstance(target, (dict, list)):
        return
    if dataclasses.is_dataclass(target) and not isinstance(target, type):
        return
    if callable(target):
        return
    raise TypeError(
        f"unsupported decode target {type(target).__name__}; "
        "use a dict, a list, a dataclass instance or a callable"
    )


def assign(target: Any, value: Any) -> None:
    """Write a decoded value into `target`."""
    if isinstance(target, dict):
        if not isinstance(value, Mapping):
            raise DecodeError(f"cannot decode {type(value).__name__} into dict")
        target.update(value)
    elif isinstance(target, list):
        if not isinstance(value, list):
            raise DecodeError(f"cannot decode {type(value).__name__} into list")
        target[:] = value
    elif dataclasses.is_dataclass(target) and not isinstance(target, type):
        if not isinstance(value, Mapping):
            raise DecodeError(f"cannot decode {type(value).__name__} into {type(target).__name__}")
        for field in dataclasses.fields(target):
            if field.name in value:
                try:
                    setattr(target, field.name, value[field.name])
                except dataclasses.FrozenInstanceError as exc:
                    raise DecodeError(f"cannot decode into frozen {type(target).__name__}") from exc
    else:
        target(value)


__all__ = [
    "assign",
    "decode_json",
    "decode_xml",
    "encode_json",
    "encode_xml",
    "validate_target",
]
