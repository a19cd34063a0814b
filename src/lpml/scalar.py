"""Scalar coercion: raw token string → typed Value."""

from __future__ import annotations

import re

from .values import Null, Value, VBool, VFloat, VInt, VList, VMapping, VString

_INT_RE = re.compile(r"^[-+]?\d+$")
_FLOAT_RE = re.compile(r"^[-+]?(\d+\.\d*|\.\d+|\d+(?=[eE]))([eE][-+]?\d+)?$")
_HEX_RE = re.compile(r"^0x[0-9a-fA-F]+$")

_NULLS = ("null", "~", "undefined")
_TRUES = ("true", "yes")
_FALSES = ("false", "no")


def coerce(token: str) -> Value:
    """Convert a raw token to a Value.

    First match wins:

    - ``[a, b]``      → VList (each part coerced)
    - ``{a: 1}``      → VMapping (each value coerced)
    - ``null`` ``~`` ``undefined`` → Null
    - ``true`` ``yes`` / ``false`` ``no`` → VBool
    - ``123``         → VInt
    - ``1.5`` ``2e3`` → VFloat
    - ``0x1F``        → VInt
    - ``"x"`` ``'x'`` → VString, quotes removed
    - anything else   → VString as-is

    Inline lists and mappings split naively on ``,`` and ``:``, so nested
    brackets or quoted commas are not protected.
    """
    if token.startswith("[") and token.endswith("]"):
        return _inline_list(token[1:-1])

    if token.startswith("{") and token.endswith("}"):
        return _inline_mapping(token[1:-1])

    if token in _NULLS:
        return Null
    if token in _TRUES:
        return VBool(True)
    if token in _FALSES:
        return VBool(False)

    if _INT_RE.match(token):
        return VInt(int(token))
    if _FLOAT_RE.match(token):
        return VFloat(float(token))
    if _HEX_RE.match(token):
        return VInt(int(token, 16))

    if len(token) >= 2 and token[0] == token[-1] and token[0] in "\"'":
        return VString(token[1:-1])

    return VString(token)


def _inline_list(inner: str) -> VList:
    parts = (part.strip() for part in inner.split(","))
    return VList([coerce(part) for part in parts if part])


def _inline_mapping(inner: str) -> VMapping:
    entries: dict[str, Value] = {}
    for pair in inner.split(","):
        key, sep, raw = pair.partition(":")
        if not sep:
            continue
        entries[key.strip()] = coerce(raw.strip())
    return VMapping(entries)
