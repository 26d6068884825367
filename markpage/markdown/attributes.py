"""
Attribute parsing for component tags.

Two dialects are supported and selected explicitly:

  • BRACED (default):
      name="text"       → StringValue, taken verbatim
      name={literal}    → JSON literal; falls back to the raw text on error
      name              → BooleanValue(True)

  • LEGACY (the dialect of the rendered-HTML component parser):
      name="text" / name='text' → StringValue
      name=token                → true/false/number coerced, else StringValue
      name                      → BooleanValue(True)

Parsing never raises: anything that does not look like an attribute is skipped.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any, Dict, Optional

from .model import (
    AttributeDialect,
    AttributeValue,
    BooleanValue,
    LiteralValue,
    NumberValue,
    StringValue,
)


_BRACED_KEY = re.compile(r"(?<![\w:-])(?P<key>[A-Za-z_][\w:-]*)(?P<eq>=)?")

_LEGACY_ATTR = re.compile(
    r"(?P<key>\w+)(?:\s*=\s*(?:\"(?P<double>[^\"]*)\"|'(?P<single>[^']*)'|(?P<unquoted>\S+)))?"
)

_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def classify_literal(value: Any) -> AttributeValue:
    """Wraps a decoded JSON literal into the matching AttributeValue variant."""
    # bool is a subclass of int: check it first
    if isinstance(value, bool):
        return BooleanValue(value)
    if isinstance(value, (int, float)):
        return NumberValue(value)
    if isinstance(value, str):
        return StringValue(value)
    return LiteralValue(value)


def _decode_braced(text: str) -> AttributeValue:
    try:
        decoded = json.loads(text)
    except ValueError:
        return StringValue(text)
    # json accepts NaN/Infinity which are not JSON literals
    if isinstance(decoded, float) and not math.isfinite(decoded):
        return StringValue(text)
    return classify_literal(decoded)


def coerce_token(token: str) -> AttributeValue:
    """
    Coerces an unquoted legacy token.

    Args:
        token: Raw token text (no surrounding quotes)

    Returns:
        BooleanValue for true/false, NumberValue for finite decimal numbers,
        StringValue otherwise
    """
    if token == "true":
        return BooleanValue(True)
    if token == "false":
        return BooleanValue(False)
    if _NUMBER.fullmatch(token):
        number = float(token)
        if number.is_integer() and re.fullmatch(r"[+-]?\d+", token):
            return NumberValue(int(token))
        return NumberValue(number)
    return StringValue(token)


def matching_brace(text: str, start: int) -> Optional[int]:
    """
    Finds the `}` balancing the `{` at `start`.

    Braces inside double-quoted strings (with backslash escapes) are not counted.

    Args:
        text: Text to scan
        start: Offset of the opening brace

    Returns:
        Offset of the matching closing brace, or None when input ends first
    """
    depth = 0
    in_string = False
    i = start
    while i < len(text):
        ch = text[i]
        if in_string:
            if ch == "\\":
                i += 1
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return None


def parse_braced_attributes(raw: str) -> Dict[str, AttributeValue]:
    attrs: Dict[str, AttributeValue] = {}
    if not raw or not raw.strip():
        return attrs

    pos = 0
    while True:
        m = _BRACED_KEY.search(raw, pos)
        if m is None:
            break
        key, pos = m.group("key"), m.end()

        if m.group("eq") and raw.startswith('"', pos):
            close = raw.find('"', pos + 1)
            end = len(raw) if close < 0 else close
            attrs[key] = StringValue(raw[pos + 1:end])
            pos = end + 1
        elif m.group("eq") and raw.startswith("{", pos):
            close = matching_brace(raw, pos)
            end = len(raw) if close is None else close
            attrs[key] = _decode_braced(raw[pos + 1:end])
            pos = end + 1
        else:
            # bare name; an unquoted `=value` is not part of this dialect
            attrs[key] = BooleanValue(True)
    return attrs


def parse_legacy_attributes(raw: str) -> Dict[str, AttributeValue]:
    attrs: Dict[str, AttributeValue] = {}
    if not raw or not raw.strip():
        return attrs

    for m in _LEGACY_ATTR.finditer(raw):
        key = m.group("key")
        if m.group("double") is not None:
            attrs[key] = StringValue(m.group("double"))
        elif m.group("single") is not None:
            attrs[key] = StringValue(m.group("single"))
        elif m.group("unquoted") is not None:
            attrs[key] = coerce_token(m.group("unquoted"))
        else:
            attrs[key] = BooleanValue(True)
    return attrs


def parse_attributes(raw: str, dialect: AttributeDialect = AttributeDialect.BRACED) -> Dict[str, AttributeValue]:
    """
    Parses the attribute part of a component tag.

    Args:
        raw: Text between the tag name and the closing `>` / `/>`
        dialect: Attribute syntax to apply

    Returns:
        Mapping attribute name -> typed value; a later duplicate overwrites an earlier one
    """
    if AttributeDialect(dialect) is AttributeDialect.LEGACY:
        return parse_legacy_attributes(raw)
    return parse_braced_attributes(raw)


__all__ = [
    "AttributeDialect",
    "parse_attributes",
    "parse_braced_attributes",
    "parse_legacy_attributes",
    "matching_brace",
    "classify_literal",
    "coerce_token",
]
