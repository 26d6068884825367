"""
Scanning of a single component tag (`<Name attrs>` or `<Name attrs/>`).

Double-quoted values and braced literals are skipped as a whole, so a `>`
inside them does not end the tag.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from .attributes import matching_brace

TAG_NAME = r"[A-Z][A-Za-z0-9:_-]*"

_TAG_OPEN = re.compile(rf"<(?P<name>{TAG_NAME})(?=[\s/>])")
_TAG_STOP = re.compile(r'[>"{]')


@dataclass(frozen=True)
class TagMatch:
    name: str
    attrs: str          # text between the name and `>` / `/>`
    end: int            # offset after the tag
    self_closing: bool


def _group_end(src: str, pos: int) -> Optional[int]:
    if src[pos] == "{":
        return matching_brace(src, pos)
    close = src.find('"', pos + 1)
    return close if close >= 0 else None


def scan_tag(src: str, pos: int) -> Optional[TagMatch]:
    """
    Matches a component tag starting exactly at `pos`.

    An unbalanced quote or brace is not treated as a group: the tag then ends
    at the next `>`.

    Args:
        src: Source text
        pos: Offset of the `<`

    Returns:
        Tag description, or None when no capitalized tag starts at `pos`
    """
    m = _TAG_OPEN.match(src, pos)
    if m is None:
        return None

    i = m.end()
    while True:
        stop = _TAG_STOP.search(src, i)
        if stop is None:
            return None
        j = stop.start()
        if src[j] == ">":
            break
        group_end = _group_end(src, j)
        if group_end is None:
            j = src.find(">", j)
            if j < 0:
                return None
            break
        i = group_end + 1

    attrs = src[m.end():j]
    stripped = attrs.rstrip()
    self_closing = stripped.endswith("/")
    if self_closing:
        attrs = stripped[:-1]
    return TagMatch(m.group("name"), attrs, j + 1, self_closing)


__all__ = ["TAG_NAME", "TagMatch", "scan_tag"]
