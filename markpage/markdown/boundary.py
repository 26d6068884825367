"""
Depth-balanced matching of component closing tags.

Only tags with the same name are depth-tracked; nesting of other component
names is handled by re-tokenizing the inner content.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Optional, Pattern, Tuple

from .model import TagSpan


@lru_cache(maxsize=256)
def _tag_patterns(name: str) -> Tuple[Pattern[str], Pattern[str]]:
    escaped = re.escape(name)
    # opening tag of the same name; self-closing forms do not open a level
    open_tag = re.compile(rf'<{escaped}(?:\s(?:"[^"]*"|[^>"])*)?(?<!/)>')
    # plain and HTML-entity-escaped closers are equivalent
    close_tag = re.compile(rf"</{escaped}\s*>|&lt;/{escaped}\s*&gt;")
    return open_tag, close_tag


def match_closing_tag(source: str, name: str, search_from: int) -> Optional[TagSpan]:
    """
    Finds the closing tag that balances an already consumed opening tag.

    Args:
        source: Text to scan
        name: Component tag name
        search_from: Offset right after the consumed opening tag

    Returns:
        Span of the matching closer, or None if input ends at a positive depth
    """
    open_tag, close_tag = _tag_patterns(name)
    depth = 1
    pos = search_from
    while True:
        close_m = close_tag.search(source, pos)
        if close_m is None:
            return None
        open_m = open_tag.search(source, pos, close_m.start())
        if open_m is not None:
            depth += 1
            pos = open_m.end()
            continue
        depth -= 1
        if depth == 0:
            return TagSpan(close_m.start(), close_m.end())
        pos = close_m.end()


def find_matching_close(source: str, name: str, search_from: int) -> Optional[int]:
    """Offset immediately after the matching closing tag, or None when not found."""
    span = match_closing_tag(source, name, search_from)
    return span.end if span is not None else None


__all__ = ["match_closing_tag", "find_matching_close"]
