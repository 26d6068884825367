"""
Cheap look-ahead probes telling the host where a component could start.

Probes are conservative: a reported offset may still fail to tokenize, but
no offset of a valid occurrence is ever skipped.
"""

from __future__ import annotations

import re
from typing import Optional

_BLOCK_START = re.compile(r"^[ \t]*<[A-Z]", re.MULTILINE)
_INLINE_START = re.compile(r"<[A-Z]")


def block_start(remaining: str) -> Optional[int]:
    """Offset of the first line whose first non-blank chars are `<` + uppercase letter."""
    m = _BLOCK_START.search(remaining)
    return m.start() if m else None


def inline_start(remaining: str) -> Optional[int]:
    """Offset of the first `<` followed by an uppercase letter."""
    m = _INLINE_START.search(remaining)
    return m.start() if m else None


__all__ = ["block_start", "inline_start"]
