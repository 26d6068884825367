"""
Extension descriptors handed to the host lexer.

An extension is a name, a level, a cheap `start` probe and a `tokenizer`
returning an occurrence (whose `raw` length is the consumed length) or None
to let other rules try. Descriptor sets are immutable and built once per lexer.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple

from .model import AttributeDialect, ComponentOccurrence
from .protocols import LexerCapability
from .scan import block_start, inline_start
from .tokenizer import ComponentTokenizer


class ExtensionLevel(str, enum.Enum):
    BLOCK = "block"
    INLINE = "inline"


@dataclass(frozen=True)
class ExtensionSpec:
    """
    Descriptor of one tokenizer extension.
    """
    name: str                                                   # unique rule name
    level: ExtensionLevel
    start: Callable[[str], Optional[int]]                       # offset of a possible match or None
    tokenizer: Callable[[str], Optional[ComponentOccurrence]]   # occurrence at offset 0 or None
    token_type: str = "component"                               # token type pushed to the stream
    window: Optional[int] = None                                # chars the inline host hands to `start`; None = whole remainder


@dataclass(frozen=True)
class ExtensionSet:
    """Immutable, ordered collection of extension descriptors."""
    extensions: Tuple[ExtensionSpec, ...] = ()

    def __post_init__(self):
        names = [ext.name for ext in self.extensions]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate extension names: {names}")

    def __iter__(self) -> Iterator[ExtensionSpec]:
        return iter(self.extensions)

    def __len__(self) -> int:
        return len(self.extensions)

    def for_level(self, level: ExtensionLevel) -> Tuple[ExtensionSpec, ...]:
        return tuple(ext for ext in self.extensions if ext.level == level)

    def names(self) -> List[str]:
        return [ext.name for ext in self.extensions]


def component_extensions(
    lexer: LexerCapability,
    *,
    dialect: AttributeDialect = AttributeDialect.BRACED,
    block: bool = True,
    inline: bool = True,
) -> ExtensionSet:
    """
    Builds the component extension descriptors bound to a lexer.

    Args:
        lexer: Lexer used to re-tokenize nested content (the one the extensions
            are installed into)
        dialect: Attribute syntax
        block: Include the block-level extension
        inline: Include the inline-level extension

    Returns:
        Extension set ready to be installed
    """
    tokenizer = ComponentTokenizer(lexer, dialect)
    specs: List[ExtensionSpec] = []
    if block:
        specs.append(ExtensionSpec(
            name="component",
            level=ExtensionLevel.BLOCK,
            start=block_start,
            tokenizer=tokenizer.tokenize_block,
        ))
    if inline:
        specs.append(ExtensionSpec(
            name="inline_component",
            level=ExtensionLevel.INLINE,
            start=inline_start,
            tokenizer=tokenizer.tokenize_inline,
            window=2,
        ))
    return ExtensionSet(tuple(specs))


__all__ = ["ExtensionLevel", "ExtensionSpec", "ExtensionSet", "component_extensions"]
