"""
Data model of the component-aware markdown tokenizer.

Node tree produced by the lexer, component occurrences with typed
attribute values, and the small positional value types shared by the
boundary resolver and the HTML component parser.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Iterable, List, Optional, Tuple, Union


# --- helpers ---------------------------------------------------------------
def _assert_only_keys(d: Dict[str, Any] | None, allowed: Iterable[str], *, ctx: str) -> None:
    if d is None:
        return
    allowed_set = set(allowed)
    extra = set(d.keys()) - allowed_set
    if extra:
        raise ValueError(f"{ctx}: unknown key(s): {', '.join(sorted(extra))}")


class AttributeDialect(str, enum.Enum):
    """Attribute syntax accepted inside component tags."""
    BRACED = "braced"
    LEGACY = "legacy"


@dataclass(frozen=True)
class LexerCfg:
    """
    Lexer configuration. Built once per lexer and never mutated.
    """
    # markdown-it preset ("commonmark", "default", "zero", "gfm-like")
    preset: str = "commonmark"
    # extra markdown-it rules to enable on top of the preset
    enable: Tuple[str, ...] = ()
    attribute_dialect: AttributeDialect = AttributeDialect.BRACED
    block_components: bool = True
    inline_components: bool = True

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]]) -> LexerCfg:
        if not d:
            return LexerCfg()
        _assert_only_keys(
            d,
            ["preset", "enable", "attribute_dialect", "block_components", "inline_components"],
            ctx="LexerCfg",
        )

        preset = d.get("preset", "commonmark")
        if not isinstance(preset, str) or not preset:
            raise ValueError("LexerCfg.preset must be a non-empty string")

        enable = d.get("enable") or []
        if isinstance(enable, str):
            enable = [enable]
        if not isinstance(enable, (list, tuple)) or not all(isinstance(x, str) for x in enable):
            raise ValueError("LexerCfg.enable must be a list of rule names")

        raw_dialect = d.get("attribute_dialect", AttributeDialect.BRACED.value)
        try:
            dialect = AttributeDialect(raw_dialect)
        except ValueError:
            allowed = ", ".join(x.value for x in AttributeDialect)
            raise ValueError(f"LexerCfg.attribute_dialect must be one of: {allowed}") from None

        flags = {}
        for key in ("block_components", "inline_components"):
            val = d.get(key, True)
            if not isinstance(val, bool):
                raise ValueError(f"LexerCfg.{key} must be a boolean")
            flags[key] = val

        return LexerCfg(
            preset=preset,
            enable=tuple(enable),
            attribute_dialect=dialect,
            **flags,
        )


# --- attribute values ------------------------------------------------------

@dataclass(frozen=True)
class StringValue:
    """Verbatim string attribute (`name="text"`)."""
    value: str


@dataclass(frozen=True)
class NumberValue:
    """Numeric attribute (`count={1}`, legacy `count=1`)."""
    value: Union[int, float]


@dataclass(frozen=True)
class BooleanValue:
    """Boolean attribute (bare `disabled`, `open={false}`)."""
    value: bool


@dataclass(frozen=True)
class LiteralValue:
    """Structured literal parsed from a braced expression (objects, arrays, null)."""
    value: Any


AttributeValue = Union[StringValue, NumberValue, BooleanValue, LiteralValue]


# --- positions -------------------------------------------------------------

@dataclass(frozen=True)
class CodeRange:
    """Half-open interval [start, end) in a source string."""
    start: int
    end: int

    def contains(self, start: int, end: int) -> bool:
        return self.start <= start and end <= self.end


@dataclass(frozen=True)
class TagSpan:
    """Position of a matched closing tag: `start` is its first char, `end` the offset after it."""
    start: int
    end: int


# --- nodes -----------------------------------------------------------------

@dataclass
class Node:
    """
    Built-in markdown node (heading, paragraph, list, emphasis, link, text, ...).

    Attributes:
        type: markdown-it token type without the `_open` suffix
        tag: HTML tag name the node maps to ("" for text-like nodes)
        content: literal content (text, code, raw html)
        markup: source markup ("**", "-", "```", ...)
        info: fence info string
        attrs: markdown-it attributes (href, src, start, ...)
        children: nested nodes in source order
        line_map: [start_line, end_line) for block nodes
    """
    type: str
    tag: str = ""
    content: str = ""
    markup: str = ""
    info: str = ""
    attrs: Dict[str, Any] = field(default_factory=dict)
    children: List[AnyNode] = field(default_factory=list)
    line_map: Optional[Tuple[int, int]] = None

    @property
    def text(self) -> str:
        """Plain text of the subtree."""
        if not self.children:
            return self.content
        return "".join(child.text for child in self.children)


@dataclass
class ComponentOccurrence:
    """
    A capitalized custom tag recognized in markdown source.

    Attributes:
        name: tag name (`Alert`, `Docs:Button`, ...)
        raw: exact substring consumed from the source
        attributes: attribute name -> typed value (last duplicate wins)
        children: re-tokenized inner content; None for self-closing and
            unterminated occurrences, possibly empty for paired ones
        trailing: text after a block-level closer on its line; the lexer
            emits it as a paragraph after the component
    """
    name: str
    raw: str
    attributes: Dict[str, AttributeValue] = field(default_factory=dict)
    children: Optional[List[AnyNode]] = None
    trailing: str = ""

    type: ClassVar[str] = "component"

    @property
    def self_closing(self) -> bool:
        return self.children is None

    @property
    def props(self) -> Dict[str, Any]:
        """Attribute values unwrapped to plain Python objects."""
        return {key: val.value for key, val in self.attributes.items()}

    @property
    def text(self) -> str:
        if not self.children:
            return ""
        return "".join(child.text for child in self.children)


AnyNode = Union[Node, ComponentOccurrence]


__all__ = [
    "AttributeDialect",
    "LexerCfg",
    "StringValue",
    "NumberValue",
    "BooleanValue",
    "LiteralValue",
    "AttributeValue",
    "CodeRange",
    "TagSpan",
    "Node",
    "ComponentOccurrence",
    "AnyNode",
]
