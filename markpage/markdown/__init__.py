"""
Component-aware markdown tokenizer.

Recognizes capitalized custom tags (`<Alert>…</Alert>`, `<Button/>`) in
markdown source and threads them into the markdown-it-py token stream as
component nodes with typed attributes and re-tokenized children.
"""

from __future__ import annotations

from .attributes import parse_attributes
from .boundary import find_matching_close, match_closing_tag
from .extensions import ExtensionLevel, ExtensionSet, ExtensionSpec, component_extensions
from .html import ComponentPart, HtmlComponent, HtmlComponentParser, ParsedContent, TextPart, code_ranges
from .lexer import ComponentLexer, lex
from .model import (
    AnyNode,
    AttributeDialect,
    AttributeValue,
    BooleanValue,
    CodeRange,
    ComponentOccurrence,
    LexerCfg,
    LiteralValue,
    Node,
    NumberValue,
    StringValue,
    TagSpan,
)
from .protocols import LexerCapability
from .scan import block_start, inline_start
from .tags import TAG_NAME, TagMatch, scan_tag
from .tokenizer import ComponentTokenizer
from .tree import BUILTIN_NODE_TYPES, find_components, iter_nodes, node_to_dict

__all__ = [
    # lexing
    "ComponentLexer",
    "lex",
    "LexerCfg",
    "LexerCapability",
    "ComponentTokenizer",
    "ExtensionLevel",
    "ExtensionSpec",
    "ExtensionSet",
    "component_extensions",
    # pieces
    "parse_attributes",
    "match_closing_tag",
    "find_matching_close",
    "block_start",
    "inline_start",
    "scan_tag",
    "TagMatch",
    "TAG_NAME",
    # nodes
    "Node",
    "ComponentOccurrence",
    "AnyNode",
    "BUILTIN_NODE_TYPES",
    "iter_nodes",
    "find_components",
    "node_to_dict",
    # values
    "AttributeDialect",
    "AttributeValue",
    "StringValue",
    "NumberValue",
    "BooleanValue",
    "LiteralValue",
    "CodeRange",
    "TagSpan",
    # html variant
    "HtmlComponentParser",
    "HtmlComponent",
    "TextPart",
    "ComponentPart",
    "ParsedContent",
    "code_ranges",
]
